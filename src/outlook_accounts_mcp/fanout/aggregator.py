"""Merge per-account outcomes into one reply."""

from dataclasses import dataclass, field
from typing import Any, Union

from outlook_accounts_mcp.exceptions import AccountOperationError
from outlook_accounts_mcp.fanout.executor import AccountOutcome


@dataclass(frozen=True)
class SingleReply:
    """Reply of a call that involved exactly one account."""

    account: str
    data: Any


@dataclass(frozen=True)
class MultiReply:
    """Reply of a call across several accounts.

    ``successes`` and ``failures`` are (account, text) pairs in account order.
    """

    successes: list[tuple[str, Any]] = field(default_factory=list)
    failures: list[tuple[str, str]] = field(default_factory=list)


AggregatedReply = Union[SingleReply, MultiReply]


def aggregate(outcomes: list[AccountOutcome[Any]]) -> AggregatedReply:
    """Shape outcomes into a single-account or multi-account reply.

    A lone failed outcome fails the whole call. With several outcomes the
    call always succeeds and failures are reported next to the results.

    Raises:
        AccountOperationError: If there is exactly one outcome and it failed.
    """
    if len(outcomes) == 1:
        outcome = outcomes[0]
        if outcome.error is not None:
            raise AccountOperationError(outcome.account, outcome.error)
        return SingleReply(account=outcome.account, data=outcome.data)

    return MultiReply(
        successes=[(o.account, o.data) for o in outcomes if o.error is None],
        failures=[(o.account, o.error) for o in outcomes if o.error is not None],
    )


def render_reply(reply: AggregatedReply) -> str:
    """Render a reply as text.

    Single replies are returned unwrapped. Multi replies list a
    ``[account]`` block per success, then one per failure.
    """
    if isinstance(reply, SingleReply):
        return str(reply.data)

    blocks = [f"[{account}]\n{data}" for account, data in reply.successes]
    blocks.extend(f"[{account}] Error: {error}" for account, error in reply.failures)
    return "\n\n".join(blocks)
