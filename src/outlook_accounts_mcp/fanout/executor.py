"""Run one operation against many accounts concurrently."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from outlook_accounts_mcp.accounts.registry import AccountRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")

AccountOperation = Callable[[str], Awaitable[T]]


@dataclass(frozen=True)
class AccountOutcome(Generic[T]):
    """Result of an operation for one account: either data or an error message."""

    account: str
    data: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def resolve_accounts(registry: AccountRegistry, account: str | None) -> list[str]:
    """Return the accounts a call targets: the named one, or all of them.

    Raises:
        AccountNotFoundError: If ``account`` is not configured.
    """
    if account is None:
        return registry.list()
    registry.get(account)
    return [account]


def _describe(error: Exception) -> str:
    return str(error) or type(error).__name__


async def _run_one(account: str, operation: AccountOperation[T]) -> AccountOutcome[T]:
    try:
        data = await operation(account)
    except Exception as e:
        logger.warning("Operation failed for account %s: %s", account, _describe(e))
        return AccountOutcome(account=account, error=_describe(e))
    return AccountOutcome(account=account, data=data)


async def execute(
    registry: AccountRegistry,
    account: str | None,
    operation: AccountOperation[T],
) -> list[AccountOutcome[T]]:
    """Run ``operation`` for the target account, or for every configured account.

    Operations run concurrently and every one of them settles: a failing
    account never cancels the others. Failures are captured in the
    outcome's ``error``; outcomes keep the registry order.

    Args:
        registry: Configured accounts.
        account: Target account name, or None for all accounts.
        operation: Coroutine function called with the account name.

    Raises:
        AccountNotFoundError: If ``account`` is not configured. Raised
            before any operation starts.
    """
    accounts = resolve_accounts(registry, account)
    return list(await asyncio.gather(*(_run_one(name, operation) for name in accounts)))
