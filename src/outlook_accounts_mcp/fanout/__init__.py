"""Fan-out across accounts and aggregation of the per-account results."""

from outlook_accounts_mcp.fanout.aggregator import (
    AggregatedReply,
    MultiReply,
    SingleReply,
    aggregate,
    render_reply,
)
from outlook_accounts_mcp.fanout.executor import AccountOutcome, execute, resolve_accounts

__all__ = [
    "AccountOutcome",
    "AggregatedReply",
    "MultiReply",
    "SingleReply",
    "aggregate",
    "execute",
    "render_reply",
    "resolve_accounts",
]
