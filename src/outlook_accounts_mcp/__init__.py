"""An MCP server for Microsoft Outlook mail and calendar across multiple accounts."""

from outlook_accounts_mcp.accounts import AccountConfig, AccountRegistry, ServerConfig
from outlook_accounts_mcp.auth import SessionManager, TokenRecord, TokenStore
from outlook_accounts_mcp.config import Settings
from outlook_accounts_mcp.fanout import (
    AccountOutcome,
    MultiReply,
    SingleReply,
    aggregate,
    execute,
    render_reply,
)
from outlook_accounts_mcp.graph import GraphClient

__version__ = "0.1.0"

__all__ = [
    "AccountConfig",
    "AccountOutcome",
    "AccountRegistry",
    "GraphClient",
    "MultiReply",
    "ServerConfig",
    "SessionManager",
    "Settings",
    "SingleReply",
    "TokenRecord",
    "TokenStore",
    "aggregate",
    "execute",
    "render_reply",
]
