"""Account configuration and registry."""

from outlook_accounts_mcp.accounts.config import AccountConfig, ServerConfig
from outlook_accounts_mcp.accounts.registry import AccountRegistry

__all__ = [
    "AccountConfig",
    "AccountRegistry",
    "ServerConfig",
]
