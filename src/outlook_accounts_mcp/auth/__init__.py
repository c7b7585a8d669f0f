"""OAuth2 authorization-code login, token caching and silent refresh."""

from outlook_accounts_mcp.auth.callback import CallbackListener
from outlook_accounts_mcp.auth.models import CallbackOutcome, PendingLogin, TokenRecord
from outlook_accounts_mcp.auth.session import SessionManager, build_msal_client
from outlook_accounts_mcp.auth.token_store import TokenStore

__all__ = [
    "CallbackListener",
    "CallbackOutcome",
    "PendingLogin",
    "SessionManager",
    "TokenRecord",
    "TokenStore",
    "build_msal_client",
]
