"""Logout MCP tool."""

from outlook_accounts_mcp.tools._app import mcp
from outlook_accounts_mcp.tools._error_handler import handle_tool_errors
from outlook_accounts_mcp.tools._service import get_session_manager


@mcp.tool
@handle_tool_errors
async def outlook_auth_logout(account: str | None = None) -> str:
    """Sign out by deleting cached tokens.

    Args:
        account: Account name to sign out (default: all configured accounts).
    """
    get_session_manager().logout(account)
    if account is None:
        return "Cleared cached tokens for all accounts."
    return f"Cleared cached tokens for account '{account}'."
