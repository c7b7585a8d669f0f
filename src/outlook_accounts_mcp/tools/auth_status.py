"""Authentication status MCP tool."""

from outlook_accounts_mcp.exceptions import DownstreamError, UnauthenticatedError
from outlook_accounts_mcp.graph.formatting import format_user
from outlook_accounts_mcp.tools._app import mcp
from outlook_accounts_mcp.tools._error_handler import handle_tool_errors
from outlook_accounts_mcp.tools._service import create_graph_client, run_for_accounts


@mcp.tool
@handle_tool_errors
async def outlook_auth_status(account: str | None = None) -> str:
    """Check authentication status and get current user info.

    Args:
        account: Account name to check (default: all configured accounts).
    """

    async def status(name: str) -> str:
        try:
            user = await create_graph_client(name).get_user()
        except (UnauthenticatedError, DownstreamError):
            return "Not authenticated. Please use outlook_auth_login first."
        return format_user(user)

    return await run_for_accounts(account, status)
