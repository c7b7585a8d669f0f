"""List calendars MCP tool."""

from outlook_accounts_mcp.graph.formatting import format_calendars
from outlook_accounts_mcp.tools._app import mcp
from outlook_accounts_mcp.tools._error_handler import handle_tool_errors
from outlook_accounts_mcp.tools._service import create_graph_client, run_for_accounts


@mcp.tool
@handle_tool_errors
async def outlook_calendar_list(account: str | None = None) -> str:
    """List all calendars for the authenticated user.

    Args:
        account: Account name (default: all configured accounts).
    """

    async def list_calendars(name: str) -> str:
        return format_calendars(await create_graph_client(name).list_calendars())

    return await run_for_accounts(account, list_calendars)
