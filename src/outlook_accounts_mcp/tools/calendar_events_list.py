"""List calendar events MCP tool."""

from outlook_accounts_mcp.graph.formatting import format_events
from outlook_accounts_mcp.tools._app import mcp
from outlook_accounts_mcp.tools._error_handler import handle_tool_errors
from outlook_accounts_mcp.tools._service import create_graph_client, run_for_accounts


@mcp.tool
@handle_tool_errors
async def outlook_calendar_events_list(
    account: str | None = None,
    calendar_id: str | None = None,
    start_date_time: str | None = None,
    end_date_time: str | None = None,
) -> str:
    """List calendar events within a date range.

    Args:
        account: Account name (default: all configured accounts).
        calendar_id: Calendar ID (default: primary calendar).
        start_date_time: Start date/time in ISO format (default: now).
        end_date_time: End date/time in ISO format (default: 7 days from now).
    """

    async def list_events(name: str) -> str:
        events = await create_graph_client(name).list_calendar_events(
            calendar_id, start_date_time, end_date_time
        )
        return format_events(events)

    return await run_for_accounts(account, list_events)
