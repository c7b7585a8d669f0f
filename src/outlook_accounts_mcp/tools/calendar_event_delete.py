"""Delete calendar event MCP tool."""

from outlook_accounts_mcp.tools._app import mcp
from outlook_accounts_mcp.tools._error_handler import handle_tool_errors
from outlook_accounts_mcp.tools._service import create_graph_client, run_for_accounts


@mcp.tool
@handle_tool_errors
async def outlook_calendar_event_delete(event_id: str, account: str | None = None) -> str:
    """Delete a calendar event.

    Args:
        event_id: Event ID.
        account: Account name (required when several accounts are configured).
    """

    async def delete(name: str) -> str:
        await create_graph_client(name).delete_calendar_event(event_id)
        return f"Successfully deleted event {event_id}"

    return await run_for_accounts(account, delete, require_target=True)
