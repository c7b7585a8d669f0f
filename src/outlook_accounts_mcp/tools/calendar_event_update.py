"""Update calendar event MCP tool."""

from typing import Any

from outlook_accounts_mcp.tools._app import mcp
from outlook_accounts_mcp.tools._error_handler import handle_tool_errors
from outlook_accounts_mcp.tools._service import create_graph_client, run_for_accounts


@mcp.tool
@handle_tool_errors
async def outlook_calendar_event_update(
    event_id: str,
    account: str | None = None,
    subject: str | None = None,
    body: str | None = None,
    start_date_time: str | None = None,
    end_date_time: str | None = None,
    location: str | None = None,
) -> str:
    """Update fields of an existing calendar event.

    Args:
        event_id: Event ID.
        account: Account name (required when several accounts are configured).
        subject: New subject.
        body: New body text.
        start_date_time: New start date/time in ISO format (UTC).
        end_date_time: New end date/time in ISO format (UTC).
        location: New location.
    """
    updates: dict[str, Any] = {}
    if subject:
        updates["subject"] = subject
    if body:
        updates["body"] = {"contentType": "Text", "content": body}
    if start_date_time:
        updates["start"] = {"dateTime": start_date_time, "timeZone": "UTC"}
    if end_date_time:
        updates["end"] = {"dateTime": end_date_time, "timeZone": "UTC"}
    if location:
        updates["location"] = {"displayName": location}
    if not updates:
        raise ValueError("no fields to update")

    async def update(name: str) -> str:
        updated = await create_graph_client(name).update_calendar_event(event_id, updates)
        return f"Successfully updated event: {updated.get('subject')} (ID: {updated.get('id')})"

    return await run_for_accounts(account, update, require_target=True)
