"""Create calendar event MCP tool."""

from typing import Any

from outlook_accounts_mcp.graph.formatting import recipients
from outlook_accounts_mcp.tools._app import mcp
from outlook_accounts_mcp.tools._error_handler import handle_tool_errors
from outlook_accounts_mcp.tools._service import create_graph_client, run_for_accounts


def build_event(
    subject: str,
    start_date_time: str,
    end_date_time: str,
    body: str | None = None,
    location: str | None = None,
    attendees: list[str] | None = None,
    is_online_meeting: bool = False,
) -> dict[str, Any]:
    """Build the Graph event resource; times are interpreted as UTC."""
    event: dict[str, Any] = {
        "subject": subject,
        "start": {"dateTime": start_date_time, "timeZone": "UTC"},
        "end": {"dateTime": end_date_time, "timeZone": "UTC"},
    }
    if body:
        event["body"] = {"contentType": "Text", "content": body}
    if location:
        event["location"] = {"displayName": location}
    if attendees:
        event["attendees"] = [
            {**attendee, "type": "required"} for attendee in recipients(attendees)
        ]
    if is_online_meeting:
        event["isOnlineMeeting"] = True
        event["onlineMeetingProvider"] = "teamsForBusiness"
    return event


@mcp.tool
@handle_tool_errors
async def outlook_calendar_event_create(
    subject: str,
    start_date_time: str,
    end_date_time: str,
    account: str | None = None,
    body: str | None = None,
    location: str | None = None,
    attendees: list[str] | None = None,
    is_online_meeting: bool = False,
    calendar_id: str | None = None,
) -> str:
    """Create a new calendar event.

    Args:
        subject: Event subject/title.
        start_date_time: Start date/time in ISO format (UTC).
        end_date_time: End date/time in ISO format (UTC).
        account: Account name (required when several accounts are configured).
        body: Event body/description.
        location: Event location.
        attendees: Attendee email addresses.
        is_online_meeting: Whether to create a Teams online meeting.
        calendar_id: Calendar ID (default: primary calendar).
    """
    if not subject.strip():
        raise ValueError("subject must not be empty")

    event = build_event(
        subject,
        start_date_time,
        end_date_time,
        body=body,
        location=location,
        attendees=attendees,
        is_online_meeting=is_online_meeting,
    )

    async def create(name: str) -> str:
        created = await create_graph_client(name).create_calendar_event(event, calendar_id)
        return f"Successfully created event: {created.get('subject')} (ID: {created.get('id')})"

    return await run_for_accounts(account, create, require_target=True)
