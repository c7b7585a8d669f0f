"""Plain-text rendering of Microsoft Graph payloads for tool replies."""

import re
from datetime import datetime
from typing import Any

from outlook_accounts_mcp.defaults import MESSAGES_SHOWN

# Graph emits up to 7 fractional digits; fromisoformat accepts at most 6 before 3.11
_FRACTION = re.compile(r"(\.\d{6})\d+")


def format_datetime(value: str | None) -> str:
    """Render a Graph timestamp as "YYYY-MM-DD HH:MM"."""
    if not value:
        return "Unknown"
    text = _FRACTION.sub(r"\1", value.replace("Z", "+00:00"))
    try:
        return datetime.fromisoformat(text).strftime("%Y-%m-%d %H:%M")
    except ValueError:
        return value


def _address(recipient: dict[str, Any] | None) -> str:
    if not recipient:
        return "Unknown"
    return (recipient.get("emailAddress") or {}).get("address") or "Unknown"


def format_user(user: dict[str, Any]) -> str:
    email = user.get("mail") or user.get("userPrincipalName")
    return f"Authenticated as: {user.get('displayName')} ({email})"


def format_calendars(payload: dict[str, Any]) -> str:
    calendars = payload.get("value", [])
    lines = [
        f"- {cal.get('name')} (ID: {cal.get('id')}, Default: {bool(cal.get('isDefaultCalendar'))})"
        for cal in calendars
    ]
    return f"Found {len(calendars)} calendar(s):\n" + "\n".join(lines)


def format_events(payload: dict[str, Any]) -> str:
    events = payload.get("value", [])
    if not events:
        return "No events found in the specified time range."

    lines = []
    for event in events:
        start = format_datetime((event.get("start") or {}).get("dateTime"))
        end = format_datetime((event.get("end") or {}).get("dateTime"))
        lines.append(f"- {event.get('subject')} ({start} - {end}) [ID: {event.get('id')}]")
    return f"Found {len(events)} event(s):\n" + "\n".join(lines)


def format_folders(payload: dict[str, Any]) -> str:
    folders = payload.get("value", [])
    lines = [
        f"- {folder.get('displayName')} (ID: {folder.get('id')}, "
        f"Items: {folder.get('totalItemCount')})"
        for folder in folders
    ]
    return f"Found {len(folders)} mail folder(s):\n" + "\n".join(lines)


def format_messages(payload: dict[str, Any]) -> str:
    messages = payload.get("value", [])
    if not messages:
        return "No messages found."

    lines = [
        f"- {msg.get('subject')} (From: {_address(msg.get('from'))}, "
        f"Date: {format_datetime(msg.get('receivedDateTime'))}) [ID: {msg.get('id')}]"
        for msg in messages[:MESSAGES_SHOWN]
    ]
    return (
        f"Found {len(messages)} message(s) (showing first {min(len(messages), MESSAGES_SHOWN)}):\n"
        + "\n".join(lines)
    )


def format_message(message: dict[str, Any]) -> str:
    recipients = message.get("toRecipients") or []
    to = ", ".join(_address(r) for r in recipients) or "Unknown"
    body = (message.get("body") or {}).get("content") or "No content"
    return "\n".join(
        [
            f"Subject: {message.get('subject')}",
            f"From: {_address(message.get('from'))}",
            f"To: {to}",
            f"Date: {format_datetime(message.get('receivedDateTime'))}",
            "",
            "Body:",
            body,
        ]
    )


def recipients(addresses: list[str] | None) -> list[dict[str, Any]]:
    """Build Graph recipient objects from plain email addresses."""
    return [{"emailAddress": {"address": address}} for address in addresses or []]
