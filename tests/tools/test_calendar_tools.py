"""Tests for the calendar tools."""

from unittest.mock import AsyncMock, patch

import pytest
from fastmcp.exceptions import ToolError

from outlook_accounts_mcp.accounts import AccountRegistry
from outlook_accounts_mcp.exceptions import DownstreamError, UnauthenticatedError
from outlook_accounts_mcp.tools.calendar_event_create import (
    build_event,
    outlook_calendar_event_create,
)
from outlook_accounts_mcp.tools.calendar_event_delete import outlook_calendar_event_delete
from outlook_accounts_mcp.tools.calendar_event_update import outlook_calendar_event_update
from outlook_accounts_mcp.tools.calendar_events_list import outlook_calendar_events_list
from outlook_accounts_mcp.tools.calendar_list import outlook_calendar_list

CALENDARS = {"value": [{"id": "c1", "name": "Calendar", "isDefaultCalendar": True}]}


def _patch_clients(module: str, clients: dict[str, AsyncMock]):  # type: ignore[no-untyped-def]
    return patch(
        f"outlook_accounts_mcp.tools.{module}.create_graph_client",
        side_effect=lambda name: clients[name],
    )


@pytest.mark.asyncio
class TestCalendarList:
    async def test_single_account_unwrapped(
        self, use_single_registry: AccountRegistry, graph_clients: dict[str, AsyncMock]
    ) -> None:
        graph_clients["work"].list_calendars.return_value = CALENDARS

        with _patch_clients("calendar_list", graph_clients):
            result = await outlook_calendar_list.fn()

        assert result.startswith("Found 1 calendar(s):")
        assert "[work]" not in result

    async def test_all_accounts(
        self, use_registry: AccountRegistry, graph_clients: dict[str, AsyncMock]
    ) -> None:
        graph_clients["work"].list_calendars.return_value = CALENDARS
        graph_clients["personal"].list_calendars.return_value = {"value": []}

        with _patch_clients("calendar_list", graph_clients):
            result = await outlook_calendar_list.fn()

        assert result.startswith("[work]\nFound 1 calendar(s):")
        assert "[personal]\nFound 0 calendar(s):" in result

    async def test_partial_failure_reported_inline(
        self, use_registry: AccountRegistry, graph_clients: dict[str, AsyncMock]
    ) -> None:
        graph_clients["work"].list_calendars.side_effect = UnauthenticatedError("work")
        graph_clients["personal"].list_calendars.return_value = CALENDARS

        with _patch_clients("calendar_list", graph_clients):
            result = await outlook_calendar_list.fn()

        assert result.startswith("[personal]\nFound 1 calendar(s):")
        assert result.endswith(
            "[work] Error: Authentication required. Please use outlook_auth_login first."
        )

    async def test_single_account_failure_raises(
        self, use_registry: AccountRegistry, graph_clients: dict[str, AsyncMock]
    ) -> None:
        graph_clients["work"].list_calendars.side_effect = DownstreamError("Throttled", 429)

        with _patch_clients("calendar_list", graph_clients), pytest.raises(
            ToolError, match=r"\[work\] Throttled"
        ):
            await outlook_calendar_list.fn(account="work")

        graph_clients["personal"].list_calendars.assert_not_called()

    async def test_unknown_account(
        self, use_registry: AccountRegistry, graph_clients: dict[str, AsyncMock]
    ) -> None:
        with _patch_clients("calendar_list", graph_clients), pytest.raises(
            ToolError, match="Account not found: nope"
        ):
            await outlook_calendar_list.fn(account="nope")


@pytest.mark.asyncio
class TestCalendarEventsList:
    async def test_passes_range(
        self, use_registry: AccountRegistry, graph_clients: dict[str, AsyncMock]
    ) -> None:
        graph_clients["personal"].list_calendar_events.return_value = {"value": []}

        with _patch_clients("calendar_events_list", graph_clients):
            result = await outlook_calendar_events_list.fn(
                account="personal",
                calendar_id="c1",
                start_date_time="2025-01-01T00:00:00Z",
                end_date_time="2025-01-08T00:00:00Z",
            )

        assert result == "No events found in the specified time range."
        graph_clients["personal"].list_calendar_events.assert_awaited_once_with(
            "c1", "2025-01-01T00:00:00Z", "2025-01-08T00:00:00Z"
        )


class TestBuildEvent:
    def test_minimal(self) -> None:
        event = build_event("Sync", "2025-01-01T10:00:00", "2025-01-01T11:00:00")

        assert event == {
            "subject": "Sync",
            "start": {"dateTime": "2025-01-01T10:00:00", "timeZone": "UTC"},
            "end": {"dateTime": "2025-01-01T11:00:00", "timeZone": "UTC"},
        }

    def test_full(self) -> None:
        event = build_event(
            "Sync",
            "2025-01-01T10:00:00",
            "2025-01-01T11:00:00",
            body="Agenda",
            location="Room 1",
            attendees=["a@b.c"],
            is_online_meeting=True,
        )

        assert event["body"] == {"contentType": "Text", "content": "Agenda"}
        assert event["location"] == {"displayName": "Room 1"}
        assert event["attendees"] == [
            {"emailAddress": {"address": "a@b.c"}, "type": "required"}
        ]
        assert event["isOnlineMeeting"] is True
        assert event["onlineMeetingProvider"] == "teamsForBusiness"


@pytest.mark.asyncio
class TestCalendarEventCreate:
    async def test_creates_on_named_account(
        self, use_registry: AccountRegistry, graph_clients: dict[str, AsyncMock]
    ) -> None:
        graph_clients["work"].create_calendar_event.return_value = {"id": "e1", "subject": "Sync"}

        with _patch_clients("calendar_event_create", graph_clients):
            result = await outlook_calendar_event_create.fn(
                subject="Sync",
                start_date_time="2025-01-01T10:00:00",
                end_date_time="2025-01-01T11:00:00",
                account="work",
            )

        assert result == "Successfully created event: Sync (ID: e1)"
        graph_clients["personal"].create_calendar_event.assert_not_called()

    async def test_requires_account_with_several_configured(
        self, use_registry: AccountRegistry, graph_clients: dict[str, AsyncMock]
    ) -> None:
        with _patch_clients("calendar_event_create", graph_clients), pytest.raises(
            ToolError, match="'account' is required"
        ):
            await outlook_calendar_event_create.fn(
                subject="Sync",
                start_date_time="2025-01-01T10:00:00",
                end_date_time="2025-01-01T11:00:00",
            )

        graph_clients["work"].create_calendar_event.assert_not_called()
        graph_clients["personal"].create_calendar_event.assert_not_called()

    async def test_single_account_needs_no_target(
        self, use_single_registry: AccountRegistry, graph_clients: dict[str, AsyncMock]
    ) -> None:
        graph_clients["work"].create_calendar_event.return_value = {"id": "e1", "subject": "Sync"}

        with _patch_clients("calendar_event_create", graph_clients):
            result = await outlook_calendar_event_create.fn(
                subject="Sync",
                start_date_time="2025-01-01T10:00:00",
                end_date_time="2025-01-01T11:00:00",
            )

        assert "Successfully created event" in result

    async def test_blank_subject(self, use_single_registry: AccountRegistry) -> None:
        with pytest.raises(ToolError, match="Invalid input"):
            await outlook_calendar_event_create.fn(
                subject="  ",
                start_date_time="2025-01-01T10:00:00",
                end_date_time="2025-01-01T11:00:00",
            )


@pytest.mark.asyncio
class TestCalendarEventUpdate:
    async def test_sends_only_given_fields(
        self, use_single_registry: AccountRegistry, graph_clients: dict[str, AsyncMock]
    ) -> None:
        graph_clients["work"].update_calendar_event.return_value = {"id": "e1", "subject": "New"}

        with _patch_clients("calendar_event_update", graph_clients):
            result = await outlook_calendar_event_update.fn(
                event_id="e1", subject="New", location="Room 2"
            )

        assert result == "Successfully updated event: New (ID: e1)"
        graph_clients["work"].update_calendar_event.assert_awaited_once_with(
            "e1", {"subject": "New", "location": {"displayName": "Room 2"}}
        )

    async def test_nothing_to_update(self, use_single_registry: AccountRegistry) -> None:
        with pytest.raises(ToolError, match="no fields to update"):
            await outlook_calendar_event_update.fn(event_id="e1")


@pytest.mark.asyncio
class TestCalendarEventDelete:
    async def test_deletes(
        self, use_registry: AccountRegistry, graph_clients: dict[str, AsyncMock]
    ) -> None:
        with _patch_clients("calendar_event_delete", graph_clients):
            result = await outlook_calendar_event_delete.fn(event_id="e1", account="personal")

        assert result == "Successfully deleted event e1"
        graph_clients["personal"].delete_calendar_event.assert_awaited_once_with("e1")
