"""Microsoft Graph client bound to one account."""

from datetime import datetime, timedelta, timezone
from typing import Any, Protocol

import httpx

from outlook_accounts_mcp.defaults import (
    DEFAULT_EVENT_WINDOW_DAYS,
    GRAPH_BASE_URL,
    GRAPH_PAGE_SIZE,
    HTTP_TIMEOUT_SECONDS,
)
from outlook_accounts_mcp.exceptions import DownstreamError, UnauthenticatedError


class TokenProvider(Protocol):
    """Anything that hands out access tokens per account (the SessionManager)."""

    async def get_access_token(self, account: str) -> str | None: ...


def _error_message(response: httpx.Response) -> str:
    """Extract the Graph error message from a failed response."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return response.reason_phrase or f"HTTP {response.status_code}"


def _iso(value: datetime) -> str:
    return value.isoformat(timespec="seconds").replace("+00:00", "Z")


class GraphClient:
    """Calendar and mail operations of Microsoft Graph for one account.

    A token is requested from the provider on every call, so expired
    tokens are refreshed transparently between calls.
    """

    def __init__(
        self,
        account: str,
        tokens: TokenProvider,
        *,
        base_url: str = GRAPH_BASE_URL,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            account: Account whose token authorizes the requests.
            tokens: Source of access tokens.
            base_url: Graph API root.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.account = account
        self._tokens = tokens
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send an authenticated request and decode the JSON response.

        Raises:
            UnauthenticatedError: If no token is available or Graph answers 401.
            DownstreamError: For any other failure.
        """
        token = await self._tokens.get_access_token(self.account)
        if not token:
            raise UnauthenticatedError(self.account)

        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(
                    method,
                    path,
                    params=params,
                    json=json,
                    headers={"Authorization": f"Bearer {token}"},
                )
            except httpx.HTTPError as e:
                raise DownstreamError(f"Request to Microsoft Graph failed: {e}") from e

        if response.status_code == 401:
            raise UnauthenticatedError(self.account)
        if response.is_error:
            raise DownstreamError(_error_message(response), status_code=response.status_code)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def get_user(self) -> dict[str, Any]:
        return await self._request("GET", "/me")

    async def list_calendars(self) -> dict[str, Any]:
        return await self._request("GET", "/me/calendars")

    async def list_calendar_events(
        self,
        calendar_id: str | None = None,
        start_date_time: str | None = None,
        end_date_time: str | None = None,
    ) -> dict[str, Any]:
        """List events between two instants (default: the next 7 days)."""
        now = datetime.now(timezone.utc)
        start = start_date_time or _iso(now)
        end = end_date_time or _iso(now + timedelta(days=DEFAULT_EVENT_WINDOW_DAYS))

        endpoint = f"/me/calendars/{calendar_id}/events" if calendar_id else "/me/events"
        params = {
            "$filter": f"start/dateTime ge '{start}' and end/dateTime le '{end}'",
            "$orderby": "start/dateTime",
            "$top": GRAPH_PAGE_SIZE,
        }
        return await self._request("GET", endpoint, params=params)

    async def create_calendar_event(
        self, event: dict[str, Any], calendar_id: str | None = None
    ) -> dict[str, Any]:
        endpoint = f"/me/calendars/{calendar_id}/events" if calendar_id else "/me/events"
        return await self._request("POST", endpoint, json=event)

    async def update_calendar_event(self, event_id: str, updates: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PATCH", f"/me/events/{event_id}", json=updates)

    async def delete_calendar_event(self, event_id: str) -> None:
        await self._request("DELETE", f"/me/events/{event_id}")

    async def list_mail_folders(self) -> dict[str, Any]:
        return await self._request("GET", "/me/mailFolders")

    async def list_messages(
        self, folder_id: str | None = None, filter: str | None = None
    ) -> dict[str, Any]:
        """List the newest messages of a folder (default: all messages)."""
        endpoint = f"/me/mailFolders/{folder_id}/messages" if folder_id else "/me/messages"
        params: dict[str, Any] = {"$orderby": "receivedDateTime desc", "$top": GRAPH_PAGE_SIZE}
        if filter:
            params["$filter"] = filter
        return await self._request("GET", endpoint, params=params)

    async def get_message(self, message_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/me/messages/{message_id}")

    async def send_mail(self, message: dict[str, Any]) -> None:
        await self._request(
            "POST", "/me/sendMail", json={"message": message, "saveToSentItems": True}
        )

    async def reply_to_message(self, message_id: str, comment: str, reply_all: bool = False) -> None:
        action = "replyAll" if reply_all else "reply"
        await self._request("POST", f"/me/messages/{message_id}/{action}", json={"comment": comment})

    async def move_message(self, message_id: str, destination_folder_id: str) -> dict[str, Any]:
        return await self._request(
            "POST",
            f"/me/messages/{message_id}/move",
            json={"destinationId": destination_folder_id},
        )
