"""Data models for cached tokens and pending logins."""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, field_validator


class TokenRecord(BaseModel):
    """Latest token material for one account.

    Attributes:
        access_token: Bearer token for Microsoft Graph.
        expires_on: Absolute expiry instant (always timezone-aware).
        refresh_token: Handle used for silent refresh, if the provider issued one.
        username: Signed-in identity, used for display only.
    """

    access_token: str
    expires_on: datetime
    refresh_token: str | None = None
    username: str | None = None

    @field_validator("expires_on")
    @classmethod
    def _ensure_aware(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return True if the access token is no longer valid at ``now``."""
        now = now or datetime.now(timezone.utc)
        return self.expires_on <= now

    @classmethod
    def from_token_response(
        cls,
        response: dict[str, Any],
        *,
        previous: "TokenRecord | None" = None,
        now: datetime | None = None,
    ) -> "TokenRecord":
        """Build a record from an MSAL token response.

        The refresh token and username of ``previous`` are kept when the
        response omits them.
        """
        now = now or datetime.now(timezone.utc)
        claims = response.get("id_token_claims") or {}
        username = claims.get("preferred_username") or claims.get("name")
        return cls(
            access_token=response["access_token"],
            expires_on=now + timedelta(seconds=int(response.get("expires_in", 3600))),
            refresh_token=response.get("refresh_token") or (previous and previous.refresh_token),
            username=username or (previous and previous.username),
        )


@dataclass
class PendingLogin:
    """Handle of an interactive login that waits for its redirect.

    ``completion`` resolves with the signed-in identity, or fails with an
    AuthenticationError subclass.
    """

    account: str
    state: str
    authorization_url: str
    completion: "asyncio.Future[str]"


class CallbackOutcome(str, Enum):
    """How a redirect callback was handled."""

    COMPLETED = "completed"
    MISSING_CODE = "missing_code"
    FAILED = "failed"
    UNKNOWN_STATE = "unknown_state"
