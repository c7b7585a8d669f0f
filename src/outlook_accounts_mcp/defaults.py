"""Default values shared across outlook-accounts-mcp."""

import os
from pathlib import Path

# Delegated Microsoft Graph permissions requested for every account
GRAPH_SCOPES: list[str] = [
    "User.Read",
    "Mail.Read",
    "Mail.ReadWrite",
    "Mail.Send",
    "Calendars.Read",
    "Calendars.ReadWrite",
]

GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"
AUTHORITY_BASE_URL = "https://login.microsoftonline.com"

DEFAULT_TENANT_ID = "common"
DEFAULT_ACCOUNT_NAME = "Default"
DEFAULT_PORT = 3000
DEFAULT_REDIRECT_URI = "http://localhost:3000/auth/callback"

LOGIN_TIMEOUT_SECONDS = 300.0  # 5 minutes
HTTP_TIMEOUT_SECONDS = 30.0

# Graph returns at most this many items per list request
GRAPH_PAGE_SIZE = 50
MESSAGES_SHOWN = 10
DEFAULT_EVENT_WINDOW_DAYS = 7


def default_token_cache_path() -> Path:
    """Return the default token cache location under the XDG config dir."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config) / "outlook-accounts-mcp" / "tokens.json"
