"""Interactive login MCP tool."""

from outlook_accounts_mcp.tools._app import mcp
from outlook_accounts_mcp.tools._error_handler import handle_tool_errors
from outlook_accounts_mcp.tools._service import get_session_manager, run_for_accounts


@mcp.tool
@handle_tool_errors
async def outlook_auth_login(account: str | None = None) -> str:
    """Authenticate with Microsoft Outlook. Opens a browser for OAuth2 authentication.

    The login completes in the background once the browser redirects back;
    check the result with outlook_auth_status.

    Args:
        account: Account name to log in (default: all configured accounts).
    """
    sessions = get_session_manager()

    async def start(name: str) -> str:
        login = await sessions.start_interactive_login(name)
        return (
            "Opening browser for authentication. Please complete the login process.\n"
            f"If the browser does not open, visit:\n{login.authorization_url}"
        )

    return await run_for_accounts(account, start)
