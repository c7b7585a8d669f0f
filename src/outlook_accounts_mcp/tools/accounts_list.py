"""List accounts MCP tool."""

from outlook_accounts_mcp.tools._app import mcp
from outlook_accounts_mcp.tools._service import list_configured_accounts


@mcp.tool
def outlook_accounts_list() -> str:
    """List all configured Outlook account names.

    Use this to discover which accounts are available. Every other tool
    accepts an optional ``account`` argument naming one of them; without
    it, read-only tools run against all accounts.
    """
    accounts = list_configured_accounts()
    if not accounts:
        return "No accounts configured."
    return "\n".join(f"- {account}" for account in accounts)
