"""List mail messages MCP tool."""

from outlook_accounts_mcp.graph.formatting import format_messages
from outlook_accounts_mcp.tools._app import mcp
from outlook_accounts_mcp.tools._error_handler import handle_tool_errors
from outlook_accounts_mcp.tools._service import create_graph_client, run_for_accounts


@mcp.tool
@handle_tool_errors
async def outlook_mail_messages_list(
    account: str | None = None,
    folder_id: str | None = None,
    filter: str | None = None,
) -> str:
    """List mail messages, newest first.

    Args:
        account: Account name (default: all configured accounts).
        folder_id: Folder ID (default: all folders).
        filter: OData filter string (e.g., "isRead eq false").
    """

    async def list_messages(name: str) -> str:
        return format_messages(await create_graph_client(name).list_messages(folder_id, filter))

    return await run_for_accounts(account, list_messages)
