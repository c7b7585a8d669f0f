"""List mail folders MCP tool."""

from outlook_accounts_mcp.graph.formatting import format_folders
from outlook_accounts_mcp.tools._app import mcp
from outlook_accounts_mcp.tools._error_handler import handle_tool_errors
from outlook_accounts_mcp.tools._service import create_graph_client, run_for_accounts


@mcp.tool
@handle_tool_errors
async def outlook_mail_folders_list(account: str | None = None) -> str:
    """List all mail folders.

    Args:
        account: Account name (default: all configured accounts).
    """

    async def list_folders(name: str) -> str:
        return format_folders(await create_graph_client(name).list_mail_folders())

    return await run_for_accounts(account, list_folders)
