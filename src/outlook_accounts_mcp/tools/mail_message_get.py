"""Get mail message MCP tool."""

from outlook_accounts_mcp.graph.formatting import format_message
from outlook_accounts_mcp.tools._app import mcp
from outlook_accounts_mcp.tools._error_handler import handle_tool_errors
from outlook_accounts_mcp.tools._service import create_graph_client, run_for_accounts


@mcp.tool
@handle_tool_errors
async def outlook_mail_message_get(message_id: str, account: str | None = None) -> str:
    """Get a specific email message by ID.

    Message IDs belong to one mailbox, so pass the account the ID came from.

    Args:
        message_id: Message ID.
        account: Account name (default: all configured accounts).
    """

    async def get_message(name: str) -> str:
        return format_message(await create_graph_client(name).get_message(message_id))

    return await run_for_accounts(account, get_message)
