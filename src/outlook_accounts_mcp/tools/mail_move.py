"""Move mail MCP tool."""

from outlook_accounts_mcp.tools._app import mcp
from outlook_accounts_mcp.tools._error_handler import handle_tool_errors
from outlook_accounts_mcp.tools._service import create_graph_client, run_for_accounts


@mcp.tool
@handle_tool_errors
async def outlook_mail_move(
    message_id: str,
    destination_folder_id: str,
    account: str | None = None,
) -> str:
    """Move an email message to another folder.

    Args:
        message_id: Message ID.
        destination_folder_id: Target folder ID or well-known name (e.g., "archive").
        account: Account name (required when several accounts are configured).
    """

    async def move(name: str) -> str:
        moved = await create_graph_client(name).move_message(message_id, destination_folder_id)
        new_id = (moved or {}).get("id", message_id)
        return f"Moved message to {destination_folder_id} (new ID: {new_id})"

    return await run_for_accounts(account, move, require_target=True)
