"""Reply to mail MCP tool."""

from outlook_accounts_mcp.tools._app import mcp
from outlook_accounts_mcp.tools._error_handler import handle_tool_errors
from outlook_accounts_mcp.tools._service import create_graph_client, run_for_accounts


@mcp.tool
@handle_tool_errors
async def outlook_mail_reply(
    message_id: str,
    comment: str,
    account: str | None = None,
    reply_all: bool = False,
) -> str:
    """Reply to an email message.

    Args:
        message_id: Message ID to reply to.
        comment: Reply text.
        account: Account name (required when several accounts are configured).
        reply_all: Reply to all recipients (default: False).
    """

    async def reply(name: str) -> str:
        await create_graph_client(name).reply_to_message(message_id, comment, reply_all)
        target = "all recipients" if reply_all else "the sender"
        return f"Successfully replied to {target} of message {message_id}"

    return await run_for_accounts(account, reply, require_target=True)
