"""Send mail MCP tool."""

from typing import Any

from outlook_accounts_mcp.graph.formatting import recipients
from outlook_accounts_mcp.tools._app import mcp
from outlook_accounts_mcp.tools._error_handler import handle_tool_errors
from outlook_accounts_mcp.tools._service import create_graph_client, run_for_accounts


def build_message(
    to: list[str],
    subject: str,
    body: str,
    cc: list[str] | None = None,
    bcc: list[str] | None = None,
    is_html: bool = False,
) -> dict[str, Any]:
    """Build the Graph message resource."""
    message: dict[str, Any] = {
        "subject": subject,
        "body": {"contentType": "HTML" if is_html else "Text", "content": body},
        "toRecipients": recipients(to),
    }
    if cc:
        message["ccRecipients"] = recipients(cc)
    if bcc:
        message["bccRecipients"] = recipients(bcc)
    return message


@mcp.tool
@handle_tool_errors
async def outlook_mail_send(
    to: list[str],
    subject: str,
    body: str,
    account: str | None = None,
    cc: list[str] | None = None,
    bcc: list[str] | None = None,
    is_html: bool = False,
) -> str:
    """Send an email message.

    Args:
        to: Recipient email addresses.
        subject: Email subject.
        body: Email body (HTML supported with is_html).
        account: Account to send from (required when several accounts are configured).
        cc: CC recipient email addresses.
        bcc: BCC recipient email addresses.
        is_html: Whether the body is HTML (default: False).
    """
    if not to:
        raise ValueError("at least one recipient is required")

    message = build_message(to, subject, body, cc=cc, bcc=bcc, is_html=is_html)

    async def send(name: str) -> str:
        await create_graph_client(name).send_mail(message)
        return f"Successfully sent email: {subject}"

    return await run_for_accounts(account, send, require_target=True)
