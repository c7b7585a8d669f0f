"""MCP tools registered on the shared FastMCP application."""

# isort: skip_file

from outlook_accounts_mcp.tools._app import mcp

# Import tool modules to trigger registration via decorators
from outlook_accounts_mcp.tools import accounts_list as _accounts_list  # noqa: F401
from outlook_accounts_mcp.tools import auth_login as _auth_login  # noqa: F401
from outlook_accounts_mcp.tools import auth_logout as _auth_logout  # noqa: F401
from outlook_accounts_mcp.tools import auth_status as _auth_status  # noqa: F401
from outlook_accounts_mcp.tools import calendar_event_create as _calendar_event_create  # noqa: F401
from outlook_accounts_mcp.tools import calendar_event_delete as _calendar_event_delete  # noqa: F401
from outlook_accounts_mcp.tools import calendar_event_update as _calendar_event_update  # noqa: F401
from outlook_accounts_mcp.tools import calendar_events_list as _calendar_events_list  # noqa: F401
from outlook_accounts_mcp.tools import calendar_list as _calendar_list  # noqa: F401
from outlook_accounts_mcp.tools import mail_folders_list as _mail_folders_list  # noqa: F401
from outlook_accounts_mcp.tools import mail_message_get as _mail_message_get  # noqa: F401
from outlook_accounts_mcp.tools import mail_messages_list as _mail_messages_list  # noqa: F401
from outlook_accounts_mcp.tools import mail_move as _mail_move  # noqa: F401
from outlook_accounts_mcp.tools import mail_reply as _mail_reply  # noqa: F401
from outlook_accounts_mcp.tools import mail_send as _mail_send  # noqa: F401

__all__ = ["mcp"]
