"""Common error handling for MCP tools."""

import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any

from fastmcp.exceptions import ToolError

from outlook_accounts_mcp.exceptions import (
    AccountNotFoundError,
    AccountOperationError,
    AuthenticationError,
    ConfigError,
    DownstreamError,
    UnauthenticatedError,
)

logger = logging.getLogger(__name__)


def handle_tool_errors(func: Callable[..., Awaitable[str]]) -> Callable[..., Awaitable[str]]:
    """Wrap an MCP tool coroutine so failures surface as ToolError with a readable message."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> str:
        try:
            return await func(*args, **kwargs)
        except ToolError:
            raise
        except AccountNotFoundError as e:
            raise ToolError(f"Account not found: {e.account}") from e
        except AccountOperationError as e:
            raise ToolError(str(e)) from e
        except UnauthenticatedError as e:
            raise ToolError(str(e)) from e
        except AuthenticationError as e:
            raise ToolError(f"Authentication failed: {e}") from e
        except DownstreamError as e:
            raise ToolError(f"Microsoft Graph error: {e}") from e
        except ConfigError as e:
            raise ToolError(f"Configuration error: {e}") from e
        except ValueError as e:
            raise ToolError(f"Invalid input: {e}") from e
        except Exception as e:
            logger.exception("Unexpected error in tool %s", func.__name__)
            raise ToolError("Tool execution failed. Check the server logs for details.") from e

    return wrapper
