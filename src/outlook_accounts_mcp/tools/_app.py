"""Shared FastMCP application instance."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastmcp import FastMCP

from outlook_accounts_mcp.tools._service import get_session_manager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Release the OAuth callback listener when the server stops."""
    yield
    if get_session_manager.cache_info().currsize:
        logger.info("Closing pending logins")
        await get_session_manager().aclose()


# Create the shared FastMCP server instance
mcp = FastMCP(name="outlook-accounts-mcp", lifespan=_lifespan)
