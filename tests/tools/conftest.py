"""Fixtures for tool tests."""

from collections.abc import Iterator
from unittest.mock import AsyncMock, patch

import pytest

from outlook_accounts_mcp.accounts import AccountRegistry


@pytest.fixture
def use_registry(registry: AccountRegistry) -> Iterator[AccountRegistry]:
    """Serve the two-account registry (work, personal) to the tools."""
    with patch(
        "outlook_accounts_mcp.tools._service.get_account_registry", return_value=registry
    ):
        yield registry


@pytest.fixture
def use_single_registry(single_registry: AccountRegistry) -> Iterator[AccountRegistry]:
    """Serve a registry with only the "work" account to the tools."""
    with patch(
        "outlook_accounts_mcp.tools._service.get_account_registry",
        return_value=single_registry,
    ):
        yield single_registry


@pytest.fixture
def graph_clients() -> dict[str, AsyncMock]:
    """Graph client doubles keyed by account name."""
    return {"work": AsyncMock(name="graph-work"), "personal": AsyncMock(name="graph-personal")}
