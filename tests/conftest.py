"""Shared fixtures."""

import socket
from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest
from pydantic import SecretStr

from outlook_accounts_mcp.accounts import AccountConfig, AccountRegistry, ServerConfig
from outlook_accounts_mcp.tools import _service


def make_account(name: str) -> AccountConfig:
    return AccountConfig(
        name=name,
        tenant_id="common",
        client_id=f"{name}-client",
        client_secret=SecretStr(f"{name}-secret"),
    )


@pytest.fixture
def work_account() -> AccountConfig:
    return make_account("work")


@pytest.fixture
def registry() -> AccountRegistry:
    return AccountRegistry([make_account("work"), make_account("personal")])


@pytest.fixture
def single_registry() -> AccountRegistry:
    return AccountRegistry([make_account("work")])


@pytest.fixture
def free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return int(sock.getsockname()[1])


@pytest.fixture
def server_config(free_port: int) -> ServerConfig:
    return ServerConfig(
        port=free_port,
        redirect_uri=f"http://127.0.0.1:{free_port}/auth/callback",
    )


@pytest.fixture
def msal_clients() -> dict[str, MagicMock]:
    """MSAL client doubles keyed by account name, filled by ``client_factory``."""
    return {}


@pytest.fixture
def client_factory(msal_clients: dict[str, MagicMock]):  # type: ignore[no-untyped-def]
    def factory(account: AccountConfig) -> MagicMock:
        client = MagicMock(name=f"msal-{account.name}")
        client.get_authorization_request_url.side_effect = (
            lambda scopes, state, redirect_uri: (
                f"https://login.example/authorize?client_id={account.client_id}&state={state}"
            )
        )
        msal_clients[account.name] = client
        return client

    return factory


@pytest.fixture(autouse=True)
def _clear_service_caches() -> Iterator[None]:
    yield
    _service.get_settings.cache_clear()
    _service.get_account_registry.cache_clear()
    _service.get_session_manager.cache_clear()
