"""Shared service creation helpers for tools."""

from collections.abc import Awaitable, Callable
from functools import lru_cache

from outlook_accounts_mcp.accounts.registry import AccountRegistry
from outlook_accounts_mcp.auth.session import SessionManager
from outlook_accounts_mcp.auth.token_store import TokenStore
from outlook_accounts_mcp.config import Settings, get_settings_eager
from outlook_accounts_mcp.fanout.aggregator import aggregate, render_reply
from outlook_accounts_mcp.fanout.executor import execute
from outlook_accounts_mcp.graph.client import GraphClient


@lru_cache
def get_settings() -> Settings:
    """Get the validated settings singleton.

    Raises:
        ConfigError: If the configuration is invalid or has no accounts.
    """
    return get_settings_eager()


@lru_cache
def get_account_registry() -> AccountRegistry:
    """Get or create the account registry singleton."""
    return AccountRegistry(get_settings().get_effective_accounts())


@lru_cache
def get_session_manager() -> SessionManager:
    """Get or create the session manager singleton."""
    settings = get_settings()
    return SessionManager(
        get_account_registry(),
        TokenStore(settings.token_cache_path),
        settings.get_server_config(),
        open_browser=settings.open_browser,
    )


def create_graph_client(account: str) -> GraphClient:
    """Create a Graph client authorized by the given account's session."""
    return GraphClient(account, get_session_manager(), base_url=get_settings().graph_base_url)


def list_configured_accounts() -> list[str]:
    """List all configured account names."""
    return get_account_registry().list()


async def run_for_accounts(
    account: str | None,
    operation: Callable[[str], Awaitable[str]],
    *,
    require_target: bool = False,
) -> str:
    """Run a per-account operation on the target account (or all) and merge the replies.

    Args:
        account: Target account name, or None for every configured account.
        operation: Coroutine function producing the text reply of one account.
        require_target: Refuse to fan out when several accounts are configured
            (used by tools that change data).

    Raises:
        AccountNotFoundError: If ``account`` is not configured.
        AccountOperationError: If the only targeted account failed.
        ValueError: If a target is required but missing.
    """
    registry = get_account_registry()
    if require_target and account is None and len(registry) > 1:
        raise ValueError(
            "'account' is required when several accounts are configured "
            f"(available: {', '.join(registry.list())})"
        )
    outcomes = await execute(registry, account, operation)
    return render_reply(aggregate(outcomes))
