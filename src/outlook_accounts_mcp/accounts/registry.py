"""Read-only registry of the configured accounts."""

from collections.abc import Iterable, Iterator

from outlook_accounts_mcp.accounts.config import AccountConfig
from outlook_accounts_mcp.exceptions import AccountNotFoundError, ConfigError


class AccountRegistry:
    """Holds the accounts loaded at startup.

    The registry is built once and never mutated afterwards. Names are
    unique and keep the order in which they were configured.
    """

    def __init__(self, accounts: Iterable[AccountConfig]) -> None:
        """Initialize the registry.

        Args:
            accounts: Account configurations in configured order.

        Raises:
            ConfigError: If no accounts are given or a name is duplicated.
        """
        by_name: dict[str, AccountConfig] = {}
        for account in accounts:
            if account.name in by_name:
                raise ConfigError(f"Duplicate account name: '{account.name}'")
            by_name[account.name] = account

        if not by_name:
            raise ConfigError("No accounts configured")

        self._accounts = by_name

    def list(self) -> list[str]:
        """Return account names in the order they were configured."""
        return list(self._accounts)

    def get(self, name: str) -> AccountConfig:
        """Get the configuration of an account.

        Raises:
            AccountNotFoundError: If the account name is not configured.
        """
        config = self._accounts.get(name)
        if config is None:
            raise AccountNotFoundError(name)
        return config

    def __contains__(self, name: object) -> bool:
        return name in self._accounts

    def __iter__(self) -> Iterator[AccountConfig]:
        return iter(self._accounts.values())

    def __len__(self) -> int:
        return len(self._accounts)
