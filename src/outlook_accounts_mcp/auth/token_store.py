"""File-backed per-account token cache."""

import json
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from outlook_accounts_mcp.auth.models import TokenRecord

logger = structlog.get_logger()


class TokenStore:
    """Durable cache of the latest TokenRecord per account name.

    All records live in one JSON document. Every mutation re-reads the
    file and rewrites it whole. There is no locking between processes:
    the last writer wins.
    """

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON cache file. Created on first write.
        """
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def get(self, account: str) -> TokenRecord | None:
        """Return the cached record for an account, if any."""
        return self._load().get(account)

    def put(self, account: str, record: TokenRecord) -> None:
        """Store or overwrite the record for an account."""
        records = self._load()
        records[account] = record
        self._save(records)

    def delete(self, account: str | None = None) -> None:
        """Delete the record of one account, or every record if ``account`` is None.

        Deleting an account without a record is a no-op.
        """
        if account is None:
            if self._path.exists():
                self._save({})
            return

        records = self._load()
        if records.pop(account, None) is not None:
            self._save(records)

    def accounts(self) -> list[str]:
        """Return the names of all accounts with a cached record."""
        return list(self._load())

    def _load(self) -> dict[str, TokenRecord]:
        """Read the cache file. Unreadable or corrupt content counts as empty."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning("Cannot read token cache", path=str(self._path), error=str(e))
            return {}

        try:
            data: Any = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Token cache is corrupt, ignoring it", path=str(self._path))
            return {}

        if not isinstance(data, dict):
            logger.warning("Token cache has unexpected format, ignoring it", path=str(self._path))
            return {}

        records: dict[str, TokenRecord] = {}
        for account, entry in data.items():
            try:
                records[account] = TokenRecord.model_validate(entry)
            except ValidationError:
                logger.warning("Skipping invalid token cache entry", account=account)
        return records

    def _save(self, records: dict[str, TokenRecord]) -> None:
        payload = {account: record.model_dump(mode="json") for account, record in records.items()}
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            self._path.chmod(0o600)
        except OSError as e:
            logger.error("Failed to save token cache", path=str(self._path), error=str(e))
