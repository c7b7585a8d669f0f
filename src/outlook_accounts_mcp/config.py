"""Configuration settings for outlook-accounts-mcp using pydantic-settings."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_core import ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from outlook_accounts_mcp.accounts.config import AccountConfig, ServerConfig
from outlook_accounts_mcp.defaults import (
    DEFAULT_ACCOUNT_NAME,
    DEFAULT_TENANT_ID,
    GRAPH_BASE_URL,
    default_token_cache_path,
)
from outlook_accounts_mcp.exceptions import ConfigError

ENV_PREFIX = "OUTLOOK_"


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source that loads configuration from a YAML file.

    Looks for config file in the following order:
    1. OUTLOOK_CONFIG_FILE environment variable
    2. ./outlook-mcp.yaml (current directory)
    3. $XDG_CONFIG_HOME/outlook-accounts-mcp/config.yaml (defaults to ~/.config)

    JSON manifests are valid YAML, so a ``.json`` file works as well.
    """

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML config."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load and cache YAML config file."""
        if not hasattr(self, "_yaml_data"):
            self._yaml_data = self._read_yaml_file()
        return self._yaml_data

    def _read_yaml_file(self) -> dict[str, Any]:
        """Read YAML config from the first existing candidate path."""
        xdg_config = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        config_paths = [
            os.environ.get(f"{ENV_PREFIX}CONFIG_FILE"),
            Path.cwd() / "outlook-mcp.yaml",
            Path(xdg_config) / "outlook-accounts-mcp" / "config.yaml",
        ]

        for path in config_paths:
            if not path:
                continue
            path_obj = Path(path)
            if not path_obj.exists():
                continue
            try:
                with open(path_obj) as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                mark = getattr(e, "problem_mark", None)
                location = f" at line {mark.line + 1}" if mark else ""
                raise ConfigError(
                    f"Configuration error in {path_obj}{location}: invalid YAML syntax"
                ) from e
            except OSError as e:
                raise ConfigError(f"Cannot read config file {path_obj}: {e}") from e

            if data is None:
                return {}
            if not isinstance(data, dict):
                raise ConfigError(f"Configuration error in {path_obj}: expected a mapping")
            return data

        return {}


def _legacy_alias(field_name: str) -> AliasChoices:
    """Accept OUTLOOK_<NAME>, the bare <NAME> variable and the field name itself."""
    return AliasChoices(f"{ENV_PREFIX}{field_name.upper()}", field_name.upper(), field_name)


def _parse_validation_error(error: ValidationError) -> str:
    """Convert Pydantic ValidationError to user-friendly message."""
    errors = error.errors()
    if not errors:
        return "Unknown validation error"

    err = errors[0]
    loc = err.get("loc", ())
    msg = err.get("msg", "")
    error_type = err.get("type", "")

    if error_type == "missing" and loc:
        field_name = str(loc[-1])
        if "accounts" in [str(part) for part in loc]:
            return (
                f"Account is missing required field '{field_name}'. "
                "Required fields for accounts: name, clientId, clientSecret"
            )
        return f"Missing required field '{field_name}'"

    if loc:
        field_name = ".".join(str(part) for part in loc)
        return f"Invalid value for '{field_name}': {msg}"

    return str(error)


class Settings(BaseSettings):
    """Application settings loaded from environment variables with OUTLOOK_ prefix.

    Multi-account configuration via YAML (or JSON) file:
        accounts:
          - name: "work"
            tenantId: "contoso.onmicrosoft.com"
            clientId: "..."
            clientSecret: "..."
        server:
          port: 3000
          redirectUri: "http://localhost:3000/auth/callback"

    Without an ``accounts`` list, the single-account variables
    OUTLOOK_TENANT_ID, OUTLOOK_CLIENT_ID, OUTLOOK_CLIENT_SECRET,
    OUTLOOK_REDIRECT_URI and OUTLOOK_PORT define an account named "Default".
    The same variables without the prefix (CLIENT_ID, ...) are accepted too;
    the prefixed ones win.
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    # Multi-account configuration
    accounts: list[AccountConfig] = []
    server: ServerConfig | None = None

    # Legacy single-account configuration; the unprefixed names are also read
    tenant_id: str | None = Field(default=None, validation_alias=_legacy_alias("tenant_id"))
    client_id: str | None = Field(default=None, validation_alias=_legacy_alias("client_id"))
    client_secret: SecretStr | None = Field(
        default=None, validation_alias=_legacy_alias("client_secret")
    )
    redirect_uri: str | None = Field(
        default=None, validation_alias=_legacy_alias("redirect_uri")
    )
    port: int | None = Field(default=None, validation_alias=_legacy_alias("port"))

    token_cache_path: Path = Field(default_factory=default_token_cache_path)
    open_browser: bool = True
    log_level: str = "INFO"
    graph_base_url: str = GRAPH_BASE_URL

    @field_validator("accounts")
    @classmethod
    def _validate_unique_names(cls, v: list[AccountConfig]) -> list[AccountConfig]:
        seen: set[str] = set()
        for account in v:
            if account.name in seen:
                raise ValueError(f"duplicate account name '{account.name}'")
            seen.add(account.name)
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
            dotenv_settings,
            file_secret_settings,
        )

    def get_effective_accounts(self) -> list[AccountConfig]:
        """Return the configured accounts.

        The ``accounts`` list wins; otherwise the legacy single-account
        settings are synthesized into one account named "Default".

        Raises:
            ConfigError: If the legacy settings are only partially set.
        """
        if self.accounts:
            return list(self.accounts)

        if not (self.client_id or self.client_secret):
            return []

        missing = [
            f"{ENV_PREFIX}{name.upper()}"
            for name, value in (("client_id", self.client_id), ("client_secret", self.client_secret))
            if not value
        ]
        if missing:
            raise ConfigError(f"Missing required environment variable: {', '.join(missing)}")

        return [
            AccountConfig(
                name=DEFAULT_ACCOUNT_NAME,
                tenant_id=self.tenant_id or DEFAULT_TENANT_ID,
                client_id=self.client_id,  # type: ignore[arg-type]
                client_secret=self.client_secret,  # type: ignore[arg-type]
            )
        ]

    def get_server_config(self) -> ServerConfig:
        """Return the callback listener config, applying legacy overrides."""
        server = self.server or ServerConfig()
        overrides: dict[str, Any] = {}
        if self.redirect_uri:
            overrides["redirect_uri"] = self.redirect_uri
        if self.port:
            overrides["port"] = self.port
        if not overrides:
            return server
        return ServerConfig(**{**server.model_dump(), **overrides})


def get_settings_eager() -> Settings:
    """Load settings with eager validation at startup.

    This function validates configuration immediately, failing fast with
    clear error messages if the configuration is invalid.

    Raises:
        ConfigError: If configuration is invalid or no account is configured.
    """
    try:
        settings = Settings()
        accounts = settings.get_effective_accounts()
        settings.get_server_config()
    except ValidationError as e:
        raise ConfigError(_parse_validation_error(e)) from e

    if not accounts:
        raise ConfigError(
            "No accounts configured. Set either multi-account configuration via "
            "YAML config file, or environment variables "
            f"({ENV_PREFIX}TENANT_ID, {ENV_PREFIX}CLIENT_ID, {ENV_PREFIX}CLIENT_SECRET)."
        )
    return settings
