"""Tests for configuration settings."""

import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

from outlook_accounts_mcp.config import Settings, YamlConfigSettingsSource, get_settings_eager
from outlook_accounts_mcp.exceptions import ConfigError

MANIFEST = """\
accounts:
  - name: work
    tenantId: contoso.onmicrosoft.com
    clientId: work-client
    clientSecret: work-secret
  - name: personal
    clientId: personal-client
    clientSecret: personal-secret
server:
  port: 8400
  redirectUri: http://localhost:8400/auth/callback
"""


@pytest.fixture
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Run with an empty environment and no config files in reach."""
    monkeypatch.chdir(tmp_path)
    with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path / "xdg")}, clear=True):
        yield tmp_path


class TestSettings:
    def test_defaults(self, isolated: Path) -> None:
        settings = Settings()

        assert settings.accounts == []
        assert settings.open_browser is True
        assert settings.log_level == "INFO"
        assert settings.token_cache_path == isolated / "xdg" / "outlook-accounts-mcp" / "tokens.json"

    def test_env_overrides(self, isolated: Path) -> None:
        env = {
            "OUTLOOK_OPEN_BROWSER": "false",
            "OUTLOOK_LOG_LEVEL": "DEBUG",
            "OUTLOOK_TOKEN_CACHE_PATH": str(isolated / "cache.json"),
        }
        with patch.dict(os.environ, env):
            settings = Settings()

        assert settings.open_browser is False
        assert settings.log_level == "DEBUG"
        assert settings.token_cache_path == isolated / "cache.json"


class TestYamlConfigLoading:
    def test_load_from_config_file_env(self, isolated: Path) -> None:
        config_file = isolated / "custom.yaml"
        config_file.write_text(MANIFEST)

        with patch.dict(os.environ, {"OUTLOOK_CONFIG_FILE": str(config_file)}):
            settings = Settings()

        assert [a.name for a in settings.accounts] == ["work", "personal"]
        assert settings.accounts[0].tenant_id == "contoso.onmicrosoft.com"
        assert settings.accounts[1].tenant_id == "common"
        assert settings.get_server_config().port == 8400

    def test_load_from_current_directory(self, isolated: Path) -> None:
        (isolated / "outlook-mcp.yaml").write_text(MANIFEST)

        settings = Settings()

        assert len(settings.accounts) == 2

    def test_load_from_xdg_config_home(self, isolated: Path) -> None:
        config_dir = isolated / "xdg" / "outlook-accounts-mcp"
        config_dir.mkdir(parents=True)
        (config_dir / "config.yaml").write_text(MANIFEST)

        settings = Settings()

        assert settings.accounts[0].name == "work"

    def test_json_manifest(self, isolated: Path) -> None:
        config_file = isolated / "accounts.json"
        config_file.write_text(
            '{"accounts": [{"name": "a", "clientId": "id", "clientSecret": "s"}]}'
        )

        with patch.dict(os.environ, {"OUTLOOK_CONFIG_FILE": str(config_file)}):
            settings = Settings()

        assert settings.accounts[0].client_id == "id"

    def test_env_wins_over_yaml(self, isolated: Path) -> None:
        (isolated / "outlook-mcp.yaml").write_text(MANIFEST + "log_level: WARNING\n")

        with patch.dict(os.environ, {"OUTLOOK_LOG_LEVEL": "ERROR"}):
            settings = Settings()

        assert settings.log_level == "ERROR"

    def test_invalid_yaml_syntax(self, isolated: Path) -> None:
        (isolated / "outlook-mcp.yaml").write_text("accounts: [unclosed\n")

        with pytest.raises(ConfigError, match="invalid YAML syntax"):
            Settings()

    def test_non_mapping_document(self, isolated: Path) -> None:
        (isolated / "outlook-mcp.yaml").write_text("- just\n- a list\n")

        with pytest.raises(ConfigError, match="expected a mapping"):
            Settings()

    def test_empty_file(self, isolated: Path) -> None:
        (isolated / "outlook-mcp.yaml").write_text("")

        source = YamlConfigSettingsSource(Settings)

        assert source() == {}


class TestEffectiveAccounts:
    def test_manifest_accounts_win(self, isolated: Path) -> None:
        (isolated / "outlook-mcp.yaml").write_text(MANIFEST)
        env = {"OUTLOOK_CLIENT_ID": "legacy", "OUTLOOK_CLIENT_SECRET": "legacy-secret"}

        with patch.dict(os.environ, env):
            accounts = Settings().get_effective_accounts()

        assert [a.name for a in accounts] == ["work", "personal"]

    def test_legacy_variables_create_default_account(self, isolated: Path) -> None:
        env = {
            "OUTLOOK_TENANT_ID": "contoso",
            "OUTLOOK_CLIENT_ID": "legacy-id",
            "OUTLOOK_CLIENT_SECRET": "legacy-secret",
        }
        with patch.dict(os.environ, env):
            accounts = Settings().get_effective_accounts()

        assert len(accounts) == 1
        assert accounts[0].name == "Default"
        assert accounts[0].tenant_id == "contoso"
        assert accounts[0].client_secret.get_secret_value() == "legacy-secret"

    def test_unprefixed_legacy_variables(self, isolated: Path) -> None:
        """Test the bare TENANT_ID/CLIENT_ID/... variables of older deployments."""
        env = {
            "TENANT_ID": "contoso",
            "CLIENT_ID": "bare-id",
            "CLIENT_SECRET": "bare-secret",
            "REDIRECT_URI": "http://localhost:4000/auth/callback",
            "PORT": "4000",
        }
        with patch.dict(os.environ, env):
            settings = Settings()

        accounts = settings.get_effective_accounts()
        assert accounts[0].name == "Default"
        assert accounts[0].tenant_id == "contoso"
        assert accounts[0].client_id == "bare-id"
        assert settings.get_server_config().port == 4000
        assert settings.get_server_config().redirect_uri == "http://localhost:4000/auth/callback"

    def test_prefixed_variables_win(self, isolated: Path) -> None:
        env = {
            "OUTLOOK_CLIENT_ID": "prefixed-id",
            "CLIENT_ID": "bare-id",
            "OUTLOOK_CLIENT_SECRET": "secret",
        }
        with patch.dict(os.environ, env):
            accounts = Settings().get_effective_accounts()

        assert accounts[0].client_id == "prefixed-id"

    def test_legacy_values_from_yaml(self, isolated: Path) -> None:
        (isolated / "outlook-mcp.yaml").write_text("client_id: yaml-id\nclient_secret: yaml-secret\n")

        accounts = Settings().get_effective_accounts()

        assert accounts[0].client_id == "yaml-id"

    def test_legacy_tenant_defaults_to_common(self, isolated: Path) -> None:
        env = {"OUTLOOK_CLIENT_ID": "legacy-id", "OUTLOOK_CLIENT_SECRET": "legacy-secret"}
        with patch.dict(os.environ, env):
            accounts = Settings().get_effective_accounts()

        assert accounts[0].tenant_id == "common"

    def test_partial_legacy_variables(self, isolated: Path) -> None:
        with patch.dict(os.environ, {"OUTLOOK_CLIENT_ID": "legacy-id"}):
            settings = Settings()
            with pytest.raises(ConfigError, match="OUTLOOK_CLIENT_SECRET"):
                settings.get_effective_accounts()

    def test_nothing_configured(self, isolated: Path) -> None:
        assert Settings().get_effective_accounts() == []


class TestServerConfigResolution:
    def test_legacy_overrides(self, isolated: Path) -> None:
        env = {
            "OUTLOOK_PORT": "5000",
            "OUTLOOK_REDIRECT_URI": "http://localhost:5000/cb",
        }
        with patch.dict(os.environ, env):
            server = Settings().get_server_config()

        assert server.port == 5000
        assert server.callback_path == "/cb"

    def test_defaults_without_server_section(self, isolated: Path) -> None:
        server = Settings().get_server_config()

        assert server.port == 3000


class TestGetSettingsEager:
    def test_valid_manifest(self, isolated: Path) -> None:
        (isolated / "outlook-mcp.yaml").write_text(MANIFEST)

        settings = get_settings_eager()

        assert len(settings.accounts) == 2

    def test_no_accounts(self, isolated: Path) -> None:
        with pytest.raises(ConfigError, match="No accounts configured"):
            get_settings_eager()

    def test_duplicate_account_names(self, isolated: Path) -> None:
        (isolated / "outlook-mcp.yaml").write_text(
            "accounts:\n"
            "  - {name: work, clientId: a, clientSecret: x}\n"
            "  - {name: work, clientId: b, clientSecret: y}\n"
        )

        with pytest.raises(ConfigError, match="duplicate account name 'work'"):
            get_settings_eager()

    def test_missing_account_field(self, isolated: Path) -> None:
        (isolated / "outlook-mcp.yaml").write_text(
            "accounts:\n  - {name: work, clientId: a}\n"
        )

        with pytest.raises(ConfigError, match="missing required field"):
            get_settings_eager()

    def test_invalid_port(self, isolated: Path) -> None:
        (isolated / "outlook-mcp.yaml").write_text(MANIFEST.replace("port: 8400", "port: 99999"))

        with pytest.raises(ConfigError, match="Invalid value"):
            get_settings_eager()
