"""Account and callback server configuration models."""

from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic.alias_generators import to_camel

from outlook_accounts_mcp.defaults import DEFAULT_PORT, DEFAULT_REDIRECT_URI, DEFAULT_TENANT_ID


class AccountConfig(BaseModel):
    """Credentials of one Microsoft identity application registration.

    Attributes:
        name: Unique, stable account name (e.g., "work", "personal").
        tenant_id: Entra ID tenant identifier (default: "common").
        client_id: Application (client) ID.
        client_secret: Client secret of the application.

    Both snake_case and camelCase keys are accepted (``clientId``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    name: str = Field(..., min_length=1, description="Unique account name")
    tenant_id: str = Field(default=DEFAULT_TENANT_ID, min_length=1, description="Tenant ID")
    client_id: str = Field(..., min_length=1, description="Application (client) ID")
    client_secret: SecretStr = Field(..., description="Application client secret")

    @field_validator("name", "client_id")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("client_secret")
    @classmethod
    def _secret_not_blank(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("must not be blank")
        return v


class ServerConfig(BaseModel):
    """Local OAuth redirect listener configuration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, description="Callback listener port")
    redirect_uri: str = Field(
        default=DEFAULT_REDIRECT_URI,
        description="Redirect URI registered with the application",
    )

    @field_validator("redirect_uri")
    @classmethod
    def _validate_redirect_uri(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError("redirect_uri must be an absolute http(s) URL")
        return v

    @property
    def callback_host(self) -> str:
        """Host the callback listener binds to."""
        return urlparse(self.redirect_uri).hostname or "localhost"

    @property
    def callback_path(self) -> str:
        """Request path the identity provider redirects to."""
        return urlparse(self.redirect_uri).path or "/"
