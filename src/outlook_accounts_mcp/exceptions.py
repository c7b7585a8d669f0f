"""Custom exceptions for outlook-accounts-mcp."""


class OutlookMCPError(Exception):
    """Base exception for outlook-accounts-mcp."""


class ConfigError(OutlookMCPError):
    """Raised when there is a configuration error."""


class AccountNotFoundError(OutlookMCPError):
    """Raised when a requested account is not configured."""

    def __init__(self, account: str) -> None:
        self.account = account
        super().__init__(f"Account not found: {account}")


class AuthenticationError(OutlookMCPError):
    """Base class for failures of the interactive login or token refresh."""


class MissingAuthorizationCodeError(AuthenticationError):
    """Raised when the OAuth redirect arrives without a ``code`` parameter."""

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        message = "No authorization code received"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class AuthenticationFailedError(AuthenticationError):
    """Raised when the identity provider rejects a token exchange or refresh."""


class AuthenticationTimeoutError(AuthenticationError):
    """Raised when an interactive login is not completed in time."""

    def __init__(self, account: str, timeout: float) -> None:
        self.account = account
        self.timeout = timeout
        super().__init__(
            f"Authentication timeout for account '{account}' after {timeout:g} seconds"
        )


class UnauthenticatedError(OutlookMCPError):
    """Raised when a Graph call is attempted without a valid access token."""

    def __init__(self, account: str) -> None:
        self.account = account
        super().__init__("Authentication required. Please use outlook_auth_login first.")


class DownstreamError(OutlookMCPError):
    """Raised for any Microsoft Graph failure other than an authorization failure."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class AccountOperationError(OutlookMCPError):
    """Raised when the only targeted account fails.

    A multi-account reply reports failures inline instead.
    """

    def __init__(self, account: str, reason: str) -> None:
        self.account = account
        self.reason = reason
        super().__init__(f"[{account}] {reason}")
