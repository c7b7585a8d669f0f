"""Per-account authentication sessions.

Owns one MSAL confidential client per configured account, hands out
access tokens (refreshing them silently when they expire) and drives the
interactive authorization-code login through the local callback listener.
"""

import asyncio
import secrets
import webbrowser
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

import msal
import structlog

from outlook_accounts_mcp.accounts.config import AccountConfig, ServerConfig
from outlook_accounts_mcp.accounts.registry import AccountRegistry
from outlook_accounts_mcp.auth.callback import CallbackListener
from outlook_accounts_mcp.auth.models import CallbackOutcome, PendingLogin, TokenRecord
from outlook_accounts_mcp.auth.token_store import TokenStore
from outlook_accounts_mcp.defaults import AUTHORITY_BASE_URL, GRAPH_SCOPES, LOGIN_TIMEOUT_SECONDS
from outlook_accounts_mcp.exceptions import (
    AuthenticationError,
    AuthenticationFailedError,
    AuthenticationTimeoutError,
    MissingAuthorizationCodeError,
)

logger = structlog.get_logger()

ClientFactory = Callable[[AccountConfig], msal.ConfidentialClientApplication]


def build_msal_client(account: AccountConfig) -> msal.ConfidentialClientApplication:
    """Create the MSAL confidential client for an account."""
    return msal.ConfidentialClientApplication(
        client_id=account.client_id,
        client_credential=account.client_secret.get_secret_value(),
        authority=f"{AUTHORITY_BASE_URL}/{account.tenant_id}",
    )


def _describe_error(response: Mapping[str, Any]) -> str:
    """Extract the provider's error message from an MSAL response."""
    return str(response.get("error_description") or response.get("error") or "Unknown error")


@dataclass
class _PendingFlow:
    account: str
    future: "asyncio.Future[str]"
    timer: asyncio.TimerHandle


class SessionManager:
    """Token access and interactive login for every configured account.

    All interactive logins share one callback listener on the configured
    port. Concurrent logins are told apart by their ``state`` value, which
    is the account name, or the account name plus a nonce when a login for
    that account is already waiting.
    """

    def __init__(
        self,
        registry: AccountRegistry,
        token_store: TokenStore,
        server_config: ServerConfig,
        *,
        client_factory: ClientFactory = build_msal_client,
        login_timeout: float = LOGIN_TIMEOUT_SECONDS,
        open_browser: bool = True,
    ) -> None:
        """Initialize the session manager.

        Args:
            registry: Configured accounts.
            token_store: Cache of the latest token per account.
            server_config: Redirect URI and callback listener port.
            client_factory: Builds the authentication client of an account.
            login_timeout: Seconds an interactive login may wait for its redirect.
            open_browser: Open the authorization URL in the default browser.
        """
        self._registry = registry
        self._store = token_store
        self._server_config = server_config
        self._login_timeout = login_timeout
        self._open_browser = open_browser
        self._clients: Mapping[str, msal.ConfidentialClientApplication] = MappingProxyType(
            {account.name: client_factory(account) for account in registry}
        )
        self._pending: dict[str, _PendingFlow] = {}
        self._listener: CallbackListener | None = None
        self._listener_lock = asyncio.Lock()

    @property
    def is_listening(self) -> bool:
        """Return True while the callback listener is bound."""
        return self._listener is not None and self._listener.is_serving

    def pending_states(self) -> list[str]:
        """Return the state values of all logins waiting for a redirect."""
        return list(self._pending)

    async def get_access_token(self, account: str) -> str | None:
        """Return a valid access token for an account, or None.

        An unexpired cached token is returned without any network call. An
        expired token with a refresh token is refreshed once; refresh
        failures are logged and reported as None.

        Raises:
            AccountNotFoundError: If the account is not configured.
        """
        self._registry.get(account)

        record = self._store.get(account)
        if record is None:
            return None

        if not record.is_expired():
            return record.access_token

        if not record.refresh_token:
            logger.info("Cached token expired and cannot be refreshed", account=account)
            return None

        client = self._clients[account]
        try:
            response = await asyncio.to_thread(
                client.acquire_token_by_refresh_token, record.refresh_token, GRAPH_SCOPES
            )
        except Exception as e:
            logger.error("Failed to refresh token", account=account, error=str(e))
            return None

        if not response or "access_token" not in response:
            logger.error(
                "Failed to refresh token",
                account=account,
                error=_describe_error(response or {}),
            )
            return None

        refreshed = TokenRecord.from_token_response(response, previous=record)
        self._store.put(account, refreshed)
        logger.info("Refreshed access token", account=account)
        return refreshed.access_token

    async def start_interactive_login(self, account: str) -> PendingLogin:
        """Begin the authorization-code flow for an account.

        Binds the callback listener if needed, registers the pending flow
        and opens the authorization URL in the browser.

        Returns:
            Handle whose ``completion`` future resolves with the signed-in
            identity, or fails with AuthenticationTimeoutError,
            MissingAuthorizationCodeError or AuthenticationFailedError.

        Raises:
            AccountNotFoundError: If the account is not configured.
            AuthenticationFailedError: If the callback listener cannot be bound.
        """
        self._registry.get(account)

        state = account
        if state in self._pending:
            state = f"{account}~{secrets.token_urlsafe(8)}"

        authorization_url = self._clients[account].get_authorization_request_url(
            GRAPH_SCOPES,
            state=state,
            redirect_uri=self._server_config.redirect_uri,
        )

        # No await between choosing the state and registering the flow
        loop = asyncio.get_running_loop()
        future: asyncio.Future[str] = loop.create_future()
        future.add_done_callback(lambda f: _log_login_result(account, f))
        timer = loop.call_later(self._login_timeout, self._expire, state)
        flow = _PendingFlow(account=account, future=future, timer=timer)
        self._pending[state] = flow

        try:
            await self._ensure_listener()
        except AuthenticationFailedError:
            if self._pending.get(state) is flow:
                del self._pending[state]
            timer.cancel()
            future.cancel()
            raise

        # The flow may have expired while the listener was being bound
        if state not in self._pending:
            self._release_listener_if_idle()
        logger.info("Interactive login started", account=account, state=state)

        if self._open_browser:
            await self._launch_browser(authorization_url)

        return PendingLogin(
            account=account,
            state=state,
            authorization_url=authorization_url,
            completion=future,
        )

    async def handle_callback(
        self,
        code: str | None,
        state: str | None,
        error: str | None = None,
        error_description: str | None = None,
    ) -> CallbackOutcome:
        """Complete the pending login matching ``state``.

        Callbacks without a matching pending login are ignored.
        """
        flow = self._pending.pop(state, None) if state else None
        if flow is None:
            logger.info("Ignoring callback without a pending login", state=state)
            return CallbackOutcome.UNKNOWN_STATE

        flow.timer.cancel()
        try:
            if not code:
                _settle(flow, error=MissingAuthorizationCodeError(error_description or error))
                return CallbackOutcome.MISSING_CODE

            try:
                identity = await self._exchange_code(flow.account, code)
            except AuthenticationFailedError as e:
                _settle(flow, error=e)
                return CallbackOutcome.FAILED

            _settle(flow, result=identity)
            return CallbackOutcome.COMPLETED
        finally:
            self._release_listener_if_idle()

    def logout(self, account: str | None = None) -> None:
        """Forget cached tokens of one account, or of all accounts.

        Raises:
            AccountNotFoundError: If the account is not configured.
        """
        if account is not None:
            self._registry.get(account)
        self._store.delete(account)
        logger.info("Cleared cached tokens", account=account or "*")

    async def aclose(self) -> None:
        """Cancel waiting logins and release the callback listener."""
        for state in list(self._pending):
            flow = self._pending.pop(state)
            flow.timer.cancel()
            flow.future.cancel()

        async with self._listener_lock:
            if self._listener is not None:
                await self._listener.aclose()
                self._listener = None

    async def _exchange_code(self, account: str, code: str) -> str:
        """Redeem an authorization code and persist the resulting token."""
        client = self._clients[account]
        try:
            response = await asyncio.to_thread(
                client.acquire_token_by_authorization_code,
                code,
                GRAPH_SCOPES,
                redirect_uri=self._server_config.redirect_uri,
            )
        except Exception as e:
            logger.error("Token exchange failed", account=account, error=str(e))
            raise AuthenticationFailedError(f"Token exchange failed: {e}") from e

        if not response or "access_token" not in response:
            message = _describe_error(response or {})
            logger.error("Token exchange rejected", account=account, error=message)
            raise AuthenticationFailedError(message)

        record = TokenRecord.from_token_response(response)
        self._store.put(account, record)
        return record.username or account

    async def _ensure_listener(self) -> None:
        async with self._listener_lock:
            if self.is_listening:
                return

            listener = CallbackListener(
                self._server_config.callback_host,
                self._server_config.port,
                self._server_config.callback_path,
                self.handle_callback,
            )
            try:
                await listener.start()
            except OSError as e:
                raise AuthenticationFailedError(
                    f"Could not start callback listener on port {self._server_config.port}: {e}"
                ) from e
            self._listener = listener

    def _release_listener_if_idle(self) -> None:
        if not self._pending and self._listener is not None:
            self._listener.close()
            self._listener = None

    def _expire(self, state: str) -> None:
        flow = self._pending.pop(state, None)
        if flow is None:
            return
        _settle(flow, error=AuthenticationTimeoutError(flow.account, self._login_timeout))
        self._release_listener_if_idle()

    @staticmethod
    async def _launch_browser(url: str) -> None:
        try:
            opened = await asyncio.to_thread(webbrowser.open, url)
        except Exception as e:
            logger.warning("Failed to open browser, visit the URL manually", error=str(e))
            return
        if not opened:
            logger.warning("No browser available, visit the URL manually")


def _settle(
    flow: _PendingFlow,
    *,
    result: str | None = None,
    error: AuthenticationError | None = None,
) -> None:
    """Complete a flow's future. Completing it twice is a no-op."""
    if flow.future.done():
        return
    if error is not None:
        flow.future.set_exception(error)
    else:
        flow.future.set_result(result or flow.account)


def _log_login_result(account: str, future: "asyncio.Future[str]") -> None:
    if future.cancelled():
        logger.info("Interactive login cancelled", account=account)
        return
    error = future.exception()
    if error is not None:
        logger.warning("Interactive login failed", account=account, error=str(error))
    else:
        logger.info("Interactive login completed", account=account, username=future.result())
