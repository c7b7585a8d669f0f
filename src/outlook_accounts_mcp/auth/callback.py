"""Local HTTP listener that receives the OAuth2 redirect.

Binds a plain asyncio TCP server on the redirect URI's host and port and
answers exactly one route: ``GET <redirect path>?code=...&state=...``.
"""

import asyncio
from collections.abc import Awaitable, Callable
from contextlib import suppress
from urllib.parse import parse_qs, urlsplit

import structlog

from outlook_accounts_mcp.auth.models import CallbackOutcome

logger = structlog.get_logger()

CallbackHandler = Callable[..., Awaitable[CallbackOutcome]]

READ_TIMEOUT = 10.0  # seconds
MAX_HEADER_LINES = 100

SUCCESS_PAGE = """<html>
  <body>
    <h2>Authentication Successful!</h2>
    <p>You can close this window and return to your assistant.</p>
    <script>window.close();</script>
  </body>
</html>"""

MISSING_CODE_PAGE = """<html>
  <body>
    <h2>Error: No authorization code received</h2>
  </body>
</html>"""

FAILED_PAGE = """<html>
  <body>
    <h2>Authentication failed.</h2>
    <p>Check the server logs for details.</p>
  </body>
</html>"""

EXPIRED_PAGE = """<html>
  <body>
    <h2>This sign-in request is no longer active.</h2>
    <p>Please start the login again.</p>
  </body>
</html>"""

_PAGES: dict[CallbackOutcome, str] = {
    CallbackOutcome.COMPLETED: SUCCESS_PAGE,
    CallbackOutcome.MISSING_CODE: MISSING_CODE_PAGE,
    CallbackOutcome.FAILED: FAILED_PAGE,
    CallbackOutcome.UNKNOWN_STATE: EXPIRED_PAGE,
}

_REASONS = {200: "OK", 400: "Bad Request", 404: "Not Found", 405: "Method Not Allowed"}


class CallbackListener:
    """One-shot redirect listener.

    The owner starts it when the first login begins and closes it once no
    login is waiting any more.
    """

    def __init__(self, host: str, port: int, path: str, on_callback: CallbackHandler) -> None:
        """Initialize the listener.

        Args:
            host: Interface to bind (usually "localhost").
            port: TCP port; must match the registered redirect URI.
            path: Request path of the redirect URI (e.g., "/auth/callback").
            on_callback: Coroutine called with ``code``, ``state``, ``error``
                and ``error_description`` keyword arguments.
        """
        self._host = host
        self._port = port
        self._path = path
        self._on_callback = on_callback
        self._server: asyncio.Server | None = None

    @property
    def is_serving(self) -> bool:
        return self._server is not None and self._server.is_serving()

    async def start(self) -> None:
        """Bind the listening socket.

        Raises:
            OSError: If the port cannot be bound.
        """
        self._server = await asyncio.start_server(self._handle_client, self._host, self._port)
        logger.info("Callback listener started", host=self._host, port=self._port)

    def close(self) -> None:
        """Stop accepting connections. Requests in progress are still answered."""
        if self._server is not None:
            self._server.close()
            self._server = None
            logger.info("Callback listener stopped", port=self._port)

    async def aclose(self) -> None:
        """Stop the listener and wait for the socket to be released."""
        server = self._server
        self.close()
        if server is not None:
            await server.wait_closed()

    async def _handle_client(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ) -> None:
        """Handle a single HTTP request."""
        try:
            request_line = await asyncio.wait_for(reader.readline(), READ_TIMEOUT)
            parts = request_line.decode("latin-1").split()
            if len(parts) < 2:
                await self._respond(writer, 400, FAILED_PAGE)
                return

            # Skip headers; the request carries no body we care about
            for _ in range(MAX_HEADER_LINES):
                line = await asyncio.wait_for(reader.readline(), READ_TIMEOUT)
                if line in (b"\r\n", b"\n", b""):
                    break

            status, body = await self._dispatch(parts[0], parts[1])
            await self._respond(writer, status, body)
        except Exception as e:
            logger.error("Callback handler error", error=str(e))
        finally:
            writer.close()
            with suppress(ConnectionError):
                await writer.wait_closed()

    async def _dispatch(self, method: str, target: str) -> tuple[int, str]:
        url = urlsplit(target)
        if url.path != self._path:
            return 404, "<html><body><h2>Not Found</h2></body></html>"
        if method != "GET":
            return 405, "<html><body><h2>Method Not Allowed</h2></body></html>"

        params = {key: values[0] for key, values in parse_qs(url.query).items()}
        code = params.get("code")
        outcome = await self._on_callback(
            code=code,
            state=params.get("state"),
            error=params.get("error"),
            error_description=params.get("error_description"),
        )
        if not code:
            return 400, MISSING_CODE_PAGE
        return 200, _PAGES[outcome]

    @staticmethod
    async def _respond(writer: asyncio.StreamWriter, status: int, body: str) -> None:
        payload = body.encode("utf-8")
        head = (
            f"HTTP/1.1 {status} {_REASONS.get(status, 'Error')}\r\n"
            "Content-Type: text/html; charset=utf-8\r\n"
            f"Content-Length: {len(payload)}\r\n"
            "Connection: close\r\n"
            "\r\n"
        )
        writer.write(head.encode("latin-1") + payload)
        await writer.drain()
