import http.server
from typing import Any

from .http_handler_factory import GatewayHTTPHandlerFactory


class GatewayHTTPServer:
    """HTTP server of the gateway API.

    Each request is handled in its own thread.
    """

    def __init__(
        self,
        host: str,
        port: int,
        handler_factory: GatewayHTTPHandlerFactory,
        logger: Any,
    ):
        """Binds the server socket. Use port 0 to bind an ephemeral port."""
        self._httpd: http.server.ThreadingHTTPServer = http.server.ThreadingHTTPServer(
            (host, port), handler_factory
        )
        # Don't block process exit on in-flight requests.
        self._httpd.daemon_threads = True
        self._logger: Any = logger.bind(module=__name__)
        self._running: bool = False

    @property
    def port(self) -> int:
        return self._httpd.server_address[1]

    @property
    def base_url(self) -> str:
        """Returns the base URL of the server."""
        host: str = self._httpd.server_address[0]
        if host in ("0.0.0.0", ""):
            host = "localhost"
        return f"http://{host}:{self.port}"

    def start(self):
        """Starts the HTTP server in the current thread.

        Blocks until the server is stopped.
        """
        if self._running:
            raise RuntimeError("Server is already running.")

        self._running = True
        self._logger.info("HTTP server starting", base_url=self.base_url)
        self._httpd.serve_forever()
        self._running = False
        self._logger.info("HTTP server stopped")

    def stop(self):
        """Stops the HTTP server and releases its resources.

        Blocks until the server is fully stopped.
        Does nothing if the server is not running.
        """
        if self._running:
            self._running = False
            # self._running must be checked, otherwise shutdown() will deadlock.
            self._httpd.shutdown()

        self._httpd.server_close()
