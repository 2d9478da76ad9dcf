import http.server
from typing import Any

from ..errors import BackendCallError, RequestBodyError
from ..response_mapper import backend_error_response, error_response
from .handlers.handler import Handler, Request, Response
from .route import Route


class Router(http.server.BaseHTTPRequestHandler):
    """An HTTP request handler that routes the requests to appropriate handlers based on preconfigured routes."""

    # HTTP/1.1 keeps client connections open between requests.
    protocol_version = "HTTP/1.1"

    def __init__(
        self,
        gateway_routes: dict[Route, Handler],
        gateway_logger: Any,
        *args,
        **kwargs,
    ):
        # All self.fields must be initialized before calling super().__init__().
        # Prefix with "gateway_" to avoid any name collisions with base class fields and constructor args
        # that we don't control.
        self._gateway_routes: dict[Route, Handler] = gateway_routes
        self._gateway_logger: Any = gateway_logger.bind(module=__name__)
        super().__init__(*args, **kwargs)

    def _find_handler(self, request: Request) -> Handler | None:
        """Finds the appropriate handler for the given request and sets its path parameters.

        Doesn't raise any exceptions. Returns None if no handler is found.
        """
        for route, handler in self._gateway_routes.items():
            path_params: dict[str, str] | None = route.match(
                request.method, request.path
            )
            if path_params is not None:
                request.path_params = path_params
                return handler
        return None

    def _handle(self):
        try:
            content_length: int = _content_length(self.headers.get("Content-Length"))
        except RequestBodyError as e:
            # The body can't be skipped without its length.
            self.close_connection = True
            self._send(error_response(400, e.message))
            return

        try:
            request: Request = Request(
                method=self.command,
                path=self.path,
                headers=self.headers,
                body=self.rfile.read(content_length),
            )
        except Exception as e:
            self._internal_server_error(e)
            return

        handler: Handler | None = self._find_handler(request)
        if handler is None:
            self._gateway_logger.debug(
                "No handler found", verb=self.command, path=self.path
            )
            self._send(error_response(404, "Not found"))
            return

        try:
            response: Response = handler.handle(request)
        except RequestBodyError as e:
            self._gateway_logger.debug(
                "Invalid request body",
                verb=self.command,
                path=self.path,
                error=e.message,
            )
            response = error_response(400, e.message)
        except BackendCallError as e:
            # Already logged by the scheduler client.
            response = backend_error_response(e)
        except Exception as e:
            self._internal_server_error(e)
            return
        self._send(response)

    def _send(self, response: Response) -> None:
        self.send_response(response.status_code)
        for header_name, header_value in response.headers.items():
            self.send_header(header_name, header_value)
        self.send_header("Content-Length", str(len(response.body)))
        self.end_headers()
        self.wfile.write(response.body)

    def _internal_server_error(self, exception: BaseException) -> None:
        message: str = f"Internal Server Error: {exception}"
        self._gateway_logger.error(
            message, verb=self.command, path=self.path, exc_info=exception
        )
        self._send(error_response(500, message))

    def do_GET(self):
        self._handle()

    def do_POST(self):
        self._handle()

    def do_PUT(self):
        self._handle()

    def do_DELETE(self):
        self._handle()

    def do_PATCH(self):
        self._handle()

    # Disable all default request logging done by BaseHTTPRequestHandler.
    def log_message(self, *args, **kwargs):
        pass

    def log_request(self, *args, **kwargs):
        pass

    def log_error(self, *args, **kwargs):
        pass


def _content_length(header_value: str | None) -> int:
    """Returns the request body length, 0 if the header is missing.

    Raises RequestBodyError if the header is not a non-negative integer.
    """
    if header_value is None:
        return 0
    value: str = header_value.strip()
    if not (value.isascii() and value.isdigit()):
        raise RequestBodyError(f"Invalid Content-Length header: {header_value!r}")
    return int(value)
