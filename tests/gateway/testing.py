import socket
import threading
import time
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Tuple

import grpc
import httpx

from taskforge_gateway.http_server.http_handler_factory import (
    GatewayHTTPHandlerFactory,
)
from taskforge_gateway.http_server.server import GatewayHTTPServer
from taskforge_gateway.logger import configure_logging, get_logger
from taskforge_gateway.proto.scheduler_pb2 import (
    MESSAGE_CLASSES,
    METHODS,
    SERVICE_NAME,
)
from taskforge_gateway.scheduler_client import SchedulerClient

configure_logging("warning")


def unused_address() -> str:
    """Returns localhost:port where nothing is listening."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("localhost", 0))
        port: int = s.getsockname()[1]
    return f"localhost:{port}"


class FakeScheduler:
    """In-process scheduler gRPC service with preconfigured replies.

    Records all received requests per method name.
    """

    def __init__(self):
        self.requests: Dict[str, List[Any]] = defaultdict(list)
        self.replies: Dict[str, Any] = {}
        self.errors: Dict[str, Tuple[grpc.StatusCode, str]] = {}
        self.delays_sec: Dict[str, float] = {}
        self._lock = threading.Lock()
        self._server: grpc.Server = grpc.server(
            thread_pool=ThreadPoolExecutor(max_workers=32)
        )
        method_handlers = {}
        for method_name, request_name, response_name in METHODS:
            method_handlers[method_name] = grpc.unary_unary_rpc_method_handler(
                self._method_handler(method_name, MESSAGE_CLASSES[response_name]),
                request_deserializer=MESSAGE_CLASSES[request_name].FromString,
                response_serializer=MESSAGE_CLASSES[response_name].SerializeToString,
            )
        self._server.add_generic_rpc_handlers(
            (grpc.method_handlers_generic_handler(SERVICE_NAME, method_handlers),)
        )
        self.port: int = self._server.add_insecure_port("localhost:0")

    @property
    def address(self) -> str:
        return f"localhost:{self.port}"

    def _method_handler(self, method_name: str, response_class: Any):
        def handler(request: Any, context: grpc.ServicerContext) -> Any:
            with self._lock:
                self.requests[method_name].append(request)
            if method_name in self.delays_sec:
                time.sleep(self.delays_sec[method_name])
            if method_name in self.errors:
                code, details = self.errors[method_name]
                context.abort(code, details)
            return self.replies.get(method_name, response_class())

        return handler

    def __enter__(self) -> "FakeScheduler":
        self._server.start()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self._server.stop(grace=None)


class GatewayContextManager:
    """Runs the gateway HTTP server on an ephemeral port in a background thread."""

    def __init__(self, scheduler_address: str, call_timeout_sec: float | None = None):
        self._scheduler_address: str = scheduler_address
        self._call_timeout_sec: float | None = call_timeout_sec
        self._scheduler_client: SchedulerClient | None = None
        self._server: GatewayHTTPServer | None = None
        self._thread: threading.Thread | None = None
        self.http_client: httpx.Client | None = None

    def __enter__(self) -> "GatewayContextManager":
        logger = get_logger(module=__name__)
        self._scheduler_client = SchedulerClient(
            address=self._scheduler_address,
            call_timeout_sec=self._call_timeout_sec,
        )
        self._server = GatewayHTTPServer(
            host="localhost",
            port=0,
            handler_factory=GatewayHTTPHandlerFactory(
                scheduler_client=self._scheduler_client, logger=logger
            ),
            logger=logger,
        )
        self._thread = threading.Thread(
            target=self._server.start, name="GatewayHTTPServerThread", daemon=True
        )
        self._thread.start()
        self.http_client = httpx.Client(base_url=self._server.base_url, timeout=30)
        # The listening socket is already bound so this waits until the server
        # thread starts serving requests.
        self.http_client.get("/health").raise_for_status()
        return self

    def send_raw(self, data: bytes) -> bytes:
        """Sends raw bytes to the gateway and returns everything it replies until it closes the connection."""
        with socket.create_connection(("localhost", self._server.port), timeout=30) as s:
            s.sendall(data)
            s.shutdown(socket.SHUT_WR)
            chunks: List[bytes] = []
            while chunk := s.recv(65536):
                chunks.append(chunk)
        return b"".join(chunks)

    def __exit__(self, exc_type, exc_value, traceback):
        self.http_client.close()
        self._server.stop()
        self._thread.join()
        self._scheduler_client.close()
