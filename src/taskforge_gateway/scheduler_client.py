from typing import Any

import grpc

from .errors import BackendCallError
from .logger import get_logger
from .proto.channel_configuration import GRPC_CHANNEL_OPTIONS
from .proto.scheduler_pb2 import (
    GetExecutionStatusRequest,
    GetExecutionStatusResponse,
    RegisterFunctionRequest,
    RegisterFunctionResponse,
    TriggerExecutionRequest,
    TriggerExecutionResponse,
    method_path,
)


class SchedulerClient:
    """Blocking client of the scheduler gRPC service.

    Owns a single channel which is created once and shared by all gateway
    request threads. gRPC channels are thread safe and multiplex concurrent calls.
    Each call is independent, there's no session or ordering between calls.
    """

    def __init__(
        self,
        address: str,
        call_timeout_sec: float | None = None,
        channel: grpc.Channel | None = None,
    ):
        self._address: str = address
        self._call_timeout_sec: float | None = call_timeout_sec
        self._logger = get_logger(module=__name__, scheduler_address=address)
        # The channel connects lazily so an unavailable scheduler only fails calls.
        self._channel: grpc.Channel = (
            channel
            if channel is not None
            else grpc.insecure_channel(address, options=GRPC_CHANNEL_OPTIONS)
        )
        self._register_function = self._channel.unary_unary(
            method_path("RegisterFunction"),
            request_serializer=RegisterFunctionRequest.SerializeToString,
            response_deserializer=RegisterFunctionResponse.FromString,
        )
        self._trigger_execution = self._channel.unary_unary(
            method_path("TriggerExecution"),
            request_serializer=TriggerExecutionRequest.SerializeToString,
            response_deserializer=TriggerExecutionResponse.FromString,
        )
        self._get_execution_status = self._channel.unary_unary(
            method_path("GetExecutionStatus"),
            request_serializer=GetExecutionStatusRequest.SerializeToString,
            response_deserializer=GetExecutionStatusResponse.FromString,
        )

    @property
    def address(self) -> str:
        return self._address

    def register_function(self, request: RegisterFunctionRequest) -> Any:
        """Registers a function, returns RegisterFunctionResponse.

        Raises BackendCallError on any failure.
        """
        return self._call("RegisterFunction", self._register_function, request)

    def trigger_execution(self, request: TriggerExecutionRequest) -> Any:
        """Triggers an execution, returns TriggerExecutionResponse.

        Raises BackendCallError on any failure.
        """
        return self._call("TriggerExecution", self._trigger_execution, request)

    def get_execution_status(self, request: GetExecutionStatusRequest) -> Any:
        """Gets an execution status, returns GetExecutionStatusResponse.

        Raises BackendCallError on any failure.
        """
        return self._call("GetExecutionStatus", self._get_execution_status, request)

    def _call(
        self, method: str, callable: grpc.UnaryUnaryMultiCallable, request: Any
    ) -> Any:
        # A single attempt, no retries.
        try:
            return callable(request, timeout=self._call_timeout_sec)
        except grpc.RpcError as e:
            error: BackendCallError = BackendCallError.from_rpc_error(method, e)
            self._logger.error(
                "scheduler call failed",
                method=method,
                code=None if error.code is None else error.code.name,
                error=error.message,
            )
            raise error from e

    def close(self) -> None:
        """Closes the channel. In-flight calls are cancelled.

        Doesn't raise any exceptions.
        """
        self._channel.close()

    def __enter__(self) -> "SchedulerClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
