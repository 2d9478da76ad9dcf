import grpc


class GatewayError(Exception):
    """Base class for all gateway errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)

    @property
    def message(self) -> str:
        return self.args[0]


class BackendCallError(GatewayError):
    """Raised when a call to the scheduler service failed.

    Covers both transport failures (scheduler unreachable, deadline exceeded) and
    errors reported by the scheduler itself. Callers can't and don't distinguish them.
    """

    def __init__(
        self,
        message: str,
        method: str,
        code: grpc.StatusCode | None = None,
    ) -> None:
        super().__init__(message)
        self.method: str = method
        self.code: grpc.StatusCode | None = code

    @classmethod
    def from_rpc_error(cls, method: str, error: grpc.RpcError) -> "BackendCallError":
        """Creates the error from a failed gRPC call.

        The message is formatted as "<code number> <CODE NAME>: <details>".
        Doesn't raise any exceptions.
        """
        code: grpc.StatusCode | None = None
        details: str | None = None
        # Not every RpcError is a grpc.Call, i.e. errors raised by interceptors.
        if isinstance(error, grpc.Call):
            code = error.code()
            details = error.details()

        if details is None:
            details = str(error)
        if code is None:
            return cls(message=details, method=method)

        return cls(
            message=f"{code.value[0]} {code.name}: {details}",
            method=method,
            code=code,
        )


class RequestBodyError(GatewayError):
    """Raised when an HTTP request body declared as JSON can't be parsed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
