"""Maps scheduler replies and failures onto HTTP responses."""

from typing import Any

from google.protobuf.json_format import MessageToDict
from pydantic import BaseModel

from .http_server.handlers.handler import Response
from .logger import get_logger
from .payload_codec import (
    NO_OUTPUT,
    DecodedPayload,
    decode_from_bytes,
    encode_to_bytes,
)

JSON_CONTENT_TYPE: str = "application/json; charset=utf-8"


class RegisterFunctionResponseBody(BaseModel):
    function_id: str


class ExecutionStatusResponseBody(BaseModel):
    # Backend owned vocabulary, passed through verbatim.
    status: str
    output: Any = None
    error: str | None = None


class ErrorResponseBody(BaseModel):
    error: str


def json_response(status_code: int, body: BaseModel | Any) -> Response:
    # Decoded outputs can hold lone surrogates which only encode_to_bytes escapes.
    if isinstance(body, BaseModel):
        body = body.model_dump()
    body_bytes: bytes = encode_to_bytes(body)
    return Response(
        status_code=status_code,
        headers={"Content-Type": JSON_CONTENT_TYPE},
        body=body_bytes,
    )


def error_response(status_code: int, message: str) -> Response:
    return json_response(status_code, ErrorResponseBody(error=message))


def backend_error_response(error: Exception) -> Response:
    """Any scheduler call failure is a 500 with the failure message.

    Transport errors and errors reported by the scheduler are not distinguished.
    """
    message: str = getattr(error, "message", None) or str(error)
    return error_response(500, message)


def register_function_response(reply: Any) -> Response:
    return json_response(
        200, RegisterFunctionResponseBody(function_id=reply.function_id)
    )


def trigger_execution_response(reply: Any) -> Response:
    """Forwards the whole reply, the gateway doesn't add or remove any fields."""
    body: dict[str, Any] = MessageToDict(
        reply,
        preserving_proto_field_name=True,
        always_print_fields_with_no_presence=True,
    )
    return json_response(200, body)


def decode_output(reply: Any) -> Any:
    """Returns the decoded execution output or None if there's no output.

    Non-JSON outputs are returned as text.
    """
    if not reply.HasField("output"):
        return None
    decoded: DecodedPayload = decode_from_bytes(reply.output)
    if decoded.value is NO_OUTPUT:
        return None
    if decoded.used_fallback:
        get_logger(module=__name__).debug(
            "execution output is not JSON, returning it as text"
        )
    return decoded.value


def execution_status_response(reply: Any) -> Response:
    return json_response(
        200,
        ExecutionStatusResponseBody(
            status=reply.status,
            output=decode_output(reply),
            error=reply.error if reply.HasField("error") else None,
        ),
    )
