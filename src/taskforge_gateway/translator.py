"""Translates gateway operations into scheduler requests.

The gateway doesn't validate business fields. Whatever the caller sent is forwarded
and the scheduler decides whether the request is valid.
"""

from typing import Any

from .payload_codec import encode_text, encode_to_bytes
from .proto.scheduler_pb2 import (
    GetExecutionStatusRequest,
    RegisterFunctionRequest,
    TriggerExecutionRequest,
)


def _string_field(body: Any, field_name: str) -> str:
    """Returns the field value as a string for a proto string field.

    A missing field or null maps to the proto default. Non-string JSON values are
    forwarded as their JSON text.
    """
    if not isinstance(body, dict):
        return ""
    value: Any = body.get(field_name)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return encode_to_bytes(value).decode("utf-8")


def register_function_request(body: Any) -> RegisterFunctionRequest:
    """Builds RegisterFunctionRequest from a {name, language, code} JSON body.

    The code is opaque source text. It's sent as raw bytes and is never parsed as JSON.
    """
    return RegisterFunctionRequest(
        name=_string_field(body, "name"),
        language=_string_field(body, "language"),
        code=encode_text(_string_field(body, "code")),
    )


def trigger_execution_request(function_id: str, body: Any) -> TriggerExecutionRequest:
    """Builds TriggerExecutionRequest with the whole JSON body as the payload.

    Raises ValueError if the body is not JSON serializable.
    """
    return TriggerExecutionRequest(
        function_id=function_id,
        payload=encode_to_bytes(body),
    )


def execution_status_request(execution_id: str) -> GetExecutionStatusRequest:
    return GetExecutionStatusRequest(execution_id=execution_id)
