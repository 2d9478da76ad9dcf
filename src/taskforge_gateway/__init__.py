from .errors import BackendCallError, GatewayError, RequestBodyError
from .payload_codec import (
    NO_OUTPUT,
    DecodedPayload,
    decode_from_bytes,
    encode_text,
    encode_to_bytes,
)
from .scheduler_client import SchedulerClient

__all__ = [
    "BackendCallError",
    "DecodedPayload",
    "GatewayError",
    "NO_OUTPUT",
    "RequestBodyError",
    "SchedulerClient",
    "decode_from_bytes",
    "encode_text",
    "encode_to_bytes",
]
