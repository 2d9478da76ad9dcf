import json
import math
from typing import Any, NamedTuple

# Payloads and outputs travel to and from the scheduler as opaque bytes.
# The scheduler doesn't know the content type of execution outputs so the gateway
# optimistically treats them as JSON and degrades to plain text when they are not.


class _NoOutput:
    """Marks an execution without output.

    Distinct from an empty string and from JSON null (None).
    """

    _instance: "_NoOutput | None" = None

    def __new__(cls) -> "_NoOutput":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_OUTPUT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_NoOutput, ())


NO_OUTPUT = _NoOutput()


class DecodedPayload(NamedTuple):
    value: Any
    used_fallback: bool


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are accepted by Python json but they are not JSON.
    raise ValueError(f"{name} is not a valid JSON value")


def _parse_float(text: str) -> float | None:
    # Numbers out of the float range like 1e400 are valid JSON. They become null
    # because infinity can't be serialized back to JSON.
    value: float = float(text)
    return value if math.isfinite(value) else None


def encode_to_bytes(value: Any) -> bytes:
    """Serializes a JSON compatible value into UTF-8 encoded JSON text.

    Lone surrogates in strings are written as \\uXXXX escapes.
    Raises ValueError if the value is not JSON serializable.
    """
    try:
        text: str = json.dumps(value, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Failed to serialize payload to JSON: {e}") from e
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        # Only the ASCII form can represent lone surrogates in valid UTF-8.
        return json.dumps(value, ensure_ascii=True, allow_nan=False).encode("ascii")


def encode_text(text: str) -> bytes:
    """Encodes text as raw UTF-8 bytes without any JSON processing.

    Used for opaque text like function source code.
    """
    return text.encode("utf-8")


def parse_json(text: str | bytes) -> Any:
    """Parses JSON text, rejecting the non-standard NaN and Infinity literals.

    Numbers that overflow a float are parsed as None.

    Raises ValueError if the text is not valid JSON.
    """
    return json.loads(text, parse_constant=_reject_constant, parse_float=_parse_float)


def decode_from_bytes(data: bytes | None) -> DecodedPayload:
    """Decodes bytes as JSON, falling back to text if they are not JSON.

    None or empty bytes decode to NO_OUTPUT without using the fallback.
    Doesn't raise any exceptions.
    """
    if not data:
        return DecodedPayload(NO_OUTPUT, False)

    text: str = data.decode("utf-8", errors="replace")
    try:
        return DecodedPayload(parse_json(text), False)
    except (ValueError, RecursionError):
        return DecodedPayload(text, True)
