from dataclasses import dataclass, field

from ...errors import RequestBodyError
from ...payload_codec import parse_json


@dataclass
class Request:
    method: str
    path: str
    headers: dict[str, str]
    body: bytes
    # Values of the route path parameters, i.e. {"function_id": "fn-123"}.
    path_params: dict[str, str] = field(default_factory=dict)

    def json_body(self) -> object:
        """Returns the parsed JSON body.

        Bodies without a JSON content type and empty bodies are treated as an empty
        JSON object. Raises RequestBodyError if a JSON body can't be parsed.
        """
        if not _is_json_content_type(self.headers.get("Content-Type")):
            return {}
        if not self.body.strip():
            return {}
        try:
            return parse_json(self.body.decode("utf-8"))
        except (ValueError, RecursionError) as e:
            raise RequestBodyError(f"Invalid JSON request body: {e}") from e


@dataclass
class Response:
    status_code: int
    headers: dict[str, str]
    body: bytes


class Handler:
    def handle(self, request: Request) -> Response:
        """Handles an incoming HTTP request and returns a response.

        Any exception raised by the handler will result in an error response being
        returned to the client with the exception message in the response body.
        """
        raise NotImplementedError("Handler subclasses must implement handle method.")


def _is_json_content_type(content_type: str | None) -> bool:
    if content_type is None:
        return False
    media_type: str = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or (
        "/" in media_type and media_type.endswith("+json")
    )
