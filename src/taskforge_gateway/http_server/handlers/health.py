from ...response_mapper import json_response
from .handler import Handler, Request, Response

HEALTH_PATH: str = "/health"
HEALTH_VERB: str = "GET"


class HealthHandler(Handler):
    """Liveness of the gateway process only, the scheduler is not called."""

    def handle(self, request: Request) -> Response:
        return json_response(200, {"status": "gateway alive"})
