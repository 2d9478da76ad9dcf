from typing import Any

from ...response_mapper import register_function_response
from ...scheduler_client import SchedulerClient
from ...translator import register_function_request
from .handler import Handler, Request, Response

REGISTER_FUNCTION_PATH: str = "/functions"
REGISTER_FUNCTION_VERB: str = "POST"


class RegisterFunctionHandler(Handler):
    def __init__(self, scheduler_client: SchedulerClient, logger: Any):
        self._scheduler_client: SchedulerClient = scheduler_client
        self._logger: Any = logger.bind(module=__name__)

    def handle(self, request: Request) -> Response:
        reply: Any = self._scheduler_client.register_function(
            register_function_request(request.json_body())
        )
        self._logger.info("function registered", function_id=reply.function_id)
        return register_function_response(reply)
