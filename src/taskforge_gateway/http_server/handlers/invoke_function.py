from typing import Any

from ...response_mapper import trigger_execution_response
from ...scheduler_client import SchedulerClient
from ...translator import trigger_execution_request
from .handler import Handler, Request, Response

INVOKE_FUNCTION_PATH: str = "/invoke/:function_id"
INVOKE_FUNCTION_VERB: str = "POST"


class InvokeFunctionHandler(Handler):
    def __init__(self, scheduler_client: SchedulerClient, logger: Any):
        self._scheduler_client: SchedulerClient = scheduler_client
        self._logger: Any = logger.bind(module=__name__)

    def handle(self, request: Request) -> Response:
        function_id: str = request.path_params["function_id"]
        reply: Any = self._scheduler_client.trigger_execution(
            trigger_execution_request(function_id, request.json_body())
        )
        self._logger.info(
            "execution triggered",
            function_id=function_id,
            execution_id=reply.execution_id,
        )
        return trigger_execution_response(reply)
