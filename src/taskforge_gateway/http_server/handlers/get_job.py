from typing import Any

from ...response_mapper import execution_status_response
from ...scheduler_client import SchedulerClient
from ...translator import execution_status_request
from .handler import Handler, Request, Response

GET_JOB_PATH: str = "/jobs/:execution_id"
GET_JOB_VERB: str = "GET"


class GetJobHandler(Handler):
    """Returns status, decoded output and error of an execution."""

    def __init__(self, scheduler_client: SchedulerClient, logger: Any):
        self._scheduler_client: SchedulerClient = scheduler_client
        self._logger: Any = logger.bind(module=__name__)

    def handle(self, request: Request) -> Response:
        execution_id: str = request.path_params["execution_id"]
        reply: Any = self._scheduler_client.get_execution_status(
            execution_status_request(execution_id)
        )
        self._logger.debug(
            "execution status", execution_id=execution_id, status=reply.status
        )
        return execution_status_response(reply)
