from typing import Any

from ..scheduler_client import SchedulerClient
from .handlers.get_job import GET_JOB_PATH, GET_JOB_VERB, GetJobHandler
from .handlers.handler import Handler
from .handlers.health import HEALTH_PATH, HEALTH_VERB, HealthHandler
from .handlers.invoke_function import (
    INVOKE_FUNCTION_PATH,
    INVOKE_FUNCTION_VERB,
    InvokeFunctionHandler,
)
from .handlers.register_function import (
    REGISTER_FUNCTION_PATH,
    REGISTER_FUNCTION_VERB,
    RegisterFunctionHandler,
)
from .route import Route
from .router import Router


class GatewayHTTPHandlerFactory:
    """Creates and reuses handlers for the gateway HTTP API.

    All the handlers share the same scheduler client.
    """

    def __init__(self, scheduler_client: SchedulerClient, logger: Any):
        self._logger: Any = logger.bind(module=__name__)
        self._routes: dict[Route, Handler] = {
            Route(path=HEALTH_PATH, verb=HEALTH_VERB): HealthHandler(),
            Route(
                path=REGISTER_FUNCTION_PATH, verb=REGISTER_FUNCTION_VERB
            ): RegisterFunctionHandler(
                scheduler_client=scheduler_client,
                logger=logger,
            ),
            Route(
                path=INVOKE_FUNCTION_PATH, verb=INVOKE_FUNCTION_VERB
            ): InvokeFunctionHandler(
                scheduler_client=scheduler_client,
                logger=logger,
            ),
            Route(path=GET_JOB_PATH, verb=GET_JOB_VERB): GetJobHandler(
                scheduler_client=scheduler_client,
                logger=logger,
            ),
        }

    @property
    def routes(self) -> dict[Route, Handler]:
        return self._routes

    def __call__(self, *args, **kwargs) -> Router:
        # This method is called by ThreadingHTTPServer to create an HTTPHandler instance.
        # The instance can be called multiple times to handle multiple requests.
        # So it has to be stateless and support multi-threading.
        return Router(self._routes, self._logger, *args, **kwargs)
