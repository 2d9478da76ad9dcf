import signal
import threading

import click
import pydantic

from .config import (
    DEFAULT_LISTEN_HOST,
    DEFAULT_LISTEN_PORT,
    DEFAULT_SCHEDULER_ADDRESS,
    GatewayConfig,
)
from .http_server.http_handler_factory import GatewayHTTPHandlerFactory
from .http_server.server import GatewayHTTPServer
from .logger import LOG_LEVELS, configure_logging, get_logger
from .scheduler_client import SchedulerClient


def run_gateway(config: GatewayConfig) -> None:
    """Runs the gateway until SIGTERM or SIGINT is received."""
    logger = get_logger(module=__name__)
    logger.info(
        "starting gateway",
        scheduler_address=config.scheduler_address,
        listen_host=config.listen_host,
        listen_port=config.listen_port,
        call_timeout_sec=config.call_timeout_sec,
    )

    with SchedulerClient(
        address=config.scheduler_address,
        call_timeout_sec=config.call_timeout_sec,
    ) as scheduler_client:
        server = GatewayHTTPServer(
            host=config.listen_host,
            port=config.listen_port,
            handler_factory=GatewayHTTPHandlerFactory(
                scheduler_client=scheduler_client, logger=logger
            ),
            logger=logger,
        )

        def _on_sigterm(signum, frame):
            logger.info("received termination signal, stopping gateway")
            # shutdown() blocks until serve_forever() returns so it can't run in the serving thread.
            threading.Thread(target=server.stop, daemon=True).start()

        signal.signal(signal.SIGTERM, _on_sigterm)
        try:
            server.start()
        except KeyboardInterrupt:
            logger.info("interrupted, stopping gateway")
        finally:
            server.stop()

    logger.info("gateway stopped")


@click.command()
@click.option(
    "--scheduler-address",
    envvar="TASKFORGE_SCHEDULER_ADDRESS",
    default=DEFAULT_SCHEDULER_ADDRESS,
    show_default=True,
    help="host:port of the scheduler gRPC service",
)
@click.option(
    "--host",
    "listen_host",
    envvar="TASKFORGE_GATEWAY_HOST",
    default=DEFAULT_LISTEN_HOST,
    show_default=True,
    help="Address the HTTP API listens on",
)
@click.option(
    "--port",
    "listen_port",
    envvar="TASKFORGE_GATEWAY_PORT",
    type=int,
    default=DEFAULT_LISTEN_PORT,
    show_default=True,
    help="Port the HTTP API listens on",
)
@click.option(
    "--call-timeout-sec",
    envvar="TASKFORGE_CALL_TIMEOUT_SEC",
    type=float,
    default=None,
    help="Deadline of each scheduler call, no deadline if not set",
)
@click.option(
    "--log-level",
    envvar="TASKFORGE_LOG_LEVEL",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="info",
    show_default=True,
)
def main(
    scheduler_address: str,
    listen_host: str,
    listen_port: int,
    call_timeout_sec: float | None,
    log_level: str,
):
    """Runs the HTTP gateway of the Taskforge scheduler."""
    try:
        config = GatewayConfig(
            scheduler_address=scheduler_address,
            listen_host=listen_host,
            listen_port=listen_port,
            call_timeout_sec=call_timeout_sec,
            log_level=log_level,
        )
    except pydantic.ValidationError as e:
        raise click.UsageError(f"Invalid configuration: {e}")

    configure_logging(config.log_level)
    run_gateway(config)


if __name__ == "__main__":
    main()
