from pydantic import BaseModel, Field, field_validator

from .logger import LOG_LEVELS

DEFAULT_SCHEDULER_ADDRESS: str = "localhost:50051"
DEFAULT_LISTEN_HOST: str = "0.0.0.0"
DEFAULT_LISTEN_PORT: int = 3000


class GatewayConfig(BaseModel):
    """Gateway process configuration.

    Populated from CLI flags or their TASKFORGE_* environment variables.
    """

    # host:port of the scheduler gRPC service.
    scheduler_address: str = DEFAULT_SCHEDULER_ADDRESS
    listen_host: str = DEFAULT_LISTEN_HOST
    listen_port: int = Field(default=DEFAULT_LISTEN_PORT, ge=0, le=65535)
    # No deadline is set on scheduler calls when None.
    call_timeout_sec: float | None = Field(default=None, gt=0)
    log_level: str = "info"

    @field_validator("scheduler_address")
    @classmethod
    def _scheduler_address_not_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("scheduler address must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        value = value.lower()
        if value not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return value
