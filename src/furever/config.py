"""Application configuration.

AppConfig is a frozen dataclass. Build one at startup and pass it down;
nothing changes it afterwards.
"""

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from furever.errors import ConfigurationError

# Level names uvicorn accepts for its own loggers
LOG_LEVELS = frozenset({"critical", "error", "warning", "info", "debug", "trace"})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=3000, database_url="sqlite:///:memory:")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False

    # Storage
    database_url: str = "sqlite:///data.sqlite"
    database_echo: bool = False

    # Sessions
    session_ttl: timedelta = timedelta(hours=24)

    # Reference client (None = not built, route answers 500)
    client_dir: str | Path | None = None

    # Logging (None disables the file mirror)
    log_level: str = "info"
    out_log: str | Path | None = "out.log"
    err_log: str | Path | None = "err.log"

    # Probability that an otherwise valid sign-out answers 402.
    # 0.0 disables the failure injection.
    sign_out_failure_rate: float = 0.0

    def __post_init__(self) -> None:
        if self.log_level.lower() not in LOG_LEVELS:
            allowed = ", ".join(sorted(LOG_LEVELS))
            msg = f"log_level must be one of {allowed}, got {self.log_level!r}."
            raise ConfigurationError(msg)
        if self.session_ttl <= timedelta(0):
            msg = f"session_ttl must be positive, got {self.session_ttl!r}."
            raise ConfigurationError(msg)
        if not 0.0 <= self.sign_out_failure_rate <= 1.0:
            msg = (
                "sign_out_failure_rate must be between 0.0 and 1.0, "
                f"got {self.sign_out_failure_rate!r}."
            )
            raise ConfigurationError(msg)
