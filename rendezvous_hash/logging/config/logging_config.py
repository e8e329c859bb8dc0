import contextvars
from typing import Literal

from rendezvous_hash.env import Env
from rendezvous_hash.logging.models import LogLevel, LogLevelName
from .stream_type import StreamType


LogOutput = Literal['stdout', 'stderr']

_global_log_level = contextvars.ContextVar("_global_log_level", default=LogLevel.INFO)
_global_disabled_loggers = contextvars.ContextVar(
    "_global_disabled_loggers",
    default=frozenset(),
)
_global_log_output_type = contextvars.ContextVar(
    "_global_log_output_type",
    default=StreamType.STDERR,
)


class LoggingConfig:
    """
    View over the context-local logging settings.

    Every instance reads and writes the same context variables, so a
    change made through one LoggingConfig is seen by every LoggerStream
    running in that context.
    """

    def __init__(self) -> None:
        self._log_level: contextvars.ContextVar[LogLevel] = _global_log_level
        self._log_output_type: contextvars.ContextVar[StreamType] = _global_log_output_type
        self._disabled_loggers: contextvars.ContextVar[frozenset[str]] = (
            _global_disabled_loggers
        )

    def update(
        self,
        log_level: LogLevelName | None = None,
        log_output: LogOutput | None = None,
        disabled_loggers: list[str] | None = None,
    ):
        if log_level:
            self._log_level.set(LogLevel.from_name(log_level))

        if log_output:
            self._log_output_type.set(StreamType(log_output))

        if disabled_loggers is not None:
            self._disabled_loggers.set(frozenset(disabled_loggers))

    def enabled(self, logger_name: str, log_level: LogLevel) -> bool:
        if logger_name in self._disabled_loggers.get():
            return False

        return self._log_level.get().allows(log_level)

    @property
    def level(self):
        return self._log_level.get()

    @property
    def output(self):
        return self._log_output_type.get()


def configure_logging(env: Env | None = None) -> LoggingConfig:
    if env is None:
        env = Env()

    config = LoggingConfig()
    config.update(
        log_level=env.RENDEZVOUS_HASH_LOG_LEVEL,
        log_output=env.RENDEZVOUS_HASH_LOG_OUTPUT,
    )

    return config
