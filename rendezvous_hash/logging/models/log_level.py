from __future__ import annotations

from enum import Enum
from typing import Literal

LogLevelName = Literal['trace', 'debug', 'info', 'warn', 'error', 'critical', 'fatal']

_SEVERITY: dict[str, int] = {
    "TRACE": 0,
    "DEBUG": 1,
    "INFO": 2,
    "WARN": 3,
    "ERROR": 4,
    "CRITICAL": 5,
    "FATAL": 6,
}


class LogLevel(Enum):
    """Log levels, ordered by severity from TRACE to FATAL."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
    FATAL = "FATAL"

    @property
    def severity(self) -> int:
        return _SEVERITY[self.value]

    def allows(self, level: LogLevel) -> bool:
        """Whether an entry at ``level`` passes a threshold set to this level."""
        return level.severity >= self.severity

    @classmethod
    def from_name(cls, name: str) -> LogLevel:
        try:
            return cls(name.upper())
        except ValueError:
            raise ValueError(f"Unknown log level {name!r}") from None
