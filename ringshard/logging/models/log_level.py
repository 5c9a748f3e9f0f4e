from __future__ import annotations

from enum import Enum
from typing import Literal

LogLevelName = Literal[
    "trace",
    "debug",
    "info",
    "warn",
    "warning",
    "error",
    "critical",
    "fatal",
]


class LogLevel(Enum):
    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
    FATAL = "FATAL"

    @classmethod
    def to_level(cls, level_name: LogLevelName | str) -> LogLevel:
        normalized = level_name.upper()
        if normalized == "WARNING":
            normalized = cls.WARN.value

        try:
            return cls(normalized)

        except ValueError:
            raise ValueError(f"Unknown log level {level_name!r}") from None
