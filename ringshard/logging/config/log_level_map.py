from typing import Dict

from ringshard.logging.models import LogLevel


class LogLevelMap:
    def __init__(self) -> None:
        self._levels: Dict[LogLevel, int] = {
            level: rank for rank, level in enumerate(LogLevel)
        }

    def __getitem__(self, level: LogLevel) -> int:
        return self._levels[level]
