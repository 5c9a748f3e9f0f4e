from .models import Entry, LogLevel


class HostAdded(Entry, kw_only=True):
    host: str
    replicas: int
    host_count: int
    level: LogLevel = LogLevel.DEBUG


class HostRemoved(Entry, kw_only=True):
    host: str
    load: int
    host_count: int
    level: LogLevel = LogLevel.DEBUG


class RingPositionMissing(Entry, kw_only=True):
    host: str
    position: int
    replica: int
    level: LogLevel = LogLevel.WARN


class LoadCapExhausted(Entry, kw_only=True):
    key: str
    host: str
    cap: float
    hosts_checked: int
    level: LogLevel = LogLevel.WARN


class RingCleared(Entry, kw_only=True):
    hosts_removed: int
    level: LogLevel = LogLevel.DEBUG
