from .models import Entry, LogLevel


class MembershipDebug(Entry, kw_only=True):
    operation: str
    node_count: int
    changed: int
    level: LogLevel = LogLevel.DEBUG


class SelectionTrace(Entry, kw_only=True):
    operation: str
    key_size: int
    node_count: int
    selected: int
    level: LogLevel = LogLevel.TRACE
