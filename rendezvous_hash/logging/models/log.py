import datetime
import sys
import threading

import msgspec

from .entry import Entry


def _utc_now() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


class Log(msgspec.Struct, kw_only=True):
    """An entry stamped with where, when and by whom it was logged."""

    logger: str
    entry: Entry
    filename: str
    function_name: str
    line_number: int
    thread_id: int = msgspec.field(default_factory=threading.get_native_id)
    timestamp: str = msgspec.field(default_factory=_utc_now)

    @classmethod
    def from_caller(cls, logger: str, entry: Entry, depth: int = 1) -> "Log":
        """
        Stamp ``entry`` with the frame ``depth`` levels above this call.
        """
        frame = sys._getframe(depth + 1)
        code = frame.f_code

        return cls(
            logger=logger,
            entry=entry,
            filename=code.co_filename,
            function_name=code.co_name,
            line_number=frame.f_lineno,
        )

    def context(self) -> dict[str, str | int]:
        return {
            "logger": self.logger,
            "filename": self.filename,
            "function_name": self.function_name,
            "line_number": self.line_number,
            "thread_id": self.thread_id,
            "timestamp": self.timestamp,
        }
