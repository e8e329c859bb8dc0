from __future__ import annotations

import sys
from typing import Callable, TextIO, TypeVar

import msgspec

from rendezvous_hash.logging.config import LoggingConfig, StreamType
from rendezvous_hash.logging.models import Entry, Log, LogLevel

T = TypeVar('T', bound=Entry)


DEFAULT_TEMPLATE = "{timestamp} - {level} - {thread_id} - {filename}:{function_name}.{line_number} - {message}"


class LoggerStream:
    """
    Synchronous, level-gated writer for structured log entries.

    Entries are rendered with a format template, or encoded as JSON
    lines, and written to stdout or stderr as selected by the shared
    LoggingConfig. Streams are resolved at write time so that captured
    or replaced sys.stdout/sys.stderr are honored.
    """

    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        streams: dict[StreamType, TextIO] | None = None,
    ) -> None:
        if name is None:
            name = 'default'

        if template is None:
            template = DEFAULT_TEMPLATE

        self._name = name
        self._default_template = template
        self._streams = streams
        self._config = LoggingConfig()

    @property
    def name(self):
        return self._name

    def enabled(self, level: LogLevel) -> bool:
        return self._config.enabled(self._name, level)

    def log(
        self,
        entry: T,
        template: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ) -> bool:
        if not self._accepts(entry, filter):
            return False

        log = Log.from_caller(self._name, entry, depth=1)

        self._write(
            entry.to_template(
                template or self._default_template,
                context=log.context(),
            )
        )

        return True

    def log_json(
        self,
        entry: T,
        filter: Callable[[T], bool] | None = None,
    ) -> bool:
        if not self._accepts(entry, filter):
            return False

        log = Log.from_caller(self._name, entry, depth=1)
        self._write(msgspec.json.encode(log).decode())

        return True

    def _accepts(self, entry: T, filter: Callable[[T], bool] | None) -> bool:
        if not self._config.enabled(self._name, entry.level):
            return False

        return filter is None or filter(entry) is not False

    def _write(self, line: str) -> None:
        stream = self._get_stream()
        stream.write(line + "\n")
        stream.flush()

    def _get_stream(self) -> TextIO:
        output = self._config.output
        if self._streams and (stream := self._streams.get(output)):
            return stream

        if output == StreamType.STDOUT:
            return sys.stdout

        return sys.stderr
