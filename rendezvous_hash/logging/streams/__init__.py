from .logger_stream import (
    DEFAULT_TEMPLATE as DEFAULT_TEMPLATE,
    LoggerStream as LoggerStream,
)
