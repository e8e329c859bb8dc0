from .logging_config import (
    LoggingConfig as LoggingConfig,
    LogOutput as LogOutput,
    configure_logging as configure_logging,
)
from .stream_type import StreamType as StreamType
