from .config import (
    LoggingConfig as LoggingConfig,
    StreamType as StreamType,
    configure_logging as configure_logging,
)
from .models import Entry as Entry, Log as Log, LogLevel as LogLevel
from .rendezvous_hash_logging_models import (
    MembershipDebug as MembershipDebug,
    SelectionTrace as SelectionTrace,
)
from .streams import LoggerStream as LoggerStream
