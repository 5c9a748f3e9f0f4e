from .models import Entry as Entry
from .models import Log as Log
from .models import LogLevel as LogLevel
from .models import LogLevelName as LogLevelName
from .config import LoggingConfig as LoggingConfig
from .config import StreamType as StreamType
from .streams import LoggerStream as LoggerStream
from .ringshard_logging_models import HostAdded as HostAdded
from .ringshard_logging_models import HostRemoved as HostRemoved
from .ringshard_logging_models import LoadCapExhausted as LoadCapExhausted
from .ringshard_logging_models import RingCleared as RingCleared
from .ringshard_logging_models import RingPositionMissing as RingPositionMissing
