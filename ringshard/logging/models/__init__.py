from .entry import Entry as Entry
from .log import Log as Log
from .log_level import LogLevel as LogLevel
from .log_level import LogLevelName as LogLevelName
