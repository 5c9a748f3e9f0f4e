import datetime
import io
import os
import pathlib
import sys
import threading
from typing import Callable, Dict, TextIO, TypeVar

import msgspec

from ringshard.logging.config import LoggingConfig, StreamType
from ringshard.logging.models import Entry, Log, LogLevel

T = TypeVar("T", bound=Entry)


class LoggerStream:
    """
    Synchronous structured logger.

    Entries are rendered through a template to stdout or stderr or, when a
    filename or directory is configured, appended to a log file as msgspec
    JSON lines. Every write is filtered against the shared LoggingConfig.
    """

    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        filename: str | None = None,
        directory: str | None = None,
        models: Dict[str, tuple[type[Entry], Dict[str, object]]] | None = None,
    ) -> None:
        if name is None:
            name = "default"

        self._name = name
        self._default_template = template
        self._default_logfile = filename
        self._default_log_directory = directory

        self._config = LoggingConfig()
        self._files: Dict[str, io.TextIOWrapper] = {}
        self._file_lock = threading.Lock()
        self._closed = False
        self._encoder = msgspec.json.Encoder()

        self._models: Dict[str, tuple[type[Entry], Dict[str, object]]] = {}
        if models:
            self._models.update(models)

        self._models["default"] = (
            Entry,
            {
                "level": LogLevel.INFO,
            },
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def config(self) -> LoggingConfig:
        return self._config

    def enabled(self, level: LogLevel) -> bool:
        return self._closed is False and self._config.enabled(self._name, level)

    def log(
        self,
        entry: T,
        template: str | None = None,
        path: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        if self.enabled(entry.level) is False:
            return

        if filter and filter(entry) is False:
            return

        filename: str | None = None
        directory: str | None = None

        if path:
            logfile_path = pathlib.Path(path)
            is_logfile = len(logfile_path.suffix) > 0

            filename = logfile_path.name if is_logfile else None
            directory = (
                str(logfile_path.parent.absolute())
                if is_logfile
                else str(logfile_path.absolute())
            )

        if template is None:
            template = self._default_template

        if filename is None:
            filename = self._default_logfile

        if directory is None:
            directory = self._default_log_directory

        if filename or directory:
            self._log_to_file(
                entry,
                filename=filename,
                directory=directory,
            )

        else:
            self._log(
                entry,
                template=template,
            )

    def message(
        self,
        message: str,
        name: str = "default",
    ):
        self.log(self._to_entry(message, name))

    def _to_entry(
        self,
        message: str,
        name: str,
    ) -> Entry:
        model, defaults = self._models.get(
            name,
            self._models["default"],
        )

        return model(
            message=message,
            **defaults,
        )

    def _log(
        self,
        entry: Entry,
        template: str | None = None,
    ):
        if template is None:
            template = "{timestamp} - {level} - {thread_id} - {logger} - {filename}:{function_name}.{line_number} - {message}"

        log_file, line_number, function_name = self._find_caller()
        stream = self._get_stream()

        stream.write(
            entry.to_template(
                template,
                context={
                    "logger": self._name,
                    "filename": log_file,
                    "function_name": function_name,
                    "line_number": line_number,
                    "thread_id": threading.get_native_id(),
                    "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
                },
            )
            + "\n"
        )
        stream.flush()

    def _log_to_file(
        self,
        entry: Entry,
        filename: str | None = None,
        directory: str | None = None,
    ):
        if filename is None:
            filename = f"{self._name}.log.json"

        if directory is None:
            directory = os.getcwd()

        logfile_path = os.path.join(directory, filename)
        log_file, line_number, function_name = self._find_caller()

        log = Log(
            entry=entry,
            logger=self._name,
            filename=log_file,
            function_name=function_name,
            line_number=line_number,
        )

        with self._file_lock:
            logfile = self._files.get(logfile_path)
            if logfile is None or logfile.closed:
                pathlib.Path(directory).mkdir(parents=True, exist_ok=True)
                logfile = open(logfile_path, "a", encoding="utf-8")
                self._files[logfile_path] = logfile

            logfile.write(self._encoder.encode(log).decode() + "\n")
            logfile.flush()

    def _get_stream(self) -> TextIO:
        if self._config.output == StreamType.STDOUT:
            return sys.stdout

        return sys.stderr

    def _find_caller(self):
        """
        Find the stack frame of the code that called into the logger so that
        we can note the source file name, line number and function name.
        """
        frame = sys._getframe(1)
        logging_file = os.path.normcase(__file__)

        while frame and os.path.normcase(frame.f_code.co_filename) == logging_file:
            frame = frame.f_back

        if frame is None:
            return "(unknown file)", 0, "(unknown function)"

        code = frame.f_code

        return (
            code.co_filename,
            frame.f_lineno,
            code.co_name,
        )

    def close(self):
        with self._file_lock:
            for logfile in self._files.values():
                if logfile.closed is False:
                    logfile.close()

            self._files.clear()

        self._closed = True
