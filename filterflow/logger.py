"""
FilterFlow logging.

A single ``logger`` object is shared by the whole package. Errors always reach
stderr; everything at the configured level can additionally be written to a
timestamped file once ``enable_file_logging`` is called (``bootstrap`` does this
when the settings define ``log_dir``).

Usage:
    from filterflow.logger import logger

    logger.enable_file_logging("render", "/tmp/filterflow-logs", "DEBUG")
    logger.debug("Compiled expression 'name|upper'")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from filterflow.constants import FILTERFLOW_DEFAULT_LOGGER

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] - %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] [%(module)s.%(funcName)s] - %(message)s"


class MicrosecondFormatter(logging.Formatter):
    """Formatter whose default timestamps are ISO 8601 with microseconds."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        created = datetime.fromtimestamp(record.created)  # noqa: DTZ006
        return created.strftime(datefmt) if datefmt else created.isoformat()


class FilterFlowLogger:
    """
    Process-wide wrapper around the ``filterflow`` stdlib logger.

    The wrapper methods log with ``stacklevel=2`` so records point at the code
    that called them, not at this class.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._setup()
            cls._instance = instance
        return cls._instance

    def _setup(self) -> None:
        self._logger = logging.getLogger("filterflow")
        self._logger.setLevel(logging.DEBUG)

        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(logging.ERROR)
        stderr_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        self._logger.addHandler(stderr_handler)

        self._file_handler: logging.FileHandler | None = None
        self._log_file: str | None = None

    @property
    def log_file(self) -> str | None:
        """Path of the active log file, if file logging is enabled."""
        return self._log_file

    def set_level(self, log_level: str) -> None:
        """Apply a level name such as "DEBUG" to the logger and the file handler."""
        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO
        self._logger.setLevel(level)
        if self._file_handler:
            self._file_handler.setLevel(level)

    def enable_file_logging(
        self,
        name: str,
        log_dir: str | Path | None = None,
        log_level: str = FILTERFLOW_DEFAULT_LOGGER["level"],
    ) -> str:
        """
        Write log records to ``<log_dir>/<name>_<YYYYmmdd_HHMMSS>.log``.

        A file handler that is already active gets closed first.

        Args:
            name: Log file name prefix.
            log_dir: Target directory, created if needed. Defaults to ``.filterflow/logs``.
            log_level: Level applied to the logger and the new handler.

        Returns:
            Path of the new log file.
        """
        self.disable_file_logging()

        directory = Path(log_dir or FILTERFLOW_DEFAULT_LOGGER["directory"])
        directory.mkdir(parents=True, exist_ok=True)
        log_file = directory / f"{name}_{datetime.now():%Y%m%d_%H%M%S}.log"

        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(MicrosecondFormatter(FILE_FORMAT))
        self._logger.addHandler(handler)
        self._file_handler = handler
        self._log_file = str(log_file)
        self.set_level(log_level)

        self.debug(f"File logging enabled: {log_file}")
        return self._log_file

    def disable_file_logging(self) -> None:
        """Detach and close the file handler, if there is one."""
        if self._file_handler is None:
            return
        self._logger.removeHandler(self._file_handler)
        self._file_handler.close()
        self._file_handler = None
        self._log_file = None

    def debug(self, message: str, *args: object, **kwargs) -> None:
        self._logger.debug(message, *args, stacklevel=2, **kwargs)

    def info(self, message: str, *args: object, **kwargs) -> None:
        self._logger.info(message, *args, stacklevel=2, **kwargs)

    def warning(self, message: str, *args: object, **kwargs) -> None:
        self._logger.warning(message, *args, stacklevel=2, **kwargs)

    def error(self, message: str, *args: object, **kwargs) -> None:
        self._logger.error(message, *args, stacklevel=2, **kwargs)

    def critical(self, message: str, *args: object, **kwargs) -> None:
        self._logger.critical(message, *args, stacklevel=2, **kwargs)

    def exception(self, message: str, *args: object, **kwargs) -> None:
        """Log at ERROR level with the current exception's traceback."""
        self._logger.exception(message, *args, stacklevel=2, **kwargs)


logger = FilterFlowLogger()
