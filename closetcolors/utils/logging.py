"""
Closet Colors Structured Logging
Centralized logging configuration using loguru.

Engine modules import ``logger`` from loguru directly; this wrapper only owns the
sink configuration and the ``extra`` binding used by the adapters.
"""
import sys
from typing import Dict, Any, Optional

from loguru import logger

from closetcolors.config import config


LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message} | {extra}"
# Handler id loguru assigns to its built-in stderr sink
DEFAULT_HANDLER_ID = 0


class StructuredLogger:
    """Structured logger for closetcolors adapters."""

    def __init__(self, level: Optional[str] = None, serialize: bool = False):
        self.level = (level or config.LOG_LEVEL).upper()
        self.serialize = serialize
        self._configure_logger()

    def _configure_logger(self):
        """
        Replace loguru's default stderr sink with a stdout sink.

        Sinks added by the host application are left alone.
        """
        try:
            logger.remove(DEFAULT_HANDLER_ID)
        except ValueError:
            pass  # already removed by the host or an earlier instance
        self.handler_id = logger.add(
            sys.stdout,
            format=LOG_FORMAT,
            level=self.level,
            serialize=self.serialize  # True for JSON lines
        )

    def close(self):
        """Remove the sink this instance added."""
        logger.remove(self.handler_id)

    def _emit(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        target = logger.bind(**extra) if extra else logger
        target.log(level, message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("WARNING", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("ERROR", message, extra)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("DEBUG", message, extra)


_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create the process-wide logger wrapper."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger
