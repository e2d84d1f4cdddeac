import logging
import orjson
import sys

from typing import Optional
from contextvars import ContextVar

from chat_app.utils.config import LOG_LEVEL

_current_error_logger: ContextVar[Optional['ErrorLogger']] = ContextVar('current_error_logger', default=None)


class ErrorLogger:
    """Structured logger for the chat service.

    Keyword arguments passed to any log call are appended to the line as
    an orjson-encoded object.
    """

    def __init__(self, name: str = "error", level: str = LOG_LEVEL):
        self.name = name
        self.logger = logging.getLogger(f"chat_app.{name}")
        self.logger.setLevel(_resolve_level(level))
        self.logger.handlers.clear()
        self.logger.propagate = False

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(_resolve_level(level))

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - '
            '%(module)s:%(funcName)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

    @staticmethod
    def _format(message: str, context: dict) -> str:
        if not context:
            return message
        return f"{message} | {orjson.dumps(context, default=str).decode()}"

    def info(self, message: str, **kwargs):
        """Log info message."""
        self.logger.info(self._format(message, kwargs), stacklevel=2)

    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self.logger.warning(self._format(message, kwargs), stacklevel=2)

    def error(self, message: str, **kwargs):
        """Log error message."""
        self.logger.error(self._format(message, kwargs), stacklevel=2)

    def debug(self, message: str, **kwargs):
        """Log debug message."""
        self.logger.debug(self._format(message, kwargs), stacklevel=2)

    def exception(self, message: str, exc: Exception, **kwargs):
        """Log exception with full traceback."""
        error_data = {
            'error_type': type(exc).__name__,
            'error_message': str(exc),
            **kwargs
        }
        self.logger.error(self._format(message, error_data), exc_info=exc, stacklevel=2)

    def log_store_error(self, operation: str, error: Exception, **kwargs):
        """Log an unexpected failure raised by the message store."""
        self.exception(
            f"Store error during {operation}",
            error,
            operation=operation,
            **kwargs
        )

    def log_notification_error(self, destination_id: str, error: Exception, **kwargs):
        """Log a failed notification dispatch."""
        self.exception(
            f"Notification dispatch failed for {destination_id}",
            error,
            destination_id=destination_id,
            **kwargs
        )


def _resolve_level(level: str) -> int:
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO

