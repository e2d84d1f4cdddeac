from typing import Annotated
from fastapi import Depends

from .errors import ErrorLogger, _current_error_logger


def get_error_logger_dependency() -> ErrorLogger:
    """
    Dependency for ErrorLogger.
    Reuses the logger installed by LoggingMiddleware, or creates one
    when the route runs without the middleware.
    Returns:
        ErrorLogger instance
    """
    return _current_error_logger.get() or ErrorLogger("request")


ErrorLoggerDep = Annotated[ErrorLogger, Depends(get_error_logger_dependency)]
