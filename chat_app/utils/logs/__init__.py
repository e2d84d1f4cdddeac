from .errors import ErrorLogger
from .dependencies import get_error_logger_dependency, ErrorLoggerDep
from .middleware import LoggingMiddleware

__all__ = [
    "ErrorLogger",
    "ErrorLoggerDep",
    "LoggingMiddleware",
    "get_error_logger_dependency",
]
