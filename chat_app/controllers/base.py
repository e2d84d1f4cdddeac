from abc import ABC
from typing import Optional

from chat_app.database.base import Repository
from chat_app.utils.logs import ErrorLogger


class BaseController(ABC):
    """
    Abstract base class for all controller classes.

    Controllers apply the HTTP permission rules, translate store results
    into response views and delegate store work to services.
    """

    def __init__(
        self,
        store: Repository,
        logger: Optional[ErrorLogger] = None
    ):
        self._store = store
        self._logger = logger

    @property
    def store(self) -> Repository:
        """Message store."""
        return self._store

    @property
    def logger(self) -> Optional[ErrorLogger]:
        """Error logger instance."""
        return self._logger

    def log_warning(self, message: str, **kwargs) -> None:
        """Log a warning if logger is available."""
        if self._logger:
            self._logger.warning(message, **kwargs)

    def log_info(self, message: str, **kwargs) -> None:
        """Log info if logger is available."""
        if self._logger:
            self._logger.info(message, **kwargs)
