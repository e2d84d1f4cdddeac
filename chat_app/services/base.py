from abc import ABC
from typing import Optional

from chat_app.database.base import Repository
from chat_app.utils.logs import ErrorLogger


class BaseService(ABC):
    """
    Abstract base class for all service layer classes.

    Services run operations against the message store on behalf of
    controllers. They depend on the Repository interface only.
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

    def log_error(self, message: str, **kwargs) -> None:
        """Log an error if logger is available."""
        if self._logger:
            self._logger.error(message, **kwargs)

    def log_info(self, message: str, **kwargs) -> None:
        """Log info if logger is available."""
        if self._logger:
            self._logger.info(message, **kwargs)
