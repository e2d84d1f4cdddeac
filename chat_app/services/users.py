from typing import Optional

from chat_app.database.base import Repository
from chat_app.models import User
from chat_app.services.base import BaseService
from chat_app.utils.logs import ErrorLogger


class UserService(BaseService):
    """Service for user identity operations."""

    def __init__(self, store: Repository, logger: Optional[ErrorLogger] = None):
        super().__init__(store, logger)

    def create_user(self, user_id: str, name: str, email: str) -> User:
        """Register a user. Raises AlreadyExistsError on a taken id."""
        user = self.store.create_user(User(id=user_id, name=name, email=email))
        self.log_info("User created", user_id=user.id)
        return user

    def get_user(self, user_id: str) -> User:
        return self.store.get_user(user_id)
