from typing import Optional, Annotated

from fastapi import APIRouter, Depends, status

from chat_app.controllers.base import BaseController
from chat_app.database.base import Repository
from chat_app.database.exceptions import NotFoundError, AlreadyExistsError
from chat_app.dependencies import get_store
from chat_app.models import UserCreate
from chat_app.services.users import UserService
from chat_app.utils.auth import AuthenticatedUser, verify_basic_auth
from chat_app.utils.errors import APIError, Errors
from chat_app.utils.logs import ErrorLogger, ErrorLoggerDep
from chat_app.views.responses import APIResponse


class UserController(BaseController):
    """Controller for user registration and lookup."""

    def __init__(self, store: Repository, logger: Optional[ErrorLogger] = None):
        super().__init__(store, logger)
        self._user_service = UserService(store, logger)

    def create_user(self, request: UserCreate) -> dict:
        try:
            user = self._user_service.create_user(request.id, request.name, request.email)
        except AlreadyExistsError:
            self.log_warning("Duplicate user registration", user_id=request.id)
            raise APIError(Errors.USER_ALREADY_EXISTS)
        return user.model_dump()

    def get_user(self, user_id: str) -> dict:
        try:
            return self._user_service.get_user(user_id).model_dump()
        except NotFoundError:
            raise APIError(Errors.USER_NOT_FOUND)


router = APIRouter(prefix="/api/v1/users", tags=["Users"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    description="Register a user identity that can send and receive messages."
)
def create_user(
    request: UserCreate,
    store: Annotated[Repository, Depends(get_store)],
    auth: Annotated[AuthenticatedUser, Depends(verify_basic_auth)],
    logger: ErrorLoggerDep,
):
    """
    Create a user.

    - **id**: Unique user id
    - **name**: Display name
    - **email**: Valid email address
    """
    controller = UserController(store, logger)
    result = controller.create_user(request)
    return APIResponse(data=result, message="User created")


@router.get(
    "/{user_id}",
    summary="Get user",
)
def get_user(
    user_id: str,
    store: Annotated[Repository, Depends(get_store)],
    auth: Annotated[AuthenticatedUser, Depends(verify_basic_auth)],
):
    controller = UserController(store)
    result = controller.get_user(user_id)
    return APIResponse(data=result)
