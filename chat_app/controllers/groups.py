from typing import Optional, Annotated

from fastapi import APIRouter, Depends, status

from chat_app.controllers.base import BaseController
from chat_app.database.base import Repository
from chat_app.database.exceptions import NotFoundError, AlreadyExistsError
from chat_app.dependencies import get_store
from chat_app.models import GroupCreate, GroupMemberCreate
from chat_app.services.messaging import GroupService, MessageService
from chat_app.utils import config
from chat_app.utils.auth import AuthenticatedUser, verify_basic_auth
from chat_app.utils.errors import APIError, Errors
from chat_app.utils.logs import ErrorLogger, ErrorLoggerDep
from chat_app.views.responses import APIResponse
from chat_app.views.messaging import GroupMembersAddResponse


class GroupController(BaseController):
    """Controller for group operations."""

    def __init__(self, store: Repository, logger: Optional[ErrorLogger] = None):
        super().__init__(store, logger)
        self._group_service = GroupService(store, logger)
        self._message_service = MessageService(store, logger)

    def create_group(self, creator_id: str, request: GroupCreate) -> dict:
        """Create a group owned by the caller."""
        member_ids = list(dict.fromkeys([creator_id, *request.member_ids]))
        if len(member_ids) > config.MAX_GROUP_MEMBERS:
            raise APIError(Errors.GROUP_MEMBER_LIMIT)
        self._require_users(member_ids)

        try:
            group = self._group_service.create_group(
                group_id=request.id,
                name=request.name,
                creator_id=creator_id,
                member_ids=member_ids,
                description=request.description,
            )
        except AlreadyExistsError:
            raise APIError(Errors.GROUP_ALREADY_EXISTS)

        return self._group_detail(group.id)

    def get_group(self, group_id: str, user_id: str) -> dict:
        """Get group details."""
        self._require_membership(group_id, user_id)
        return self._group_detail(group_id)

    def get_group_members(self, group_id: str, user_id: str) -> list[str]:
        self._require_membership(group_id, user_id)
        return self._group_service.get_group_members(group_id)

    def add_members(
        self,
        group_id: str,
        user_id: str,
        member_ids: list[str]
    ) -> GroupMembersAddResponse:
        """Add members to a group the caller belongs to."""
        self._require_membership(group_id, user_id)

        current = set(self._group_service.get_group_members(group_id))
        if len(current | set(member_ids)) > config.MAX_GROUP_MEMBERS:
            raise APIError(Errors.GROUP_MEMBER_LIMIT)
        self._require_users(member_ids)

        added = self._group_service.add_members(group_id, member_ids)
        self.log_info("Group members added", group_id=group_id, added_count=added)
        return GroupMembersAddResponse(success=True, added_count=added)

    def _require_membership(self, group_id: str, user_id: str) -> None:
        try:
            self._group_service.get_group(group_id)
        except NotFoundError:
            raise APIError(Errors.GROUP_NOT_FOUND)
        if not self._group_service.is_member(group_id, user_id):
            raise APIError(Errors.NOT_GROUP_MEMBER)

    def _require_users(self, user_ids: list[str]) -> None:
        for member_id in user_ids:
            if not self._message_service.user_exists(member_id):
                raise APIError(Errors.USER_NOT_FOUND, f"User not found: {member_id}")

    def _group_detail(self, group_id: str) -> dict:
        detail = self._group_service.get_group(group_id).model_dump()
        detail["members"] = self._group_service.get_group_members(group_id)
        return detail


router = APIRouter(prefix="/api/v1/groups", tags=["Groups"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create group",
    description="Create a new group chat with specified members."
)
def create_group(
    request: GroupCreate,
    store: Annotated[Repository, Depends(get_store)],
    auth: Annotated[AuthenticatedUser, Depends(verify_basic_auth)],
    logger: ErrorLoggerDep,
):
    """
    Create a new group chat.

    - **id**: Group id, must be unused
    - **name**: Name of the group
    - **member_ids**: Users to add as initial members

    The creating user is always added as a member.
    """
    controller = GroupController(store, logger)
    result = controller.create_group(auth.user_id, request)
    return APIResponse(data=result, message="Group created")


@router.get(
    "/{group_id}",
    summary="Get group details",
    description="Get a group and its member ids."
)
def get_group(
    group_id: str,
    store: Annotated[Repository, Depends(get_store)],
    auth: Annotated[AuthenticatedUser, Depends(verify_basic_auth)],
):
    """Requires the current user to be a member of the group."""
    controller = GroupController(store)
    result = controller.get_group(group_id, auth.user_id)
    return APIResponse(data=result)


@router.get(
    "/{group_id}/members",
    summary="Get group members",
    description="Get list of all members in a group."
)
def get_group_members(
    group_id: str,
    store: Annotated[Repository, Depends(get_store)],
    auth: Annotated[AuthenticatedUser, Depends(verify_basic_auth)],
):
    controller = GroupController(store)
    result = controller.get_group_members(group_id, auth.user_id)
    return APIResponse(data=result)


@router.post(
    "/{group_id}/members",
    summary="Add group members",
    description="Add new members to an existing group."
)
def add_group_members(
    group_id: str,
    request: GroupMemberCreate,
    store: Annotated[Repository, Depends(get_store)],
    auth: Annotated[AuthenticatedUser, Depends(verify_basic_auth)],
    logger: ErrorLoggerDep,
):
    """
    Add members to a group.

    - **user_ids**: Users to add; existing members are skipped

    Requires the current user to be a member of the group.
    Returns success status and number of members added.
    """
    controller = GroupController(store, logger)
    result = controller.add_members(
        group_id=group_id,
        user_id=auth.user_id,
        member_ids=request.user_ids
    )
    return APIResponse(data=result, message="Members added")
