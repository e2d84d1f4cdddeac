from typing import Optional, Annotated

from fastapi import APIRouter, Depends, Query, status

from chat_app.controllers.base import BaseController
from chat_app.database.base import Repository
from chat_app.database.exceptions import NotFoundError
from chat_app.dependencies import get_store
from chat_app.models import (
    Message, SendMessageRequest, AckRequest,
    ConversationType, MessageStatus,
)
from chat_app.services.messaging import MessageService, ConversationService
from chat_app.utils import config
from chat_app.utils.auth import AuthenticatedUser, verify_basic_auth
from chat_app.utils.errors import APIError, Errors
from chat_app.utils.logs import ErrorLogger, ErrorLoggerDep
from chat_app.views.responses import APIResponse
from chat_app.views.messaging import (
    SendMessageResponse,
    AckResponse,
    GetMessagesResponse,
    UserConversationsResponse,
)


def normalize_limit(limit: Optional[int]) -> int:
    """Missing or non-positive limits fall back to the default; large ones are capped."""
    if limit is None or limit <= 0:
        return config.DEFAULT_MESSAGE_LIMIT
    return min(limit, config.MAX_MESSAGE_LIMIT)


def resolve_acting_user(caller_id: str, requested_id: Optional[str]) -> str:
    """A body may repeat the caller's id but never name someone else."""
    if requested_id and requested_id != caller_id:
        raise APIError(Errors.ACCESS_DENIED)
    return caller_id


class MessageController(BaseController):
    """Controller for sending, reading and acknowledging messages."""

    def __init__(self, store: Repository, logger: Optional[ErrorLogger] = None):
        super().__init__(store, logger)
        self._message_service = MessageService(store, logger)
        self._conversation_service = ConversationService(store, logger)

    def send_message(
        self,
        caller_id: str,
        request: SendMessageRequest,
        group_chat_enabled: bool = True
    ) -> SendMessageResponse:
        """Validate a send request and store the message."""
        if not request.message.strip():
            self.log_warning("Rejected empty message", sender_id=caller_id)
            raise APIError(Errors.MESSAGE_EMPTY)
        if len(request.message) > config.MAX_MESSAGE_LENGTH:
            raise APIError(Errors.MESSAGE_TOO_LONG)

        sender_id = resolve_acting_user(caller_id, request.sender_id)
        if not self._message_service.user_exists(sender_id):
            raise APIError(Errors.SENDER_NOT_FOUND)

        conversation_type = self._message_service.resolve_destination(request.destination_id)
        if conversation_type is None:
            raise APIError(Errors.DESTINATION_NOT_FOUND)

        if conversation_type == ConversationType.GROUP:
            if not self.store.is_group_member(request.destination_id, sender_id):
                raise APIError(Errors.NOT_GROUP_MEMBER)
            if not group_chat_enabled:
                raise APIError(Errors.FEATURE_DISABLED, "Group chat is disabled")

        message = self._message_service.send_message(
            sender_id=sender_id,
            destination_id=request.destination_id,
            text=request.message,
            conversation_type=conversation_type,
        )
        return SendMessageResponse(message_id=message.id, status=message.status.value)

    def acknowledge_delivered(self, caller_id: str, request: AckRequest) -> AckResponse:
        """Mark a message delivered to the caller."""
        user_id = resolve_acting_user(caller_id, request.user_id)
        message = self._load_recipient_message(request.message_id, user_id)

        updated = self._message_service.mark_as_delivered(message.id)
        self.log_info("Delivery acknowledged", message_id=message.id, user_id=user_id)
        return AckResponse(message_id=updated.id, status=updated.status.value)

    def acknowledge_read(self, caller_id: str, request: AckRequest) -> AckResponse:
        """Record that the caller read a message."""
        user_id = resolve_acting_user(caller_id, request.user_id)
        message = self._load_recipient_message(request.message_id, user_id)

        try:
            self._message_service.mark_as_read(message.id, user_id)
        except NotFoundError:
            raise APIError(Errors.MESSAGE_NOT_FOUND)

        self.log_info("Read acknowledged", message_id=message.id, user_id=user_id)
        return AckResponse(message_id=message.id, status=MessageStatus.READ.value)

    def get_messages(
        self,
        caller_id: str,
        destination_id: str,
        limit: Optional[int] = None,
        cursor: str = ""
    ) -> GetMessagesResponse:
        """Get one page of a conversation, newest first."""
        conversation_type = self._message_service.resolve_destination(destination_id)
        if conversation_type == ConversationType.GROUP and not self.store.is_group_member(destination_id, caller_id):
            raise APIError(Errors.NOT_GROUP_MEMBER)

        messages, next_cursor = self._message_service.get_messages(
            destination_id, normalize_limit(limit), cursor
        )
        return GetMessagesResponse(
            messages=[message.model_dump() for message in messages],
            next_cursor=next_cursor,
            has_more=next_cursor != "",
        )

    def get_message(self, caller_id: str, message_id: str) -> dict:
        """Get a single message visible to the caller."""
        message = self._load_visible_message(message_id, caller_id)
        return message.model_dump()

    def get_message_reads(self, caller_id: str, message_id: str) -> list[dict]:
        """Get the read receipts of a message visible to the caller."""
        message = self._load_visible_message(message_id, caller_id)
        return [receipt.model_dump() for receipt in self._message_service.get_message_reads(message.id)]

    def get_user_conversations(self, caller_id: str, user_id: str) -> UserConversationsResponse:
        """Get the caller's chat list."""
        if user_id != caller_id:
            raise APIError(Errors.ACCESS_DENIED)
        return UserConversationsResponse(
            conversations=self._conversation_service.get_conversations_list(user_id)
        )

    def _load_message(self, message_id: str) -> Message:
        try:
            return self._message_service.get_message(message_id)
        except NotFoundError:
            raise APIError(Errors.MESSAGE_NOT_FOUND)

    def _load_recipient_message(self, message_id: str, user_id: str) -> Message:
        message = self._load_message(message_id)
        if not self._message_service.is_recipient(message, user_id):
            self.log_warning("Acknowledgement by non-recipient", message_id=message_id, user_id=user_id)
            raise APIError(Errors.NOT_MESSAGE_RECIPIENT)
        return message

    def _load_visible_message(self, message_id: str, user_id: str) -> Message:
        message = self._load_message(message_id)
        if message.sender_id != user_id and not self._message_service.is_recipient(message, user_id):
            raise APIError(Errors.ACCESS_DENIED)
        return message


router = APIRouter(prefix="/api/v1", tags=["Messages"])


@router.post(
    "/sendMessage",
    status_code=status.HTTP_201_CREATED,
    summary="Send message",
    description="Send a message to a user or to a group the caller belongs to."
)
def send_message(
    request: SendMessageRequest,
    store: Annotated[Repository, Depends(get_store)],
    auth: Annotated[AuthenticatedUser, Depends(verify_basic_auth)],
    logger: ErrorLoggerDep,
):
    """
    Send a message.

    - **sender_id**: Optional, must equal the authenticated user
    - **destination_id**: A group id or a user id (groups are matched first)
    - **message**: Message text

    Returns the new message id with status SENT.
    """
    controller = MessageController(store, logger)
    result = controller.send_message(
        caller_id=auth.user_id,
        request=request,
        group_chat_enabled=config.ENABLE_GROUP_CHAT,
    )
    return APIResponse(data=result, message="Message sent")


@router.post(
    "/ack/delivered",
    summary="Acknowledge delivery",
    description="Mark a message as delivered to the authenticated recipient."
)
def ack_delivered(
    request: AckRequest,
    store: Annotated[Repository, Depends(get_store)],
    auth: Annotated[AuthenticatedUser, Depends(verify_basic_auth)],
    logger: ErrorLoggerDep,
):
    """
    Acknowledge delivery of a message.

    Only a SENT message moves to DELIVERED; later statuses are kept.
    """
    controller = MessageController(store, logger)
    result = controller.acknowledge_delivered(auth.user_id, request)
    return APIResponse(data=result, message="Message delivered")


@router.post(
    "/ack/read",
    summary="Acknowledge read",
    description="Record a read receipt for the authenticated recipient."
)
def ack_read(
    request: AckRequest,
    store: Annotated[Repository, Depends(get_store)],
    auth: Annotated[AuthenticatedUser, Depends(verify_basic_auth)],
    logger: ErrorLoggerDep,
):
    """
    Acknowledge reading a message.

    Repeating the acknowledgement is harmless.
    """
    controller = MessageController(store, logger)
    result = controller.acknowledge_read(auth.user_id, request)
    return APIResponse(data=result, message="Message marked as read")


@router.get(
    "/conversations/{destination_id}/messages",
    summary="Get conversation messages",
    description="Get a newest-first page of messages addressed to a user or group."
)
def get_messages(
    destination_id: str,
    store: Annotated[Repository, Depends(get_store)],
    auth: Annotated[AuthenticatedUser, Depends(verify_basic_auth)],
    limit: Optional[int] = Query(default=None, description="Page size (default 50, max 100)"),
    cursor: str = Query(default="", description="next_cursor from the previous page"),
):
    """
    Get messages for a destination.

    - **limit**: Page size; missing or non-positive values use the default
    - **cursor**: Resume point returned as next_cursor; unknown values restart at the first page
    """
    controller = MessageController(store)
    result = controller.get_messages(auth.user_id, destination_id, limit, cursor)
    return APIResponse(data=result)


@router.get(
    "/messages/{message_id}",
    summary="Get message",
    description="Get a single message the caller sent or received."
)
def get_message(
    message_id: str,
    store: Annotated[Repository, Depends(get_store)],
    auth: Annotated[AuthenticatedUser, Depends(verify_basic_auth)],
):
    controller = MessageController(store)
    result = controller.get_message(auth.user_id, message_id)
    return APIResponse(data=result)


@router.get(
    "/messages/{message_id}/reads",
    summary="Get read receipts",
    description="Get the read receipts recorded for a message."
)
def get_message_reads(
    message_id: str,
    store: Annotated[Repository, Depends(get_store)],
    auth: Annotated[AuthenticatedUser, Depends(verify_basic_auth)],
):
    controller = MessageController(store)
    result = controller.get_message_reads(auth.user_id, message_id)
    return APIResponse(data=result)


@router.get(
    "/users/{user_id}/conversations",
    summary="Get conversation list",
    description="Get the caller's conversations with last message preview and unread count."
)
def get_user_conversations(
    user_id: str,
    store: Annotated[Repository, Depends(get_store)],
    auth: Annotated[AuthenticatedUser, Depends(verify_basic_auth)],
):
    """
    Get all conversations of the authenticated user.

    Each item contains:
    - **conversation_id**: Row id
    - **destination_id**: The other user, or the group
    - **last_message**: Newest message of the destination
    - **unread_count**: Messages the user neither sent nor read
    - **updated_at**: Time of the latest message in the conversation
    """
    controller = MessageController(store)
    result = controller.get_user_conversations(auth.user_id, user_id)
    return APIResponse(data=result)
