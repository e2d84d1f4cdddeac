from abc import ABC, abstractmethod
from typing import Optional, Protocol

from chat_app.models import (
    User, Group, Message, MessageRead, UserConversation,
    MessageStatus, ConversationType,
)


class NotificationDispatcher(Protocol):
    """Outbound collaborator told about every newly created message."""

    def notify(self, destination_id: str, message: Message) -> bool:
        ...


class Repository(ABC):
    """
    Storage capability used by services and controllers.

    Services depend only on this interface, so a persistent backend can
    replace MemoryStore without touching them. Implementations raise
    NotFoundError, AlreadyExistsError or InvalidArgumentError and never
    return partial results.
    """

    # Users

    @abstractmethod
    def create_user(self, user: User) -> User:
        """Persist a new user. Raises AlreadyExistsError on a taken id."""

    @abstractmethod
    def get_user(self, user_id: str) -> User:
        """Raises NotFoundError."""

    # Groups

    @abstractmethod
    def create_group(self, group: Group) -> Group:
        """Persist a group with an empty membership set. Raises AlreadyExistsError."""

    @abstractmethod
    def get_group(self, group_id: str) -> Group:
        """Raises NotFoundError."""

    @abstractmethod
    def add_group_member(self, group_id: str, user_id: str) -> bool:
        """Add a member; True if newly added. Raises NotFoundError for an unknown group."""

    @abstractmethod
    def is_group_member(self, group_id: str, user_id: str) -> bool:
        """Never raises; False for an unknown group or user."""

    @abstractmethod
    def get_group_members(self, group_id: str) -> set[str]:
        """Raises NotFoundError for an unknown group."""

    # Messages

    @abstractmethod
    def create_message(
        self,
        sender_id: str,
        destination_id: str,
        text: str,
        conversation_type: ConversationType,
    ) -> Message:
        """Append a SENT message and update every participant's conversation row."""

    @abstractmethod
    def get_message(self, message_id: str) -> Message:
        """Raises NotFoundError."""

    @abstractmethod
    def get_messages(
        self,
        destination_id: str,
        limit: int,
        cursor: str = "",
    ) -> tuple[list[Message], str]:
        """Newest-first page starting at ``cursor`` plus the next cursor ("" when exhausted)."""

    @abstractmethod
    def update_message_status(
        self,
        message_id: str,
        status: MessageStatus,
        expected: Optional[MessageStatus] = None,
    ) -> Message:
        """
        Overwrite the status. Raises NotFoundError.

        With ``expected`` set, the status only changes if it currently equals
        ``expected``; otherwise the message is returned unchanged. The check
        and the write happen under one lock.
        """

    # Read receipts

    @abstractmethod
    def create_message_read(self, message_id: str, user_id: str) -> MessageRead:
        """Idempotently record a receipt and mark the message READ. Raises NotFoundError."""

    @abstractmethod
    def get_message_reads(self, message_id: str) -> list[MessageRead]:
        """Receipts for a message; empty for unknown messages."""

    # Conversations

    @abstractmethod
    def get_user_conversations(self, user_id: str) -> list[UserConversation]:
        """Conversation rows for a user, most recently active first."""

    @abstractmethod
    def count_unread(self, user_id: str, destination_id: str) -> int:
        """Messages in ``destination_id`` not sent by and not read by ``user_id``."""

    @abstractmethod
    def get_conversation_summary(
        self,
        user_id: str,
        destination_id: str,
        conversation_type: ConversationType,
    ) -> tuple[Optional[Message], int]:
        """
        Newest message and unread count of one of ``user_id``'s conversation rows.

        A group row covers every message sent to the group. A one-to-one
        row covers only the messages exchanged between ``user_id`` and
        ``destination_id`` in either direction.
        """

    # Search

    @abstractmethod
    def search_messages(self, user_id: str, query: str) -> list[Message]:
        """Case-insensitive keyword match over messages visible to ``user_id``."""
