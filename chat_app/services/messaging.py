from typing import Optional, List

from chat_app.database.base import Repository
from chat_app.database.exceptions import NotFoundError
from chat_app.services.base import BaseService
from chat_app.utils.logs import ErrorLogger
from chat_app.models import (
    Group, Message, MessageRead,
    MessageStatus, ConversationType,
)
from chat_app.views.messaging import ConversationListItem


class MessageService(BaseService):
    """Service for message creation, lookup and acknowledgements."""

    def __init__(self, store: Repository, logger: Optional[ErrorLogger] = None):
        super().__init__(store, logger)

    def user_exists(self, user_id: str) -> bool:
        try:
            self.store.get_user(user_id)
        except NotFoundError:
            return False
        return True

    def resolve_destination(self, destination_id: str) -> Optional[ConversationType]:
        """
        Work out the conversation kind of a destination id.

        Groups are checked before users, so an id taken by both addresses
        the group. Returns None when neither exists.
        """
        try:
            self.store.get_group(destination_id)
            return ConversationType.GROUP
        except NotFoundError:
            pass

        if self.user_exists(destination_id):
            return ConversationType.ONE_TO_ONE
        return None

    def send_message(
        self,
        sender_id: str,
        destination_id: str,
        text: str,
        conversation_type: ConversationType
    ) -> Message:
        """Store a message; the store notifies recipients afterwards."""
        message = self.store.create_message(sender_id, destination_id, text, conversation_type)
        self.log_info(
            "Message stored",
            message_id=message.id,
            sender_id=sender_id,
            destination_id=destination_id,
            conversation_type=conversation_type.value,
        )
        return message

    def get_message(self, message_id: str) -> Message:
        return self.store.get_message(message_id)

    def get_messages(
        self,
        destination_id: str,
        limit: int,
        cursor: str = ""
    ) -> tuple[List[Message], str]:
        """Get one newest-first page of a destination's messages."""
        return self.store.get_messages(destination_id, limit, cursor)

    def is_recipient(self, message: Message, user_id: str) -> bool:
        """True for the one-to-one destination user or a member of the destination group."""
        if message.conversation_type == ConversationType.ONE_TO_ONE:
            return message.destination_id == user_id
        return self.store.is_group_member(message.destination_id, user_id)

    def mark_as_delivered(self, message_id: str) -> Message:
        """
        Promote a SENT message to DELIVERED.

        Messages already DELIVERED or READ are returned unchanged so the
        status never moves backwards.
        """
        return self.store.update_message_status(
            message_id, MessageStatus.DELIVERED, expected=MessageStatus.SENT
        )

    def mark_as_read(self, message_id: str, user_id: str) -> MessageRead:
        """Record a read receipt. Acknowledging twice is a no-op."""
        return self.store.create_message_read(message_id, user_id)

    def get_message_reads(self, message_id: str) -> List[MessageRead]:
        return self.store.get_message_reads(message_id)


class GroupService(BaseService):
    """Service for handling group operations."""

    def __init__(self, store: Repository, logger: Optional[ErrorLogger] = None):
        super().__init__(store, logger)

    def create_group(
        self,
        group_id: str,
        name: str,
        creator_id: str,
        member_ids: List[str],
        description: str = ""
    ) -> Group:
        """Create a group with the creator and initial members."""
        group = self.store.create_group(Group(
            id=group_id,
            name=name,
            description=description,
            created_by=creator_id,
        ))

        self.store.add_group_member(group.id, creator_id)
        for member_id in member_ids:
            if member_id != creator_id:
                self.store.add_group_member(group.id, member_id)

        self.log_info("Group created", group_id=group.id, creator_id=creator_id)
        return group

    def add_members(self, group_id: str, user_ids: List[str]) -> int:
        """Add multiple members to a group. Returns count added."""
        added = 0
        for user_id in user_ids:
            if self.store.add_group_member(group_id, user_id):
                added += 1
        return added

    def get_group(self, group_id: str) -> Group:
        return self.store.get_group(group_id)

    def get_group_members(self, group_id: str) -> List[str]:
        """Member ids of a group, sorted."""
        return sorted(self.store.get_group_members(group_id))

    def is_member(self, group_id: str, user_id: str) -> bool:
        return self.store.is_group_member(group_id, user_id)


class ConversationService(BaseService):
    """Service building the per-user chat list."""

    def __init__(self, store: Repository, logger: Optional[ErrorLogger] = None):
        super().__init__(store, logger)

    def get_conversations_list(self, user_id: str) -> List[ConversationListItem]:
        """
        Get a user's conversations, most recently active first.

        Each item carries the newest message of the conversation and the
        number of its messages the user neither sent nor read. A one-to-one
        row only covers messages between the user and that peer.
        """
        items = []
        for conversation in self.store.get_user_conversations(user_id):
            latest, unread = self.store.get_conversation_summary(
                user_id, conversation.destination_id, conversation.conversation_type
            )
            items.append(ConversationListItem(
                conversation_id=conversation.id,
                destination_id=conversation.destination_id,
                conversation_type=conversation.conversation_type.value,
                updated_at=conversation.updated_at,
                unread_count=unread,
                last_message=latest.model_dump() if latest else None,
            ))
        return items
