from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field

from chat_app.models.base import BaseEntity, BaseCreateSchema


class MessageStatus(str, Enum):
    """Delivery state of a message. Only ever moves forward: SENT -> DELIVERED -> READ."""
    SENT = "SENT"
    DELIVERED = "DELIVERED"
    READ = "READ"


class ConversationType(str, Enum):
    ONE_TO_ONE = "one-to-one"
    GROUP = "group"


# Entities

class Group(BaseEntity):
    """Group identity. Membership is held separately by the store."""
    id: str
    name: str
    description: str = ""
    created_by: str


class Message(BaseEntity):
    """A message addressed to a user (one-to-one) or a group.

    Only ``status`` and ``updated_at`` change after creation.
    """
    id: str
    sender_id: str
    destination_id: str
    message_text: str
    status: MessageStatus = MessageStatus.SENT
    conversation_type: ConversationType


class MessageRead(BaseEntity):
    """Read receipt; at most one per (message_id, user_id)."""
    id: str
    message_id: str
    user_id: str


class UserConversation(BaseEntity):
    """Per-user chat list row, one per (user_id, destination_id, conversation_type)."""
    id: str
    user_id: str
    destination_id: str
    conversation_type: ConversationType


# Requests

class SendMessageRequest(BaseCreateSchema):
    """Body of POST /sendMessage. sender_id defaults to the authenticated user."""

    # message text is stored exactly as sent
    model_config = ConfigDict(str_strip_whitespace=False)

    sender_id: Optional[str] = None
    destination_id: str = Field(..., min_length=1)
    message: str


class AckRequest(BaseCreateSchema):
    """Body of the delivery and read acknowledgement endpoints."""
    user_id: Optional[str] = None
    message_id: str = Field(..., min_length=1)


class GroupCreate(BaseCreateSchema):
    """Schema for creating a group."""
    id: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(default="", max_length=1000)
    member_ids: list[str] = Field(default_factory=list)


class GroupMemberCreate(BaseCreateSchema):
    """Schema for adding group members."""
    user_ids: list[str] = Field(..., min_length=1)
