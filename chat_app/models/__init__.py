from chat_app.models.base import BaseModelSchema, BaseCreateSchema, BaseEntity, utc_now
from chat_app.models.user import User, UserCreate
from chat_app.models.messaging import (
    MessageStatus, ConversationType,
    Group, Message, MessageRead, UserConversation,
    SendMessageRequest, AckRequest, GroupCreate, GroupMemberCreate,
)

__all__ = [
    "BaseModelSchema",
    "BaseCreateSchema",
    "BaseEntity",
    "utc_now",
    "User",
    "UserCreate",
    "MessageStatus",
    "ConversationType",
    "Group",
    "Message",
    "MessageRead",
    "UserConversation",
    "SendMessageRequest",
    "AckRequest",
    "GroupCreate",
    "GroupMemberCreate",
]
