from dataclasses import dataclass, field, asdict
from typing import Any, List, Optional

from chat_app.views.base import BaseView


# Server -> Client push events (no validation needed, hence python native dataclass)

@dataclass(slots=True)
class ServerMessage(BaseView):
    """New-message event pushed to a recipient's connections."""
    type: str
    message_id: str
    sender_id: str
    destination_id: str
    content: str
    conversation_type: str
    created_at: str

    def to_dict(self) -> dict:
        return asdict(self)


# REST response bodies

@dataclass(slots=True)
class SendMessageResponse(BaseView):
    """Response for a newly stored message."""
    message_id: str
    status: str


@dataclass(slots=True)
class AckResponse(BaseView):
    """Response for delivery and read acknowledgements."""
    message_id: str
    status: str


@dataclass(slots=True)
class GetMessagesResponse(BaseView):
    """One newest-first page of a destination's messages."""
    messages: List[dict] = field(default_factory=list)
    next_cursor: str = ""
    has_more: bool = False


@dataclass(slots=True)
class ConversationListItem(BaseView):
    """A row of the chat list screen."""
    conversation_id: str
    destination_id: str
    conversation_type: str
    updated_at: Any
    unread_count: int = 0
    last_message: Optional[dict] = None


@dataclass(slots=True)
class UserConversationsResponse(BaseView):
    conversations: List[ConversationListItem] = field(default_factory=list)


@dataclass(slots=True)
class SearchMessagesResponse(BaseView):
    results: List[dict] = field(default_factory=list)
    query: str = ""


@dataclass(slots=True)
class GroupMembersAddResponse(BaseView):
    success: bool
    added_count: int


@dataclass(slots=True)
class ConnectionStatusResponse(BaseView):
    connected_users: int
    total_connections: int
