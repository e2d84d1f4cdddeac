from chat_app.views.base import BaseView
from chat_app.views.responses import (
    OrjsonResponse,
    APIResponse,
    ErrorDetail,
    ErrorBody,
    ErrorResponse,
)
from chat_app.views.messaging import (
    ServerMessage,
    SendMessageResponse,
    AckResponse,
    GetMessagesResponse,
    ConversationListItem,
    UserConversationsResponse,
    SearchMessagesResponse,
    GroupMembersAddResponse,
    ConnectionStatusResponse,
)

__all__ = [
    "BaseView",
    "OrjsonResponse",
    "APIResponse",
    "ErrorDetail",
    "ErrorBody",
    "ErrorResponse",
    "ServerMessage",
    "SendMessageResponse",
    "AckResponse",
    "GetMessagesResponse",
    "ConversationListItem",
    "UserConversationsResponse",
    "SearchMessagesResponse",
    "GroupMembersAddResponse",
    "ConnectionStatusResponse",
]
