from chat_app.services.base import BaseService
from chat_app.services.users import UserService
from chat_app.services.messaging import MessageService, GroupService, ConversationService
from chat_app.services.search import SearchService

__all__ = [
    "BaseService",
    "UserService",
    "MessageService",
    "GroupService",
    "ConversationService",
    "SearchService",
]
