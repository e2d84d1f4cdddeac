from chat_app.controllers.base import BaseController
from chat_app.controllers.messaging import MessageController, router as message_router
from chat_app.controllers.groups import GroupController, router as group_router
from chat_app.controllers.users import UserController, router as user_router
from chat_app.controllers.search import SearchController, router as search_router
from chat_app.controllers.connections import router as connection_router
from chat_app.controllers.handlers import register_exception_handlers

__all__ = [
    "BaseController",
    "MessageController",
    "GroupController",
    "UserController",
    "SearchController",
    "message_router",
    "group_router",
    "user_router",
    "search_router",
    "connection_router",
    "register_exception_handlers",
]
