from fastapi.requests import Request

from chat_app.database.base import Repository
from chat_app.websocket.manager import WebSocketManager


def get_store(request: Request) -> Repository:
    """Get the message store from app state."""
    return request.app.state.store


def get_ws_manager(request: Request) -> WebSocketManager:
    """Get the notification manager from app state."""
    return request.app.state.ws_manager
