from chat_app.websocket.manager import WebSocketManager

__all__ = ["WebSocketManager"]
