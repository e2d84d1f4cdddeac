from chat_app.dependencies.store import get_store, get_ws_manager

__all__ = ["get_store", "get_ws_manager"]
