from contextlib import asynccontextmanager

from fastapi import FastAPI

from chat_app.database.base import Repository, NotificationDispatcher
from chat_app.database.exceptions import (
    StoreError, NotFoundError, AlreadyExistsError, InvalidArgumentError,
)
from chat_app.database.memory import MemoryStore
from chat_app.database.seed import seed_demo_data
from chat_app.utils.logs import ErrorLogger
from chat_app.websocket.manager import WebSocketManager

__all__ = [
    "Repository",
    "NotificationDispatcher",
    "StoreError",
    "NotFoundError",
    "AlreadyExistsError",
    "InvalidArgumentError",
    "MemoryStore",
    "seed_demo_data",
    "build_store",
    "lifespan",
]


def build_store() -> tuple[MemoryStore, WebSocketManager]:
    """Create the message store and wire the notification manager to it."""
    store = MemoryStore(logger=ErrorLogger("store"))
    ws_manager = WebSocketManager(
        group_members=store.get_group_members,
        logger=ErrorLogger("websocket"),
    )
    store.notifier = ws_manager
    return store, ws_manager


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan manager for store and notification initialization."""
    logger = ErrorLogger("lifespan")

    store, ws_manager = build_store()
    app.state.store = store
    app.state.ws_manager = ws_manager

    if getattr(app.state, "seed_demo_data", False):
        seed_result = seed_demo_data(store, ws_manager, logger)
        logger.info(f"Dev seeding: {seed_result}")

    logger.info("Message store ready")

    yield

    logger.info("Chat server shutdown complete")
