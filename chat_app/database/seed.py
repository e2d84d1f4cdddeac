"""
Development seeding for the in-memory store.

Only runs when DEV_MODE=1. Creates three users, one group containing all
of them and a simulated connection per user, so the API can be exercised
right after startup with the default basic auth clients.
"""
from typing import Optional

from chat_app.database.base import Repository
from chat_app.database.exceptions import AlreadyExistsError
from chat_app.models import User, Group
from chat_app.utils.logs import ErrorLogger
from chat_app.websocket.manager import WebSocketManager

DEV_USERS = [
    {"id": "user1", "name": "Alice", "email": "alice@example.com"},
    {"id": "user2", "name": "Bob", "email": "bob@example.com"},
    {"id": "user3", "name": "Charlie", "email": "charlie@example.com"},
]

DEV_GROUP = {
    "id": "group1",
    "name": "Project Team",
    "description": "Team chat for project discussions",
    "created_by": "user1",
}


def seed_demo_data(
    store: Repository,
    ws_manager: Optional[WebSocketManager] = None,
    logger: Optional[ErrorLogger] = None,
) -> dict:
    """
    Seed demo users, a group and simulated connections.

    Entities that already exist are skipped, so seeding twice is harmless.

    Returns:
        dict with seeding results
    """
    created = []
    skipped = []

    for user_data in DEV_USERS:
        try:
            store.create_user(User(**user_data))
        except AlreadyExistsError:
            skipped.append(user_data["id"])
            continue
        created.append(user_data["id"])

    try:
        store.create_group(Group(**DEV_GROUP))
        created.append(DEV_GROUP["id"])
    except AlreadyExistsError:
        skipped.append(DEV_GROUP["id"])

    for user_data in DEV_USERS:
        store.add_group_member(DEV_GROUP["id"], user_data["id"])

    if ws_manager is not None:
        for index, user_data in enumerate(DEV_USERS, start=1):
            ws_manager.add_connection(user_data["id"], f"conn{index}")

    result = {
        "created": created,
        "already_existed": skipped,
        "created_count": len(created),
    }

    if logger:
        if created:
            logger.info(f"Seeded {len(created)} demo entities: {', '.join(created)}")
        if skipped:
            logger.info(f"Skipped {len(skipped)} existing entities: {', '.join(skipped)}")

    return result
