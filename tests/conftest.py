"""Shared fixtures for store, service and route tests."""

import pytest
from fastapi.testclient import TestClient

from chat_app.database import MemoryStore, seed_demo_data
from chat_app.main import create_app
from chat_app.websocket.manager import WebSocketManager


class RecordingNotifier:
    """Notifier that remembers every call and whether the store lock was free."""

    def __init__(self, store=None):
        self.store = store
        self.calls = []
        self.lock_free = []

    def notify(self, destination_id, message):
        self.calls.append((destination_id, message))
        if self.store is not None:
            self.lock_free.append(not self.store._lock.write_held)
        return True


@pytest.fixture(scope="function")
def store():
    """Store seeded with user1..user3 and group1 holding all three."""
    memory_store = MemoryStore()
    seed_demo_data(memory_store)
    return memory_store


@pytest.fixture(scope="function")
def notifier(store):
    recording = RecordingNotifier(store)
    store.notifier = recording
    return recording


@pytest.fixture(scope="function")
def ws_manager(store):
    manager = WebSocketManager(group_members=store.get_group_members)
    store.notifier = manager
    return manager


@pytest.fixture(scope="function")
def client():
    """Test client over a freshly seeded app."""
    with TestClient(create_app(seed_demo_data=True)) as test_client:
        yield test_client


@pytest.fixture
def alice():
    return ("user1", "password1")


@pytest.fixture
def bob():
    return ("user2", "password2")


@pytest.fixture
def charlie():
    return ("user3", "password3")
