"""Tests for the simulated notification transport."""

import pytest

from chat_app.models import ConversationType
from chat_app.websocket.manager import WebSocketManager


def test_connection_limit_per_user():
    manager = WebSocketManager()
    for i in range(WebSocketManager.MAX_CONNECTIONS_PER_USER):
        manager.add_connection("user1", f"conn{i}")

    with pytest.raises(ConnectionRefusedError):
        manager.add_connection("user1", "one-too-many")

    # re-registering a known connection is not a new one
    manager.add_connection("user1", "conn0")
    assert manager.get_total_connection_count() == WebSocketManager.MAX_CONNECTIONS_PER_USER


def test_remove_connection_marks_user_offline():
    manager = WebSocketManager()
    manager.add_connection("user1", "a")
    manager.add_connection("user1", "b")
    manager.add_connection("user2", "c")
    assert manager.get_connected_user_count() == 2

    manager.remove_connection("user1", "a")
    assert manager.is_user_online("user1")
    manager.remove_connection("user1", "b")
    assert not manager.is_user_online("user1")
    assert manager.get_connected_users() == ["user2"]

    manager.remove_connection("ghost", "x")


def test_direct_message_reaches_online_user(store, ws_manager):
    ws_manager.add_connection("user2", "phone")
    message = store.create_message("user1", "user2", "ping", ConversationType.ONE_TO_ONE)

    [event] = ws_manager.delivered_events("user2")
    assert event["type"] == WebSocketManager.MSG_NEW
    assert event["message_id"] == message.id
    assert event["content"] == "ping"
    assert ws_manager.drain_offline_queue("user2") == []


def test_direct_message_queued_for_offline_user(store, ws_manager):
    store.create_message("user1", "user3", "later", ConversationType.ONE_TO_ONE)

    assert ws_manager.delivered_events("user3") == []
    queued = ws_manager.drain_offline_queue("user3")
    assert [event["content"] for event in queued] == ["later"]
    assert ws_manager.drain_offline_queue("user3") == []


def test_group_message_fans_out_without_sender(store, ws_manager):
    ws_manager.add_connection("user1", "conn1")
    ws_manager.add_connection("user2", "conn2")

    store.create_message("user1", "group1", "hi all", ConversationType.GROUP)

    assert ws_manager.delivered_events("user1") == []
    [event] = ws_manager.delivered_events("user2")
    assert event["type"] == WebSocketManager.MSG_GROUP_NEW
    assert event["destination_id"] == "group1"
    assert len(ws_manager.drain_offline_queue("user3")) == 1


def test_notify_reports_failure_instead_of_raising(store):
    def broken_lookup(group_id):
        raise LookupError(group_id)

    manager = WebSocketManager(group_members=broken_lookup)
    message = store.create_message("user1", "group1", "hi", ConversationType.GROUP)

    assert manager.notify("group1", message) is False


def test_broadcast_returns_delivery_split():
    manager = WebSocketManager()
    manager.add_connection("a", "1")

    delivered, offline = manager.broadcast_to_group(["a", "b", "c"], {"type": "x"}, exclude_user="c")
    assert delivered == ["a"]
    assert offline == ["b"]
