"""Tests for the service layer."""

import pytest

from chat_app.database import MemoryStore, AlreadyExistsError, NotFoundError, seed_demo_data
from chat_app.models import User, ConversationType, MessageStatus
from chat_app.services import (
    MessageService, GroupService, ConversationService, SearchService, UserService,
)


def test_resolve_destination_prefers_groups(store):
    service = MessageService(store)
    store.create_user(User(id="group1", name="Shadow", email="shadow@example.com"))

    assert service.resolve_destination("group1") == ConversationType.GROUP
    assert service.resolve_destination("user2") == ConversationType.ONE_TO_ONE
    assert service.resolve_destination("nowhere") is None


def test_mark_as_delivered_only_from_sent(store):
    service = MessageService(store)
    message = service.send_message("user1", "user2", "hi", ConversationType.ONE_TO_ONE)

    assert service.mark_as_delivered(message.id).status == MessageStatus.DELIVERED

    service.mark_as_read(message.id, "user2")
    assert service.mark_as_delivered(message.id).status == MessageStatus.READ


class ReadDuringDeliveryStore(MemoryStore):
    """Store where a read receipt commits just before the delivery update."""

    def update_message_status(self, message_id, status, expected=None):
        self.create_message_read(message_id, "user2")
        return super().update_message_status(message_id, status, expected)


def test_mark_as_delivered_never_demotes_concurrent_read():
    store = ReadDuringDeliveryStore()
    seed_demo_data(store)
    service = MessageService(store)
    message = service.send_message("user1", "user2", "hi", ConversationType.ONE_TO_ONE)

    assert service.mark_as_delivered(message.id).status == MessageStatus.READ
    assert store.get_message(message.id).status == MessageStatus.READ


def test_is_recipient(store):
    service = MessageService(store)
    direct = service.send_message("user1", "user2", "hi", ConversationType.ONE_TO_ONE)
    group = service.send_message("user1", "group1", "hi team", ConversationType.GROUP)

    assert service.is_recipient(direct, "user2")
    assert not service.is_recipient(direct, "user3")
    assert service.is_recipient(group, "user3")


def test_conversation_list_has_preview_and_unread(store):
    messages = MessageService(store)
    messages.send_message("user1", "group1", "first", ConversationType.GROUP)
    latest = messages.send_message("user1", "group1", "second", ConversationType.GROUP)

    [item] = ConversationService(store).get_conversations_list("user2")
    assert item.destination_id == "group1"
    assert item.conversation_type == "group"
    assert item.unread_count == 2
    assert item.last_message["id"] == latest.id
    assert item.updated_at == latest.created_at

    [own] = ConversationService(store).get_conversations_list("user1")
    assert own.unread_count == 0


def test_conversation_list_empty_for_new_user(store):
    assert ConversationService(store).get_conversations_list("user3") == []


def test_create_group_adds_creator_and_members(store):
    service = GroupService(store)
    group = service.create_group("g2", "Duo", "user2", ["user3", "user2"])

    assert group.created_by == "user2"
    assert service.get_group_members("g2") == ["user2", "user3"]
    assert service.is_member("g2", "user3")


def test_create_group_duplicate(store):
    with pytest.raises(AlreadyExistsError):
        GroupService(store).create_group("group1", "Again", "user1", [])


def test_add_members_counts_new_only(store):
    service = GroupService(store)
    store.create_user(User(id="user4", name="Dana", email="dana@example.com"))

    assert service.add_members("group1", ["user1", "user4"]) == 1
    with pytest.raises(NotFoundError):
        service.add_members("missing", ["user1"])


def test_user_service_round_trip():
    service = UserService(MemoryStore())
    service.create_user("erin", "Erin", "erin@example.com")
    assert service.get_user("erin").name == "Erin"
    with pytest.raises(AlreadyExistsError):
        service.create_user("erin", "Erin", "erin@example.com")


def test_search_service_scopes_results(store):
    MessageService(store).send_message("user1", "user2", "Lunch today?", ConversationType.ONE_TO_ONE)
    search = SearchService(store)

    assert len(search.search("user2", "lunch")) == 1
    assert search.search("user3", "lunch") == []
