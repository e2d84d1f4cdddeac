from typing import Optional

from chat_app.database.base import NotificationDispatcher, Repository
from chat_app.database.exceptions import AlreadyExistsError, InvalidArgumentError, NotFoundError
from chat_app.database.locks import ReadWriteLock
from chat_app.models import (
    User, Group, Message, MessageRead, UserConversation,
    MessageStatus, ConversationType, utc_now,
)
from chat_app.utils.ids import generate_id, conversation_id, message_read_id, contains_ignore_case
from chat_app.utils.logs import ErrorLogger


class MemoryStore(Repository):
    """
    In-memory Repository guarded by a single reader/writer lock.

    Every collection (users, groups, memberships, messages, conversation
    rows, read receipts) sits behind the same lock so a message write and
    its conversation fan-out happen in one critical section. Public methods
    acquire the lock exactly once; helpers prefixed with an underscore
    expect the caller to hold it already.

    Read paths return detached copies, so callers can never mutate stored
    state through a returned entity.
    """

    def __init__(
        self,
        notifier: Optional[NotificationDispatcher] = None,
        logger: Optional[ErrorLogger] = None,
    ):
        self._lock = ReadWriteLock()
        self._notifier = notifier
        self._logger = logger

        self._users: dict[str, User] = {}
        self._groups: dict[str, Group] = {}
        self._group_members: dict[str, set[str]] = {}
        # destination id -> messages in insertion order
        self._messages: dict[str, list[Message]] = {}
        self._messages_by_id: dict[str, Message] = {}
        # user id -> conversation rows in creation order
        self._user_conversations: dict[str, list[UserConversation]] = {}
        # message id -> user id -> receipt
        self._message_reads: dict[str, dict[str, MessageRead]] = {}

    @property
    def notifier(self) -> Optional[NotificationDispatcher]:
        return self._notifier

    @notifier.setter
    def notifier(self, notifier: Optional[NotificationDispatcher]) -> None:
        self._notifier = notifier

    # Users

    def create_user(self, user: User) -> User:
        stored = user.snapshot()
        with self._lock.write_locked():
            if stored.id in self._users:
                raise AlreadyExistsError("user", stored.id)
            stored.stamp()
            self._users[stored.id] = stored
            return stored.snapshot()

    def get_user(self, user_id: str) -> User:
        with self._lock.read_locked():
            user = self._users.get(user_id)
            if user is None:
                raise NotFoundError("user", user_id)
            return user.snapshot()

    # Groups

    def create_group(self, group: Group) -> Group:
        stored = group.snapshot()
        with self._lock.write_locked():
            if stored.id in self._groups:
                raise AlreadyExistsError("group", stored.id)
            stored.stamp()
            self._groups[stored.id] = stored
            self._group_members[stored.id] = set()
            return stored.snapshot()

    def get_group(self, group_id: str) -> Group:
        with self._lock.read_locked():
            group = self._groups.get(group_id)
            if group is None:
                raise NotFoundError("group", group_id)
            return group.snapshot()

    def add_group_member(self, group_id: str, user_id: str) -> bool:
        with self._lock.write_locked():
            if group_id not in self._groups:
                raise NotFoundError("group", group_id)
            members = self._group_members[group_id]
            if user_id in members:
                return False
            members.add(user_id)
            return True

    def is_group_member(self, group_id: str, user_id: str) -> bool:
        with self._lock.read_locked():
            return user_id in self._group_members.get(group_id, ())

    def get_group_members(self, group_id: str) -> set[str]:
        with self._lock.read_locked():
            if group_id not in self._groups:
                raise NotFoundError("group", group_id)
            return set(self._group_members[group_id])

    # Messages

    def create_message(
        self,
        sender_id: str,
        destination_id: str,
        text: str,
        conversation_type: ConversationType,
    ) -> Message:
        with self._lock.write_locked():
            self._require_destination(destination_id, conversation_type)

            now = utc_now()
            message = Message(
                id=generate_id(),
                sender_id=sender_id,
                destination_id=destination_id,
                message_text=text,
                status=MessageStatus.SENT,
                conversation_type=conversation_type,
                created_at=now,
                updated_at=now,
            )
            self._messages.setdefault(destination_id, []).append(message)
            self._messages_by_id[message.id] = message

            self._upsert_conversation(sender_id, destination_id, conversation_type, now)
            if conversation_type == ConversationType.ONE_TO_ONE:
                self._upsert_conversation(destination_id, sender_id, conversation_type, now)
            else:
                # Membership is read, never changed, by message writes
                for member_id in sorted(self._group_members.get(destination_id, ())):
                    if member_id != sender_id:
                        self._upsert_conversation(member_id, destination_id, conversation_type, now)

            created = message.snapshot()
            outgoing = message.snapshot()

        self._dispatch(outgoing)
        return created

    def get_message(self, message_id: str) -> Message:
        with self._lock.read_locked():
            return self._find_message(message_id).snapshot()

    def get_messages(
        self,
        destination_id: str,
        limit: int,
        cursor: str = "",
    ) -> tuple[list[Message], str]:
        if limit <= 0:
            raise InvalidArgumentError(f"limit must be positive, got {limit}")

        with self._lock.read_locked():
            newest_first = self._messages.get(destination_id, [])[::-1]

            # An unknown cursor restarts from the first page
            start = 0
            if cursor:
                for index, message in enumerate(newest_first):
                    if message.id == cursor:
                        start = index
                        break

            end = min(start + limit, len(newest_first))
            page = [message.snapshot() for message in newest_first[start:end]]
            next_cursor = newest_first[end].id if end < len(newest_first) else ""
            return page, next_cursor

    def update_message_status(
        self,
        message_id: str,
        status: MessageStatus,
        expected: Optional[MessageStatus] = None,
    ) -> Message:
        with self._lock.write_locked():
            message = self._find_message(message_id)
            if expected is not None and message.status != expected:
                return message.snapshot()
            message.status = status
            message.touch()
            return message.snapshot()

    # Read receipts

    def create_message_read(self, message_id: str, user_id: str) -> MessageRead:
        with self._lock.write_locked():
            # Status is changed here directly; calling update_message_status
            # would try to take the lock a second time.
            message = self._find_message(message_id)

            reads = self._message_reads.setdefault(message_id, {})
            existing = reads.get(user_id)
            if existing is not None:
                return existing.snapshot()

            now = utc_now()
            receipt = MessageRead(
                id=message_read_id(message_id, user_id),
                message_id=message_id,
                user_id=user_id,
                created_at=now,
                updated_at=now,
            )
            reads[user_id] = receipt

            message.status = MessageStatus.READ
            message.touch(now)
            return receipt.snapshot()

    def get_message_reads(self, message_id: str) -> list[MessageRead]:
        with self._lock.read_locked():
            reads = self._message_reads.get(message_id, {})
            return [receipt.snapshot() for receipt in reads.values()]

    # Conversations

    def get_user_conversations(self, user_id: str) -> list[UserConversation]:
        with self._lock.read_locked():
            rows = self._user_conversations.get(user_id, [])
            # sorted() is stable, so ties keep creation order
            ordered = sorted(rows, key=lambda row: row.updated_at, reverse=True)
            return [row.snapshot() for row in ordered]

    def count_unread(self, user_id: str, destination_id: str) -> int:
        with self._lock.read_locked():
            unread = 0
            for message in self._messages.get(destination_id, []):
                if message.sender_id == user_id:
                    continue
                if user_id not in self._message_reads.get(message.id, {}):
                    unread += 1
            return unread

    def get_conversation_summary(
        self,
        user_id: str,
        destination_id: str,
        conversation_type: ConversationType,
    ) -> tuple[Optional[Message], int]:
        with self._lock.read_locked():
            if conversation_type == ConversationType.GROUP:
                messages = self._messages.get(destination_id, [])
            else:
                messages = self._direct_messages(user_id, destination_id)

            latest = messages[-1].snapshot() if messages else None
            unread = 0
            for message in messages:
                if message.sender_id == user_id:
                    continue
                if user_id not in self._message_reads.get(message.id, {}):
                    unread += 1
            return latest, unread

    # Search

    def search_messages(self, user_id: str, query: str) -> list[Message]:
        if not query or not query.strip():
            return []

        with self._lock.read_locked():
            results = []
            for messages in self._messages.values():
                for message in messages:
                    if self._is_participant(message, user_id) and contains_ignore_case(message.message_text, query):
                        results.append(message.snapshot())
            return results

    # Helpers, lock must be held

    def _require_destination(self, destination_id: str, conversation_type: ConversationType) -> None:
        if conversation_type == ConversationType.GROUP:
            if destination_id not in self._groups:
                raise NotFoundError("group", destination_id)
        elif destination_id not in self._users:
            raise NotFoundError("user", destination_id)

    def _find_message(self, message_id: str) -> Message:
        message = self._messages_by_id.get(message_id)
        if message is None:
            raise NotFoundError("message", message_id)
        return message

    def _upsert_conversation(
        self,
        user_id: str,
        destination_id: str,
        conversation_type: ConversationType,
        at,
    ) -> None:
        rows = self._user_conversations.setdefault(user_id, [])
        for row in rows:
            if row.destination_id == destination_id and row.conversation_type == conversation_type:
                row.touch(at)
                return

        rows.append(UserConversation(
            id=conversation_id(user_id, destination_id),
            user_id=user_id,
            destination_id=destination_id,
            conversation_type=conversation_type,
            created_at=at,
            updated_at=at,
        ))

    def _direct_messages(self, user_id: str, peer_id: str) -> list[Message]:
        """One-to-one messages between two users, oldest first."""
        received = [
            message for message in self._messages.get(user_id, [])
            if message.sender_id == peer_id and message.conversation_type == ConversationType.ONE_TO_ONE
        ]
        if peer_id == user_id:
            return received
        sent = [
            message for message in self._messages.get(peer_id, [])
            if message.sender_id == user_id and message.conversation_type == ConversationType.ONE_TO_ONE
        ]
        # sorted() is stable, so equal timestamps keep per-list order
        return sorted(received + sent, key=lambda message: message.created_at)

    def _is_participant(self, message: Message, user_id: str) -> bool:
        if message.sender_id == user_id:
            return True
        if message.conversation_type == ConversationType.ONE_TO_ONE:
            return message.destination_id == user_id
        return user_id in self._group_members.get(message.destination_id, ())

    # Notification, called with the lock released

    def _dispatch(self, message: Message) -> None:
        notifier = self._notifier
        if notifier is None:
            return
        try:
            notifier.notify(message.destination_id, message)
        except Exception as e:
            # Delivery is best effort; the message is already stored
            if self._logger:
                self._logger.log_notification_error(message.destination_id, e, message_id=message.id)
