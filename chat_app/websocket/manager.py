import threading
from typing import Callable, Dict, List, Optional, Set

from chat_app.models import Message, ConversationType
from chat_app.utils.logs import ErrorLogger
from chat_app.views.messaging import ServerMessage


class WebSocketManager:
    """
    Simulated real-time transport for new-message notifications.

    No sockets are opened: connections are ids registered per user and a
    pushed event is appended to that user's delivered list. Events for
    users without a connection wait in an offline queue until drained.
    """

    MAX_CONNECTIONS_PER_USER = 5

    MSG_NEW = "message.new"
    MSG_GROUP_NEW = "message.group.new"

    def __init__(
        self,
        group_members: Optional[Callable[[str], Set[str]]] = None,
        logger: Optional[ErrorLogger] = None,
    ):
        self.active_connections: Dict[str, Set[str]] = {}
        self._delivered: Dict[str, List[dict]] = {}
        self._offline_queue: Dict[str, List[dict]] = {}
        self._group_members = group_members
        self._logger = logger
        self._lock = threading.Lock()

    def add_connection(self, user_id: str, connection_id: str) -> None:
        """Register a simulated device connection for a user."""
        with self._lock:
            connections = self.active_connections.setdefault(user_id, set())
            if connection_id not in connections and len(connections) >= self.MAX_CONNECTIONS_PER_USER:
                raise ConnectionRefusedError("Too many connections")
            connections.add(connection_id)

    def remove_connection(self, user_id: str, connection_id: str) -> None:
        with self._lock:
            connections = self.active_connections.get(user_id)
            if connections is None:
                return
            connections.discard(connection_id)
            if not connections:
                del self.active_connections[user_id]

    def is_user_online(self, user_id: str) -> bool:
        """Check if user has at least one active connection."""
        with self._lock:
            return bool(self.active_connections.get(user_id))

    def notify(self, destination_id: str, message: Message) -> bool:
        """
        Push a new-message event to the destination's recipients.

        Group destinations fan out to current members except the sender.
        Returns True if at least one recipient was online. Never raises:
        failures are logged and reported as False.
        """
        try:
            if message.conversation_type == ConversationType.GROUP:
                event = self._build_event(self.MSG_GROUP_NEW, message)
                member_ids = self._group_members(destination_id) if self._group_members else set()
                delivered_to, offline = self.broadcast_to_group(
                    sorted(member_ids), event, exclude_user=message.sender_id
                )
                if self._logger:
                    self._logger.debug(
                        "Group message dispatched",
                        message_id=message.id,
                        group_id=destination_id,
                        delivered=len(delivered_to),
                        queued=len(offline),
                    )
                return bool(delivered_to)

            event = self._build_event(self.MSG_NEW, message)
            delivered = self.send_to_user(destination_id, event)
            if self._logger:
                self._logger.debug(
                    "Direct message dispatched",
                    message_id=message.id,
                    recipient_id=destination_id,
                    delivered=delivered,
                )
            return delivered
        except Exception as e:
            if self._logger:
                self._logger.log_notification_error(destination_id, e, message_id=message.id)
            return False

    def send_to_user(self, user_id: str, event: dict) -> bool:
        """Deliver to an online user or queue for later. Returns True if delivered."""
        with self._lock:
            if self.active_connections.get(user_id):
                self._delivered.setdefault(user_id, []).append(event)
                return True
            self._offline_queue.setdefault(user_id, []).append(event)
            return False

    def broadcast_to_group(
        self,
        member_ids: list[str],
        event: dict,
        exclude_user: Optional[str] = None
    ) -> tuple[list[str], list[str]]:
        """
        Broadcast an event to group members.
        Returns (delivered_to, offline_users) tuple.
        """
        delivered_to = []
        offline_users = []

        for user_id in member_ids:
            if exclude_user and user_id == exclude_user:
                continue
            if self.send_to_user(user_id, event):
                delivered_to.append(user_id)
            else:
                offline_users.append(user_id)

        return delivered_to, offline_users

    def delivered_events(self, user_id: str) -> list[dict]:
        """Events pushed to a user's connections so far."""
        with self._lock:
            return list(self._delivered.get(user_id, []))

    def drain_offline_queue(self, user_id: str) -> list[dict]:
        """Return and clear the events queued while the user was offline."""
        with self._lock:
            return self._offline_queue.pop(user_id, [])

    def get_connected_user_count(self) -> int:
        with self._lock:
            return len(self.active_connections)

    def get_total_connection_count(self) -> int:
        with self._lock:
            return sum(len(conns) for conns in self.active_connections.values())

    def get_connected_users(self) -> list[str]:
        with self._lock:
            return list(self.active_connections.keys())

    @staticmethod
    def _build_event(event_type: str, message: Message) -> dict:
        return ServerMessage(
            type=event_type,
            message_id=message.id,
            sender_id=message.sender_id,
            destination_id=message.destination_id,
            content=message.message_text,
            conversation_type=message.conversation_type.value,
            created_at=message.created_at.isoformat() if message.created_at else "",
        ).to_dict()
