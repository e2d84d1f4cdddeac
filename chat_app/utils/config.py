import os

from dotenv import load_dotenv

load_dotenv()

HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "8080"))

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "info")

# Comma separated "username:password" pairs accepted by basic auth
AUTH_CLIENTS: str = os.getenv("AUTH_CLIENTS", "user1:password1,user2:password2,user3:password3")

DEV_MODE: bool = bool(int(os.getenv("DEV_MODE", "1")))

ENABLE_SEARCH: bool = bool(int(os.getenv("ENABLE_SEARCH", "1")))
ENABLE_GROUP_CHAT: bool = bool(int(os.getenv("ENABLE_GROUP_CHAT", "1")))

MAX_MESSAGE_LENGTH: int = int(os.getenv("MAX_MESSAGE_LENGTH", "10000"))
MAX_GROUP_MEMBERS: int = int(os.getenv("MAX_GROUP_MEMBERS", "100"))

DEFAULT_MESSAGE_LIMIT: int = int(os.getenv("DEFAULT_MESSAGE_LIMIT", "50"))
MAX_MESSAGE_LIMIT: int = int(os.getenv("MAX_MESSAGE_LIMIT", "100"))


def parse_auth_clients(raw: str) -> dict[str, str]:
    """
    Parse the AUTH_CLIENTS setting into a username -> password mapping.

    Entries without a username or password are ignored.

    Raises:
        ValueError: If no usable client remains
    """
    clients: dict[str, str] = {}
    for entry in raw.split(","):
        username, sep, password = entry.strip().partition(":")
        if not sep or not username or not password:
            continue
        clients[username] = password

    if not clients:
        raise ValueError("At least one auth client is required")
    return clients
