import secrets
import time


def generate_id() -> str:
    """Unique id of the form <unix time ns>_<urlsafe random>."""
    return f"{time.time_ns()}_{secrets.token_urlsafe(8)}"


def conversation_id(user_id: str, destination_id: str) -> str:
    return f"uc_{user_id}_{destination_id}"


def message_read_id(message_id: str, user_id: str) -> str:
    return f"mr_{message_id}_{user_id}"


def contains_ignore_case(text: str, query: str) -> bool:
    """Case-insensitive substring test. An empty query never matches."""
    if not query:
        return False
    return query.casefold() in text.casefold()
