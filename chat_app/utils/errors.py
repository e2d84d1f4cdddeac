"""
HTTP error catalogue for the chat API.

Every error surfaced to clients carries a stable code. Codes are grouped by
prefix so clients can classify them without parsing messages:
BAD_REQUEST_*, UNAUTHORIZED_*, FORBIDDEN_*, NOT_FOUND_*, CONFLICT_* and
SERVER_ERROR_*.
"""
from dataclasses import dataclass
from typing import Any, Optional

from fastapi import status


@dataclass(frozen=True, slots=True)
class ErrorSpec:
    """A catalogue entry: machine code, default message and HTTP status."""
    code: str
    message: str
    status_code: int


class APIError(Exception):
    """Raised by controllers to return a catalogued error response."""

    def __init__(
        self,
        spec: ErrorSpec,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.spec = spec
        self.code = spec.code
        self.message = message or spec.message
        self.status_code = spec.status_code
        self.details = details or {}
        super().__init__(f"[{self.code}] {self.message}")


class Errors:
    """Predefined error catalogue."""

    # 400
    INVALID_REQUEST = ErrorSpec("BAD_REQUEST_INVALID_REQUEST", "Invalid request", status.HTTP_400_BAD_REQUEST)
    VALIDATION_ERROR = ErrorSpec("BAD_REQUEST_VALIDATION_ERROR", "Validation error", status.HTTP_400_BAD_REQUEST)
    MESSAGE_EMPTY = ErrorSpec("BAD_REQUEST_MESSAGE_EMPTY", "Message cannot be empty", status.HTTP_400_BAD_REQUEST)
    MESSAGE_TOO_LONG = ErrorSpec("BAD_REQUEST_MESSAGE_TOO_LONG", "Message exceeds maximum length", status.HTTP_400_BAD_REQUEST)
    SEARCH_QUERY_REQUIRED = ErrorSpec("BAD_REQUEST_SEARCH_QUERY_REQUIRED", "Query parameter is required", status.HTTP_400_BAD_REQUEST)
    GROUP_MEMBER_LIMIT = ErrorSpec("BAD_REQUEST_GROUP_MEMBER_LIMIT", "Group member limit exceeded", status.HTTP_400_BAD_REQUEST)

    # 401
    AUTH_REQUIRED = ErrorSpec("UNAUTHORIZED_AUTH_REQUIRED", "Authorization header required", status.HTTP_401_UNAUTHORIZED)
    INVALID_CREDENTIALS = ErrorSpec("UNAUTHORIZED_INVALID_CREDENTIALS", "Invalid username or password", status.HTTP_401_UNAUTHORIZED)
    INVALID_AUTH_FORMAT = ErrorSpec(
        "UNAUTHORIZED_INVALID_AUTH_FORMAT",
        "Invalid authorization header format. Expected: Basic <base64(username:password)>",
        status.HTTP_401_UNAUTHORIZED,
    )
    INVALID_BASE64 = ErrorSpec("UNAUTHORIZED_INVALID_BASE64", "Invalid base64 encoding in authorization header", status.HTTP_401_UNAUTHORIZED)
    INVALID_CREDENTIALS_FORMAT = ErrorSpec(
        "UNAUTHORIZED_INVALID_CREDENTIALS_FORMAT",
        "Invalid credentials format. Expected: username:password",
        status.HTTP_401_UNAUTHORIZED,
    )

    # 403
    ACCESS_DENIED = ErrorSpec("FORBIDDEN_ACCESS_DENIED", "Access denied", status.HTTP_403_FORBIDDEN)
    NOT_GROUP_MEMBER = ErrorSpec("FORBIDDEN_NOT_GROUP_MEMBER", "User is not a member of this group", status.HTTP_403_FORBIDDEN)
    NOT_MESSAGE_RECIPIENT = ErrorSpec("FORBIDDEN_NOT_MESSAGE_RECIPIENT", "User is not the recipient of this message", status.HTTP_403_FORBIDDEN)
    FEATURE_DISABLED = ErrorSpec("FORBIDDEN_FEATURE_DISABLED", "Feature is disabled", status.HTTP_403_FORBIDDEN)

    # 404
    NOT_FOUND = ErrorSpec("NOT_FOUND_RESOURCE_NOT_FOUND", "Resource not found", status.HTTP_404_NOT_FOUND)
    USER_NOT_FOUND = ErrorSpec("NOT_FOUND_USER_NOT_FOUND", "User not found", status.HTTP_404_NOT_FOUND)
    GROUP_NOT_FOUND = ErrorSpec("NOT_FOUND_GROUP_NOT_FOUND", "Group not found", status.HTTP_404_NOT_FOUND)
    MESSAGE_NOT_FOUND = ErrorSpec("NOT_FOUND_MESSAGE_NOT_FOUND", "Message not found", status.HTTP_404_NOT_FOUND)
    SENDER_NOT_FOUND = ErrorSpec("NOT_FOUND_SENDER_NOT_FOUND", "Sender not found", status.HTTP_404_NOT_FOUND)
    DESTINATION_NOT_FOUND = ErrorSpec("NOT_FOUND_DESTINATION_NOT_FOUND", "Destination not found", status.HTTP_404_NOT_FOUND)

    # 409
    CONFLICT = ErrorSpec("CONFLICT_RESOURCE_EXISTS", "Resource already exists", status.HTTP_409_CONFLICT)
    USER_ALREADY_EXISTS = ErrorSpec("CONFLICT_USER_ALREADY_EXISTS", "User already exists", status.HTTP_409_CONFLICT)
    GROUP_ALREADY_EXISTS = ErrorSpec("CONFLICT_GROUP_ALREADY_EXISTS", "Group already exists", status.HTTP_409_CONFLICT)

    # 500
    INTERNAL_ERROR = ErrorSpec("SERVER_ERROR_INTERNAL_ERROR", "An internal error occurred", status.HTTP_500_INTERNAL_SERVER_ERROR)
