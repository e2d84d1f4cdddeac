import base64
import binascii
import secrets
from collections import namedtuple

from fastapi import Request

from .errors import APIError, Errors
from .logs import get_error_logger_dependency

AuthenticatedUser = namedtuple(
    "AuthenticatedUser",
    [
        "user_id", "username"
    ]
)

AUTH_SCHEME_BASIC = "Basic"


def decode_basic_credentials(header: str) -> tuple[str, str]:
    """
    Split a Basic Authorization header into username and password.

    Raises:
        APIError: UNAUTHORIZED_* describing which part of the header is malformed
    """
    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != AUTH_SCHEME_BASIC:
        raise APIError(Errors.INVALID_AUTH_FORMAT)

    try:
        decoded = base64.b64decode(parts[1], validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise APIError(Errors.INVALID_BASE64)

    username, sep, password = decoded.partition(":")
    if not sep:
        raise APIError(Errors.INVALID_CREDENTIALS_FORMAT)
    return username, password


def verify_basic_auth(request: Request) -> AuthenticatedUser:
    """
    Dependency that authenticates the request against the configured clients.

    The username doubles as the acting user id.

    Usage:
        @router.get("/resource")
        def handler(auth: Annotated[AuthenticatedUser, Depends(verify_basic_auth)]):
            ...
    """
    logger = get_error_logger_dependency()

    header = request.headers.get("Authorization")
    if not header:
        logger.warning("Authorization header missing", path=request.url.path)
        raise APIError(Errors.AUTH_REQUIRED)

    try:
        username, password = decode_basic_credentials(header)
    except APIError as e:
        logger.warning("Malformed authorization header", code=e.code)
        raise

    clients: dict[str, str] = request.app.state.auth_clients
    expected = clients.get(username)
    if expected is None or not secrets.compare_digest(expected.encode("utf-8"), password.encode("utf-8")):
        logger.warning("Authentication failed", username=username)
        raise APIError(Errors.INVALID_CREDENTIALS)

    logger.debug("User authenticated", username=username)
    return AuthenticatedUser(user_id=username, username=username)
