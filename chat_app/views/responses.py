"""
Response envelopes shared by every route.

Successful calls return an APIResponse wrapping a view; failures are
rendered by the exception handlers as an ErrorResponse carrying one of the
catalogued error codes.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional

import orjson
from starlette.responses import JSONResponse


class OrjsonResponse(JSONResponse):
    """JSON response rendered by orjson, dataclass views included."""
    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        return orjson.dumps(
            content,
            option=orjson.OPT_UTC_Z | orjson.OPT_SERIALIZE_DATACLASS
        )


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(slots=True)
class APIResponse:
    """Success envelope: ``APIResponse(data=view, message="Message sent")``."""
    success: bool = True
    data: Any = None
    message: Optional[str] = None
    timestamp: str = field(default_factory=_timestamp)


@dataclass(slots=True)
class ErrorDetail:
    """One offending field of a rejected request."""
    code: str
    message: str
    field: Optional[str] = None


@dataclass(slots=True)
class ErrorBody:
    code: str
    message: str
    details: Optional[List[ErrorDetail]] = None
    path: Optional[str] = None
    method: Optional[str] = None


@dataclass(slots=True)
class ErrorResponse:
    """Failure envelope with the error code, request path and method."""
    error: ErrorBody
    success: bool = False
    timestamp: str = field(default_factory=_timestamp)
