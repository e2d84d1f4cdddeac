"""
Exception handlers rendering every failure as an ErrorResponse.

Controllers raise APIError for catalogued conditions. Store errors that
escape a controller are mapped by kind, request validation failures
become BAD_REQUEST_VALIDATION_ERROR and anything else is a 500.
"""
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from chat_app.database.exceptions import (
    StoreError, NotFoundError, AlreadyExistsError, InvalidArgumentError,
)
from chat_app.utils.errors import APIError, Errors, ErrorSpec
from chat_app.utils.logs import get_error_logger_dependency
from chat_app.views.responses import OrjsonResponse, ErrorResponse, ErrorBody, ErrorDetail

_NOT_FOUND_BY_ENTITY = {
    "user": Errors.USER_NOT_FOUND,
    "group": Errors.GROUP_NOT_FOUND,
    "message": Errors.MESSAGE_NOT_FOUND,
}

_ALREADY_EXISTS_BY_ENTITY = {
    "user": Errors.USER_ALREADY_EXISTS,
    "group": Errors.GROUP_ALREADY_EXISTS,
}

_HTTP_STATUS_ERRORS = {
    400: Errors.INVALID_REQUEST,
    401: Errors.AUTH_REQUIRED,
    403: Errors.ACCESS_DENIED,
    404: Errors.NOT_FOUND,
}


def _render(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Optional[list[ErrorDetail]] = None,
) -> OrjsonResponse:
    body = ErrorResponse(error=ErrorBody(
        code=code,
        message=message,
        details=details,
        path=request.url.path,
        method=request.method,
    ))
    return OrjsonResponse(content=body, status_code=status_code)


def _render_spec(request: Request, spec: ErrorSpec, message: Optional[str] = None) -> OrjsonResponse:
    return _render(request, spec.status_code, spec.code, message or spec.message)


async def api_error_handler(request: Request, exc: APIError) -> OrjsonResponse:
    details = None
    if exc.details:
        details = [
            ErrorDetail(code=exc.code, message=str(value), field=key)
            for key, value in exc.details.items()
        ]
    return _render(request, exc.status_code, exc.code, exc.message, details)


async def store_error_handler(request: Request, exc: StoreError) -> OrjsonResponse:
    if isinstance(exc, NotFoundError):
        return _render_spec(request, _NOT_FOUND_BY_ENTITY.get(exc.entity, Errors.NOT_FOUND))
    if isinstance(exc, AlreadyExistsError):
        return _render_spec(request, _ALREADY_EXISTS_BY_ENTITY.get(exc.entity, Errors.CONFLICT))
    if isinstance(exc, InvalidArgumentError):
        return _render_spec(request, Errors.INVALID_REQUEST, str(exc))

    get_error_logger_dependency().log_store_error(request.url.path, exc)
    return _render_spec(request, Errors.INTERNAL_ERROR)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> OrjsonResponse:
    details = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        details.append(ErrorDetail(
            code=error.get("type", "invalid"),
            message=error.get("msg", "Invalid value"),
            field=".".join(location) or None,
        ))
    return _render(
        request,
        Errors.VALIDATION_ERROR.status_code,
        Errors.VALIDATION_ERROR.code,
        Errors.VALIDATION_ERROR.message,
        details,
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> OrjsonResponse:
    spec = _HTTP_STATUS_ERRORS.get(exc.status_code)
    if spec is None:
        return _render(request, exc.status_code, f"HTTP_{exc.status_code}", str(exc.detail))
    return _render(request, exc.status_code, spec.code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> OrjsonResponse:
    get_error_logger_dependency().exception(
        "Unhandled error", exc, path=request.url.path, method=request.method
    )
    return _render_spec(request, Errors.INTERNAL_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
