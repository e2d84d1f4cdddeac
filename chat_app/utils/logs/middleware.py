import time

from chat_app.utils.logs.errors import ErrorLogger, _current_error_logger


class LoggingMiddleware:
    """Installs a per-request ErrorLogger and writes one access line per HTTP request."""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        error_logger = ErrorLogger("request")
        error_token = _current_error_logger.set(error_logger)

        status_code = 500
        started = time.perf_counter()

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            error_logger.info(
                "Request handled",
                method=scope.get("method"),
                path=scope.get("path"),
                status=status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            _current_error_logger.reset(error_token)
