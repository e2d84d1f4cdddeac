import uvicorn
from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from chat_app.database import lifespan
from chat_app.utils.config import HOST, PORT, LOG_LEVEL, AUTH_CLIENTS, DEV_MODE, parse_auth_clients
from chat_app.utils.logs.middleware import LoggingMiddleware
from chat_app.controllers import (
    message_router,
    group_router,
    user_router,
    search_router,
    connection_router,
    register_exception_handlers,
)
from chat_app.views.responses import OrjsonResponse


def create_app(seed_demo_data: bool = DEV_MODE) -> FastAPI:
    """Build the chat API. The store itself is created by the lifespan."""
    app = FastAPI(
        title="Chat Message Store",
        lifespan=lifespan,
        default_response_class=OrjsonResponse,
    )
    app.state.seed_demo_data = seed_demo_data
    app.state.auth_clients = parse_auth_clients(AUTH_CLIENTS)

    app.include_router(message_router)
    app.include_router(group_router)
    app.include_router(user_router)
    app.include_router(search_router)
    app.include_router(connection_router)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"]
    )
    app.add_middleware(LoggingMiddleware)
    register_exception_handlers(app)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for load balancers and monitoring."""
        return {"status": "healthy"}

    return app


app: FastAPI = create_app()


if __name__ == "__main__":
    uvicorn.run(
        app="chat_app.main:app",
        host=HOST,
        port=PORT,
        log_level=LOG_LEVEL
    )
