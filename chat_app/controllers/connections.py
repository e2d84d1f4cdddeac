from typing import Annotated

from fastapi import APIRouter, Depends

from chat_app.dependencies import get_ws_manager
from chat_app.utils.auth import AuthenticatedUser, verify_basic_auth
from chat_app.views.responses import APIResponse
from chat_app.views.messaging import ConnectionStatusResponse
from chat_app.websocket.manager import WebSocketManager


router = APIRouter(prefix="/api/v1/connections", tags=["Connections"])


@router.get("/status")
def connection_status(
    manager: Annotated[WebSocketManager, Depends(get_ws_manager)],
    auth: Annotated[AuthenticatedUser, Depends(verify_basic_auth)],
):
    """Get notification transport status."""
    return APIResponse(data=ConnectionStatusResponse(
        connected_users=manager.get_connected_user_count(),
        total_connections=manager.get_total_connection_count(),
    ))
