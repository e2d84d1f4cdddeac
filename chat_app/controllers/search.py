from typing import Optional, Annotated

from fastapi import APIRouter, Depends, Query

from chat_app.controllers.base import BaseController
from chat_app.database.base import Repository
from chat_app.dependencies import get_store
from chat_app.services.search import SearchService
from chat_app.utils import config
from chat_app.utils.auth import AuthenticatedUser, verify_basic_auth
from chat_app.utils.errors import APIError, Errors
from chat_app.utils.logs import ErrorLogger, ErrorLoggerDep
from chat_app.views.responses import APIResponse
from chat_app.views.messaging import SearchMessagesResponse


class SearchController(BaseController):
    """Controller for message search."""

    def __init__(self, store: Repository, logger: Optional[ErrorLogger] = None):
        super().__init__(store, logger)
        self._search_service = SearchService(store, logger)

    def search_messages(
        self,
        caller_id: str,
        user_id: str,
        query: str,
        search_enabled: bool = True
    ) -> SearchMessagesResponse:
        if not search_enabled:
            raise APIError(Errors.FEATURE_DISABLED, "Search is disabled")
        if user_id != caller_id:
            raise APIError(Errors.ACCESS_DENIED)
        if not query.strip():
            raise APIError(Errors.SEARCH_QUERY_REQUIRED)

        results = self._search_service.search(user_id, query)
        return SearchMessagesResponse(
            results=[message.model_dump() for message in results],
            query=query,
        )


router = APIRouter(prefix="/api/v1/search", tags=["Search"])


@router.get(
    "/{user_id}",
    summary="Search messages",
    description="Case-insensitive keyword search over the caller's messages."
)
def search_messages(
    user_id: str,
    store: Annotated[Repository, Depends(get_store)],
    auth: Annotated[AuthenticatedUser, Depends(verify_basic_auth)],
    logger: ErrorLoggerDep,
    query: str = Query(default="", description="Text to look for"),
):
    """
    Search messages the user sent or received.

    - **query**: Required, matched as a case-insensitive substring
    """
    controller = SearchController(store, logger)
    result = controller.search_messages(
        caller_id=auth.user_id,
        user_id=user_id,
        query=query,
        search_enabled=config.ENABLE_SEARCH,
    )
    return APIResponse(data=result)
