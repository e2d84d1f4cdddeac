from typing import Optional, List

from chat_app.database.base import Repository
from chat_app.models import Message
from chat_app.services.base import BaseService
from chat_app.utils.logs import ErrorLogger


class SearchService(BaseService):
    """
    Keyword search over the messages a user takes part in.

    Matching is a case-insensitive substring test with no ranking; results
    keep the store's scan order.
    """

    def __init__(self, store: Repository, logger: Optional[ErrorLogger] = None):
        super().__init__(store, logger)

    def search(self, user_id: str, query: str) -> List[Message]:
        results = self.store.search_messages(user_id, query)
        self.log_info("Search executed", user_id=user_id, result_count=len(results))
        return results
