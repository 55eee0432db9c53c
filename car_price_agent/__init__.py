from .client import AbstractSearchClient, HttpSearchClient, SearchBackendError
from .models import CarListing, ChatMessage, SearchOutcome, SearchQuery, SearchResponse
from .session import SearchSession

__all__ = [
    "AbstractSearchClient",
    "HttpSearchClient",
    "SearchBackendError",
    "CarListing",
    "ChatMessage",
    "SearchOutcome",
    "SearchQuery",
    "SearchResponse",
    "SearchSession",
]
