"""Conversational car search session.

One submitted budget query becomes a lineage of paged fetches:
1. submit() fetches the first page window and replaces the listings
2. load_more() fetches the next window of the same query and appends

Entry points: SearchSession.submit(), SearchSession.load_more()
"""

from typing import List, Optional, Tuple

from .client import AbstractSearchClient, HttpSearchClient
from .config import (
    FIRST_PAGE,
    GREETING,
    GREETING_EXAMPLES,
    LOAD_MORE_FAILED_REPLY,
    NO_MATCHES_REPLY,
    PAGE_WINDOW_SIZE,
    SEARCH_FAILED_REPLY,
)
from .logging import logger
from .models import CarListing, ChatMessage, SearchOutcome, SearchQuery
from .utils import normalize_response, summarize_response


class SearchSession:
    """State container for one browsing conversation.

    At most one fetch is outstanding at a time; calls made while busy are
    rejected with SearchOutcome.BUSY instead of queued.
    """

    def __init__(
        self,
        client: AbstractSearchClient | None = None,
        page_window: int = PAGE_WINDOW_SIZE,
        greet: bool = False,
    ) -> None:
        self._client: AbstractSearchClient = client or HttpSearchClient()
        self.page_window = page_window
        self._messages: List[ChatMessage] = []
        self._listings: List[CarListing] = []
        self.active_query: Optional[str] = None
        self.next_start_page: Optional[int] = None
        self.last_page_count: Optional[int] = None
        self.busy = False
        self.closed = False
        if greet:
            self._append("assistant", GREETING, examples=GREETING_EXAMPLES)

    @property
    def messages(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._messages)

    @property
    def listings(self) -> Tuple[CarListing, ...]:
        return tuple(self._listings)

    @property
    def show_results(self) -> bool:
        return bool(self._listings)

    async def submit(self, query_text: str) -> SearchOutcome:
        """Start a fresh search lineage for `query_text`."""
        text = (query_text or "").strip()
        if not text or self.closed:
            logger.info("search_rejected", reason="invalid", closed=self.closed)
            return SearchOutcome.INVALID
        if self.busy:
            logger.info("search_rejected", reason="busy")
            return SearchOutcome.BUSY

        self._append("user", text)
        self.busy = True
        try:
            query = SearchQuery(text=text, pages=self.page_window, start_page=FIRST_PAGE)
            logger.info("search_request", query=text, start_page=query.start_page)
            try:
                response = await self._client.search(query)
                listings = normalize_response(response)
            except Exception as exc:
                self._log_failure(exc, query)
                self._append("assistant", SEARCH_FAILED_REPLY)
                return SearchOutcome.FAILED

            # Fresh lineage: replace, never merge with the previous query's pages
            self._listings = listings
            self.active_query = text
            self.last_page_count = len(listings)
            logger.info("search_completed", query=text, count=len(listings))

            if not listings:
                self.next_start_page = None
                self._append("assistant", NO_MATCHES_REPLY)
                return SearchOutcome.EMPTY

            self.next_start_page = FIRST_PAGE + self.page_window
            self._append("assistant", summarize_response(response, len(listings), self.page_window))
            return SearchOutcome.OK
        finally:
            self.busy = False

    async def load_more(self) -> SearchOutcome:
        """Fetch the next page window of the active query and append it."""
        if self.closed:
            logger.info("search_rejected", reason="invalid", closed=True)
            return SearchOutcome.INVALID
        if self.next_start_page is None or self.active_query is None:
            logger.info("search_rejected", reason="no_lineage")
            return SearchOutcome.NO_LINEAGE
        if self.busy:
            logger.info("search_rejected", reason="busy")
            return SearchOutcome.BUSY

        self.busy = True
        try:
            # Always page the lineage's own query, never newer input.
            query = SearchQuery(
                text=self.active_query,
                pages=self.page_window,
                start_page=self.next_start_page,
            )
            logger.info("search_request", query=query.text, start_page=query.start_page)
            try:
                response = await self._client.search(query)
                listings = normalize_response(response)
            except Exception as exc:
                self._log_failure(exc, query)
                self._append("assistant", LOAD_MORE_FAILED_REPLY)
                return SearchOutcome.FAILED

            self._listings.extend(listings)
            # No "last page" marker in the contract: the cursor always advances.
            self.next_start_page = query.start_page + self.page_window
            self.last_page_count = len(listings)
            logger.info(
                "search_completed",
                query=query.text,
                count=len(listings),
                total=len(self._listings),
            )
            return SearchOutcome.OK if listings else SearchOutcome.EMPTY
        finally:
            self.busy = False

    async def dispose(self) -> None:
        """Close the backend client; later calls are rejected."""
        if self.closed:
            return
        self.closed = True
        await self._client.aclose()

    async def __aenter__(self) -> "SearchSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.dispose()

    def _append(self, role: str, text: str, examples: Tuple[str, ...] = ()) -> ChatMessage:
        message = ChatMessage(role=role, text=text, examples=tuple(examples))
        self._messages.append(message)
        return message

    def _log_failure(self, exc: Exception, query: SearchQuery) -> None:
        logger.warning(
            "search_failed",
            query=query.text,
            start_page=query.start_page,
            detail=getattr(exc, "detail", str(exc)),
            status_code=getattr(exc, "status_code", None),
            error_type=type(exc).__name__,
        )
