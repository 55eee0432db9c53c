# Data models for search requests, backend replies and the chat log.
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .config import FIRST_PAGE, PAGE_WINDOW_SIZE

# Columns every listing is built from; image and url are optional extras.
REQUIRED_COLUMNS = ("name", "price", "location", "date")
OPTIONAL_COLUMNS = ("image", "url")


@dataclass(frozen=True)
class SearchQuery:
    """One fetch against the search backend.

    The backend interprets `text` itself; we only choose the page window.
    """

    text: str
    pages: int = PAGE_WINDOW_SIZE
    start_page: int = FIRST_PAGE

    def to_payload(self) -> Dict[str, Any]:
        return {"message": self.text, "pages": self.pages, "start_page": self.start_page}


@dataclass(frozen=True)
class ParsedRange:
    """Budget range (in millions) the backend inferred from the query text."""
    min: float
    max: float


@dataclass
class SearchResponse:
    """Parsed success payload of the search backend."""

    count: int
    results: Dict[str, List[Any]] = field(default_factory=dict)
    message: Optional[str] = None  # backend echo of the query text
    parsed_range: Optional[ParsedRange] = None
    pages: Optional[int] = None  # pages the backend actually searched

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "SearchResponse":
        raw_results = payload.get("results") or {}
        results: Dict[str, List[Any]] = {}
        for column in (*REQUIRED_COLUMNS, *OPTIONAL_COLUMNS):
            values = raw_results.get(column)
            if isinstance(values, list):
                results[column] = values

        count = payload.get("count")
        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            # Fall back to what the columns can actually provide
            count = min((len(results.get(c, [])) for c in REQUIRED_COLUMNS), default=0)

        query = payload.get("query") or {}
        parsed_range: Optional[ParsedRange] = None
        if query.get("min") is not None and query.get("max") is not None:
            parsed_range = ParsedRange(min=query["min"], max=query["max"])

        return cls(
            count=count,
            results=results,
            message=query.get("message") or None,
            parsed_range=parsed_range,
            pages=query.get("pages"),
        )


@dataclass(frozen=True)
class CarListing:
    """Normalized listing; display fields are always present."""
    name: str
    price: str
    location: str
    date: str
    image: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class ChatMessage:
    role: str  # "user" | "assistant"
    text: str
    examples: Tuple[str, ...] = ()  # suggested queries shown under the message
    id: str = field(default_factory=lambda: uuid.uuid4().hex)


class SearchOutcome(str, Enum):
    """Result of a session operation, for callers that re-enable controls."""

    OK = "ok"
    EMPTY = "empty"  # successful fetch, zero listings
    FAILED = "failed"  # transport or backend failure, reported in the chat log
    BUSY = "busy"  # another fetch is outstanding
    INVALID = "invalid"  # empty query text or disposed session
    NO_LINEAGE = "no_lineage"  # load_more before a search established pagination

    @property
    def succeeded(self) -> bool:
        return self in (SearchOutcome.OK, SearchOutcome.EMPTY)
