"""Normalization and serialization helpers for the car price agent."""
from dataclasses import asdict
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .config import (
    DATE_PLACEHOLDER,
    LOCATION_PLACEHOLDER,
    NAME_PLACEHOLDER,
    PRICE_PLACEHOLDER,
    PRICE_UNIT,
)
from .models import REQUIRED_COLUMNS, CarListing, ChatMessage, SearchResponse


def _entry(column: Optional[Sequence[Any]], index: int) -> Any:
    """Value at `index`, or None when the column is missing or too short."""
    if column is None or index >= len(column):
        return None
    return column[index]


def _is_absent(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_price(value: Any) -> str:
    """Render a raw backend price with a unit, never doubling the unit.

    Numbers get " Million" appended; strings that already mention "million"
    or an "m" abbreviation are returned unchanged.
    """
    if _is_absent(value):
        return PRICE_PLACEHOLDER
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{_format_number(value)} {PRICE_UNIT}"
    text = str(value)
    if text == PRICE_PLACEHOLDER:
        return text
    lowered = text.lower()
    if "million" in lowered or "m" in lowered:
        return text
    return f"{text} {PRICE_UNIT}"


def _text_or(value: Any, placeholder: str) -> str:
    return placeholder if _is_absent(value) else str(value)


def normalize_listing(columns: Mapping[str, Sequence[Any]], index: int) -> CarListing:
    """Build the listing at `index` from column-oriented backend results."""
    image = _entry(columns.get("image"), index)
    url = _entry(columns.get("url"), index)
    return CarListing(
        name=_text_or(_entry(columns.get("name"), index), NAME_PLACEHOLDER),
        price=normalize_price(_entry(columns.get("price"), index)),
        location=_text_or(_entry(columns.get("location"), index), LOCATION_PLACEHOLDER),
        date=_text_or(_entry(columns.get("date"), index), DATE_PLACEHOLDER),
        image=None if _is_absent(image) else str(image),
        url=None if _is_absent(url) else str(url),
    )


def normalize_results(columns: Mapping[str, Sequence[Any]], count: int) -> List[CarListing]:
    """Normalize up to `count` listings, bounded by the shortest required column."""
    limit = min([count, *(len(columns.get(c) or ()) for c in REQUIRED_COLUMNS)])
    return [normalize_listing(columns, i) for i in range(max(limit, 0))]


def normalize_response(response: SearchResponse) -> List[CarListing]:
    return normalize_results(response.results, response.count)


def summarize_response(response: SearchResponse, found: int, default_pages: int) -> str:
    """Assistant reply for a successful, non-empty search."""
    if response.parsed_range is None:
        return f"Found {found} cars in the specified price range."
    low = _format_number(response.parsed_range.min)
    high = _format_number(response.parsed_range.max)
    pages = response.pages if response.pages is not None else default_pages
    query_text = response.message or ""
    return (
        f'I found {found} cars for your search: "{query_text}"\n\n'
        f"Searching in price range: {low} - {high} million\n"
        f"Pages searched: {pages}"
    )


def serialize_listing(listing: CarListing) -> Dict[str, Any]:
    """Convert CarListing to a JSON-serializable dict."""
    return asdict(listing)


def serialize_message(message: ChatMessage) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"id": message.id, "role": message.role, "text": message.text}
    if message.examples:
        payload["examples"] = list(message.examples)
    return payload
