"""Shared fakes for session and API tests."""

from __future__ import annotations

import asyncio
from typing import Any

from car_price_agent.client import AbstractSearchClient
from car_price_agent.models import SearchQuery, SearchResponse


def make_payload(
    count: int,
    offset: int = 0,
    query: dict[str, Any] | None = None,
    with_media: bool = True,
) -> dict[str, Any]:
    """Backend success body with `count` fully populated listings."""
    indexes = range(offset, offset + count)
    results: dict[str, list[Any]] = {
        "name": [f"Car {i}" for i in indexes],
        "price": [100 + i for i in indexes],
        "location": [f"City {i}" for i in indexes],
        "date": [f"2024-01-{(i % 28) + 1:02d}" for i in indexes],
    }
    if with_media:
        results["image"] = [f"https://img.example/{i}.jpg" for i in indexes]
        results["url"] = [f"https://cars.example/{i}" for i in indexes]
    return {"query": query or {}, "count": count, "results": results}


class FakeSearchClient(AbstractSearchClient):
    """Replays queued payloads (or raises queued exceptions) in order."""

    def __init__(self, replies: list[Any], gate: asyncio.Event | None = None) -> None:
        self.replies = list(replies)
        self.queries: list[SearchQuery] = []
        self.gate = gate
        self.closed = False

    async def search(self, query: SearchQuery) -> SearchResponse:
        self.queries.append(query)
        if self.gate is not None:
            await self.gate.wait()
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return SearchResponse.from_payload(reply)

    async def aclose(self) -> None:
        self.closed = True
