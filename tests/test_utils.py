from __future__ import annotations

from car_price_agent.config import PRICE_PLACEHOLDER
from car_price_agent.models import CarListing, ChatMessage, ParsedRange, SearchResponse
from car_price_agent.utils import (
    normalize_listing,
    normalize_price,
    normalize_results,
    serialize_listing,
    serialize_message,
    summarize_response,
)


def test_numeric_price_gets_unit():
    assert normalize_price(300) == "300 Million"
    assert normalize_price(450.5) == "450.5 Million"
    assert normalize_price(300.0) == "300 Million"


def test_price_with_unit_passes_through():
    assert normalize_price("450m") == "450m"
    assert normalize_price("450 M") == "450 M"
    assert normalize_price("1.2 MILLION") == "1.2 MILLION"


def test_bare_price_string_gets_unit():
    assert normalize_price("300") == "300 Million"


def test_price_placeholder_for_absent_values():
    assert normalize_price(None) == PRICE_PLACEHOLDER
    assert normalize_price("") == PRICE_PLACEHOLDER
    assert normalize_price(PRICE_PLACEHOLDER) == PRICE_PLACEHOLDER


def test_price_normalization_is_idempotent():
    for raw in (300, "300", "450m", None, 12.75, "2 million"):
        once = normalize_price(raw)
        assert normalize_price(once) == once


def test_zero_price_is_a_real_price():
    assert normalize_price(0) == "0 Million"


def test_missing_fields_fall_back_to_placeholders():
    columns = {
        "name": [None],
        "price": [""],
        "location": [None],
        "date": [""],
    }
    listing = normalize_listing(columns, 0)
    assert listing == CarListing(
        name="Car Name Not Available",
        price="Price Not Available",
        location="Location Not Available",
        date="Date Not Available",
        image=None,
        url=None,
    )


def test_optional_columns_may_be_short():
    columns = {
        "name": ["A", "B"],
        "price": [1, 2],
        "location": ["X", "Y"],
        "date": ["d1", "d2"],
        "image": ["img-a"],
    }
    first, second = normalize_results(columns, 2)
    assert first.image == "img-a"
    assert second.image is None
    assert first.url is None and second.url is None


def test_results_bounded_by_count_and_shortest_column():
    columns = {
        "name": ["A", "B", "C"],
        "price": [1, 2, 3],
        "location": ["X", "Y"],
        "date": ["d1", "d2", "d3"],
    }
    assert len(normalize_results(columns, 3)) == 2
    assert len(normalize_results(columns, 1)) == 1
    assert normalize_results(columns, 0) == []
    assert normalize_results({}, 5) == []


def test_summary_with_parsed_range():
    response = SearchResponse(
        count=12,
        message="I want a car for 300 million",
        parsed_range=ParsedRange(min=250, max=300),
        pages=5,
    )
    text = summarize_response(response, 12, 5)
    assert text == (
        'I found 12 cars for your search: "I want a car for 300 million"\n\n'
        "Searching in price range: 250 - 300 million\n"
        "Pages searched: 5"
    )


def test_summary_without_parsed_range():
    response = SearchResponse(count=3)
    assert summarize_response(response, 3, 5) == "Found 3 cars in the specified price range."


def test_summary_defaults_pages_to_window():
    response = SearchResponse(count=1, message="q", parsed_range=ParsedRange(min=1.5, max=2))
    assert summarize_response(response, 1, 5).endswith("Pages searched: 5")


def test_serializers():
    listing = CarListing(name="A", price="1 Million", location="X", date="d", url="u")
    assert serialize_listing(listing) == {
        "name": "A",
        "price": "1 Million",
        "location": "X",
        "date": "d",
        "image": None,
        "url": "u",
    }
    message = ChatMessage(role="assistant", text="hi", examples=("one",))
    payload = serialize_message(message)
    assert payload["examples"] == ["one"]
    assert payload["id"] == message.id
    assert "examples" not in serialize_message(ChatMessage(role="user", text="q"))
