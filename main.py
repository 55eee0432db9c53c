"""Simple CLI entry point for the car price assistant."""

import asyncio
from typing import Sequence

from car_price_agent import CarListing, SearchOutcome, SearchSession
from car_price_agent.config import get_settings
from car_price_agent.logging import configure_logging


def format_listing(index: int, car: CarListing) -> str:
    lines = [
        f"{index}. {car.name} - {car.price}",
        f"   {car.location} | {car.date}",
    ]
    if car.url:
        lines.append(f"   {car.url}")
    return "\n".join(lines)


def print_new_activity(session: SearchSession, seen_messages: int, seen_listings: int) -> None:
    messages = session.messages
    for message in messages[seen_messages:]:
        if message.role != "assistant":
            continue
        print(f"Agent: {message.text}")
        for example in message.examples:
            print(f"  - {example}")
    listings: Sequence[CarListing] = session.listings
    for offset, car in enumerate(listings[seen_listings:], start=seen_listings + 1):
        print(format_listing(offset, car))
    print()


async def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)

    async with SearchSession(greet=True) as session:
        print_new_activity(session, 0, 0)
        print("Type 'more' to load more cars, 'exit' or 'quit' to stop.")

        while True:
            try:
                user_input = input("You: ").strip()
            except (KeyboardInterrupt, EOFError):
                print("\nExiting.")
                break

            if not user_input:
                continue
            if user_input.lower() in {"exit", "quit"}:
                print("Goodbye.")
                break

            seen_messages = len(session.messages)
            seen_listings = len(session.listings)
            if user_input.lower() == "more":
                if session.last_page_count == 0:
                    print("No more cars for this search. Try a different budget.\n")
                    continue
                outcome = await session.load_more()
                if outcome is SearchOutcome.NO_LINEAGE:
                    print("Search for a budget first.\n")
                    continue
                if outcome is SearchOutcome.EMPTY:
                    print("No more cars found.")
            else:
                # Fresh search resets the listing numbering
                outcome = await session.submit(user_input)
                if outcome.succeeded:
                    seen_listings = 0

            print_new_activity(session, seen_messages, seen_listings)

    print("Session ended.")


if __name__ == "__main__":
    asyncio.run(main())
