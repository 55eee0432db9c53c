"""Search policy constants and environment-driven settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PAGE_WINDOW_SIZE = 5 # Number of backend pages requested per fetch
FIRST_PAGE = 1 # Page a fresh search starts from

# Placeholders for fields the backend left out
NAME_PLACEHOLDER = "Car Name Not Available"
PRICE_PLACEHOLDER = "Price Not Available"
LOCATION_PLACEHOLDER = "Location Not Available"
DATE_PLACEHOLDER = "Date Not Available"
PRICE_UNIT = "Million"

GREETING = (
    "Hello! I can help you find cars based on your budget. "
    "Just tell me how much you want to spend (in millions), "
    "and I'll search for available cars on Ouedkniss."
)
GREETING_EXAMPLES = (
    "I want a car for 300 million",
    "Show me cars around 500 million",
    "Bghit siyara b 400 million",
)

NO_MATCHES_REPLY = (
    "Sorry, I couldn't find any cars matching your criteria. "
    "Try adjusting your budget or search terms."
)
SEARCH_FAILED_REPLY = "Sorry, something went wrong. Please try again."
LOAD_MORE_FAILED_REPLY = "Sorry, something went wrong while loading more cars."


class Settings(BaseSettings):
    """Runtime settings; override with CAR_AGENT_* variables or a local .env."""

    model_config = SettingsConfigDict(
        env_prefix="CAR_AGENT_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    api_url: str = "http://localhost:8000"
    request_timeout_seconds: float = Field(default=60, ge=1, le=600)
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
