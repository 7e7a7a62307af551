from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "DeckKeeper"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./deckkeeper.db"

    # Key of the single blob that holds the whole deck collection
    collection_key: str = "mtgDecks"

    scryfall_api_url: str = "https://api.scryfall.com"
    scryfall_user_agent: str = "DeckKeeper/1.0"
    lookup_timeout_seconds: float = 10.0

    # Pause after every card lookup during import (Scryfall asks for 50-100ms)
    lookup_delay_seconds: float = 0.1


settings = Settings()


# =============================================================================
# IMPORT LIMITS
# =============================================================================

# The pacing delay may be raised through settings but never lowered below this
MIN_LOOKUP_DELAY_SECONDS = 0.1
