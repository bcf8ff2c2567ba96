from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "Scorecard"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/scorecard"

    # Read-only card-set metadata store. None disables the reference stage
    # of sport classification and player-name jargon filtering.
    reference_database_url: str | None = None

    sport_lookup_url: str = "https://site.web.api.espn.com/apis/search/v2"
    sport_lookup_enabled: bool = True
    sport_lookup_timeout: float = 10.0

    # Pause between external calls in maintenance jobs (third-party rate limits)
    maintenance_delay_seconds: float = 0.5


settings = Settings()


# =============================================================================
# EXTRACTION LIMITS
# =============================================================================

# Earliest year accepted from a title; later bound is next calendar year
MIN_VALID_YEAR = 1900

# Joined length bounds for a player-name candidate
MIN_PLAYER_NAME_LENGTH = 3
MAX_PLAYER_NAME_LENGTH = 30

# Tokens shorter than this are never sent to the reference database
MIN_REFERENCE_TOKEN_LENGTH = 3
