"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # TMDb API
    tmdb_api_key: str = ""
    tmdb_language: str = "en-AU"
    # Pauses that keep us under the TMDb rate limit
    tmdb_detail_delay: float = 0.1
    tmdb_lookup_delay: float = 0.25

    # Run settings
    days_to_scrape: int = 2  # 1 = today only, 2 = today + tomorrow, 7 = full week
    output_path: str = "data/sessions.json"
    venue_timezone: str = "Australia/Melbourne"
    enabled_venues: list[str] = []  # empty = every configured venue

    # Scraping settings
    scrape_timeout: int = 30
    page_timeout_ms: int = 60000
    selector_timeout_ms: int = 10000
    page_settle_seconds: float = 3.0
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )


# Global settings instance
settings = Settings()
