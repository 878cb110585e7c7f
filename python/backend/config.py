"""Runtime settings for the sliding puzzle."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SLIDING_PUZZLE_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Puzzle provider
    API_URL: str = "https://puzzle.bsite.net/api/Puzzle/"
    REQUEST_TIMEOUT: float = 30.0
    DEFAULT_DIFFICULTY: str = "medium"

    # Local data (preferences)
    DATA_DIR: Path = Path("data")

    # Shuffling: random-walk length grows with the grid width
    SHUFFLE_MOVES_SMALL: int = 200
    SHUFFLE_MOVES_LARGE: int = 2000
    LARGE_GRID_COLS: int = 5

    # Seconds between timer ticks
    TICK_INTERVAL: float = 1.0


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
