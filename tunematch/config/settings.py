"""Application settings loaded from environment variables via pydantic-settings.

Values are read from two sources, in priority order:

  1. Environment variables, e.g. ``DATABASE_PATH=/data/tunematch.db``
  2. A ``.env`` file in the working directory (local development)

Field names map to upper-cased environment variables automatically.
Defaults apply when neither source sets a value.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """TuneMatch application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Storage ===
    # Likes, matches and the synced listening-history cache share one file.
    database_path: str = "data/tunematch.db"

    # === Scoring ===
    profile_limit: int = 50
    common_artists_limit: int = 3

    # === Discover feed ===
    discover_min_score: float = 10.0
    discover_top_artists: int = 5

    # === Compatibility cache ===
    compatibility_cache_enabled: bool = True
    compatibility_cache_ttl: int = 3600
    compatibility_cache_size: int = 10_000

    # === Profile fetch retries ===
    profile_fetch_attempts: int = 3
    retry_backoff_seconds: float = 0.2

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def validation_problems(self) -> list[str]:
        """Return human-readable problems with the configured values."""
        problems: list[str] = []
        if self.profile_limit < 1:
            problems.append("profile_limit must be at least 1")
        if self.common_artists_limit < 0:
            problems.append("common_artists_limit must not be negative")
        if self.profile_fetch_attempts < 1:
            problems.append("profile_fetch_attempts must be at least 1")
        if self.retry_backoff_seconds < 0:
            problems.append("retry_backoff_seconds must not be negative")
        if not 0.0 <= self.discover_min_score <= 99.0:
            problems.append("discover_min_score must be within [0, 99]")
        if self.log_level.upper() not in _LOG_LEVELS:
            problems.append(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return problems
