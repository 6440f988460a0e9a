"""TuneMatch composition root.

Wires providers and services together.  Transport code (HTTP handlers,
workers) calls :func:`build_services` once at startup and keeps the
returned container for the process lifetime.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from tunematch.config.loader import load_config
from tunematch.config.settings import Settings
from tunematch.interfaces.cache_provider import ICacheProvider
from tunematch.providers.cache.memory_cache import MemoryCacheProvider
from tunematch.providers.profile.sqlite_profile_source import SQLiteProfileSource
from tunematch.providers.store.sqlite_match_store import SQLiteMatchStore
from tunematch.services.compatibility_scorer import MAX_RANKED_ARTISTS, MAX_SCORE, CompatibilityScorer
from tunematch.services.compatibility_service import CompatibilityService
from tunematch.services.discover_service import DiscoverService
from tunematch.services.match_coordinator import MatchCoordinator
from tunematch.utils.errors import ConfigurationError
from tunematch.utils.logging import configure_logging_from_config, get_logger


@dataclass(frozen=True)
class TuneMatchServices:
    """Everything a transport layer needs, already initialized."""

    settings: Settings
    store: SQLiteMatchStore
    profile_source: SQLiteProfileSource
    scorer: CompatibilityScorer
    compatibility: CompatibilityService
    coordinator: MatchCoordinator
    discover: DiscoverService


def _build_scorer(config: dict) -> CompatibilityScorer:
    scoring = config.get("scoring", {})
    max_ranked = int(scoring.get("max_ranked_artists", MAX_RANKED_ARTISTS))
    max_score = float(scoring.get("max_score", MAX_SCORE))
    if max_ranked < 1:
        raise ConfigurationError(message="scoring.max_ranked_artists must be at least 1")
    if not 0.0 < max_score <= MAX_SCORE:
        raise ConfigurationError(message=f"scoring.max_score must be within (0, {MAX_SCORE}]")
    return CompatibilityScorer(max_ranked_artists=max_ranked, max_score=max_score)


def _build_cache(app_settings: Settings) -> ICacheProvider | None:
    if not app_settings.compatibility_cache_enabled:
        return None
    return MemoryCacheProvider(
        max_size=app_settings.compatibility_cache_size,
        ttl=app_settings.compatibility_cache_ttl,
    )


async def build_services(
    app_settings: Settings | None = None,
    config_path: str = "config/config.yaml",
) -> TuneMatchServices:
    """Configure logging, create and initialize every adapter and service.

    Raises
    ------
    ConfigurationError
        If the settings or the YAML config hold invalid values.
    """
    app_settings = app_settings or Settings()
    problems = app_settings.validation_problems()
    if problems:
        raise ConfigurationError(message="; ".join(problems))

    config = load_config(config_path, settings=app_settings)
    configure_logging_from_config(config)
    logger: structlog.BoundLogger = get_logger(__name__)

    scorer = _build_scorer(config)

    store = SQLiteMatchStore(db_path=app_settings.database_path)
    profile_source = SQLiteProfileSource(
        db_path=app_settings.database_path,
        max_artists=app_settings.profile_limit,
    )
    await store.initialize()
    await profile_source.initialize()

    compatibility = CompatibilityService(
        profile_source,
        scorer,
        _build_cache(app_settings),
        profile_limit=app_settings.profile_limit,
        common_limit=app_settings.common_artists_limit,
        fetch_attempts=app_settings.profile_fetch_attempts,
        retry_backoff_seconds=app_settings.retry_backoff_seconds,
        cache_ttl=app_settings.compatibility_cache_ttl,
    )
    coordinator = MatchCoordinator(store, compatibility)
    discover = DiscoverService(
        store,
        compatibility,
        min_score=app_settings.discover_min_score,
        top_artists=app_settings.discover_top_artists,
    )

    logger.info(
        "services_ready",
        database_path=app_settings.database_path,
        cache_enabled=app_settings.compatibility_cache_enabled,
        max_ranked_artists=scorer.max_ranked_artists,
    )
    return TuneMatchServices(
        settings=app_settings,
        store=store,
        profile_source=profile_source,
        scorer=scorer,
        compatibility=compatibility,
        coordinator=coordinator,
        discover=discover,
    )
