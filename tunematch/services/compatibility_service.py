"""Compatibility between two users -- profile fetch, scoring, caching.

Layer: Services.  Depends on IProfileSource, CompatibilityScorer and an
optional ICacheProvider.

The scorer is pure and symmetric, so a result computed for (x, y) is valid
for (y, x).  Results are cached under the canonical pair key
``compatibility:{user_a}:{user_b}``.
"""

from __future__ import annotations

import asyncio

import structlog

from tunematch.interfaces.cache_provider import ICacheProvider
from tunematch.interfaces.profile_source import IProfileSource
from tunematch.models.match import canonical_pair
from tunematch.models.profile import CompatibilityResult, RankedProfile
from tunematch.services.compatibility_scorer import CompatibilityScorer
from tunematch.utils.errors import ExternalSourceError

logger = structlog.get_logger(logger_name=__name__)


def compatibility_cache_key(user_x: str, user_y: str) -> str:
    user_a, user_b = canonical_pair(user_x, user_y)
    return f"compatibility:{user_a}:{user_b}"


class CompatibilityService:
    """Computes (and caches) compatibility results for pairs of users.

    Parameters
    ----------
    profile_source:
        Where ranked profiles are read from.
    scorer:
        The pure scoring engine.
    cache:
        Optional result cache.  ``None`` disables caching.
    profile_limit:
        How many top artists to fetch per user.
    common_limit:
        How many common artists each result keeps.
    fetch_attempts:
        Total attempts per profile fetch before ExternalSourceError propagates.
    retry_backoff_seconds:
        Base delay between attempts; attempt *n* waits ``n * base``.
    cache_ttl:
        TTL passed to the cache on writes.
    """

    def __init__(
        self,
        profile_source: IProfileSource,
        scorer: CompatibilityScorer | None = None,
        cache: ICacheProvider | None = None,
        *,
        profile_limit: int = 50,
        common_limit: int | None = 3,
        fetch_attempts: int = 3,
        retry_backoff_seconds: float = 0.2,
        cache_ttl: int | None = None,
    ) -> None:
        self._profile_source = profile_source
        self._scorer = scorer or CompatibilityScorer()
        self._cache = cache
        self._profile_limit = profile_limit
        self._common_limit = common_limit
        self._fetch_attempts = max(fetch_attempts, 1)
        self._retry_backoff_seconds = retry_backoff_seconds
        self._cache_ttl = cache_ttl

    @property
    def scorer(self) -> CompatibilityScorer:
        return self._scorer

    async def fetch_profile(self, user_id: str) -> RankedProfile:
        """Fetch a user's ranked profile, retrying transient source failures."""
        attempt = 1
        while True:
            try:
                return await self._profile_source.get_top_artists(user_id, self._profile_limit)
            except ExternalSourceError as exc:
                if attempt >= self._fetch_attempts:
                    logger.error(
                        "profile_fetch_exhausted",
                        user_id=user_id,
                        attempts=attempt,
                        error=str(exc),
                    )
                    raise
                logger.warning(
                    "profile_fetch_retry",
                    user_id=user_id,
                    attempt=attempt,
                    error=str(exc),
                )
                await asyncio.sleep(self._retry_backoff_seconds * attempt)
                attempt += 1

    async def calculate(
        self,
        user_x: str,
        user_y: str,
        profile_x: RankedProfile | None = None,
        profile_y: RankedProfile | None = None,
        *,
        use_cache: bool = True,
    ) -> CompatibilityResult:
        """Return the compatibility result for two users.

        Profiles the caller already holds may be passed in to skip a fetch
        (the discover feed scores one viewer against many candidates).

        With ``use_cache=False`` a cached entry is never returned; the pair is
        rescored from the current profiles and the cache entry is overwritten.
        Match creation uses this so a stored score always reflects the
        profiles as they are at the reciprocity moment, even after a resync.
        """
        key = compatibility_cache_key(user_x, user_y)
        if use_cache and self._cache is not None:
            cached = await self._cache.get(key)
            if cached is not None:
                return cached

        if profile_x is None:
            profile_x = await self.fetch_profile(user_x)
        if profile_y is None:
            profile_y = await self.fetch_profile(user_y)
        result = self._scorer.score(profile_x, profile_y, common_limit=self._common_limit)

        if self._cache is not None:
            await self._cache.set(key, result, ttl=self._cache_ttl)
        logger.debug(
            "compatibility_calculated",
            user_x=user_x,
            user_y=user_y,
            score=result.score,
            common=len(result.common_artists),
            cache_bypassed=not use_cache,
        )
        return result

    async def invalidate(self, user_x: str, user_y: str) -> None:
        """Drop the cached result for a pair, e.g. after either profile re-syncs."""
        if self._cache is not None:
            await self._cache.delete(compatibility_cache_key(user_x, user_y))
