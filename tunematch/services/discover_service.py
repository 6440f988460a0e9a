"""Discover feed -- candidate users ranked by musical compatibility.

The caller supplies the candidate ids (user search and filtering live in
the out-of-scope user directory).  This service removes the viewer and
anyone the viewer already liked, scores the rest, drops weak matches and
returns the survivors best-first.
"""

from __future__ import annotations

import structlog

from tunematch.interfaces.match_store import IMatchStore
from tunematch.models.match import DiscoverProfile
from tunematch.models.profile import RankedProfile
from tunematch.services.compatibility_service import CompatibilityService
from tunematch.utils.errors import ExternalSourceError

logger = structlog.get_logger(logger_name=__name__)

_MIN_SCORE = 10.0
_TOP_ARTISTS = 5


class DiscoverService:
    """Builds a compatibility-ranked discover feed for one viewer."""

    def __init__(
        self,
        store: IMatchStore,
        compatibility: CompatibilityService,
        *,
        min_score: float = _MIN_SCORE,
        top_artists: int = _TOP_ARTISTS,
    ) -> None:
        self._store = store
        self._compatibility = compatibility
        self._min_score = min_score
        self._top_artists = top_artists

    async def discover(
        self,
        viewer_id: str,
        candidate_ids: list[str],
        limit: int | None = None,
    ) -> list[DiscoverProfile]:
        """Rank *candidate_ids* for *viewer_id*, best match first.

        A viewer without a synced listening history gets an empty feed.
        Candidates whose profile cannot be fetched are skipped.
        """
        viewer_profile = await self._compatibility.fetch_profile(viewer_id)
        if viewer_profile.is_empty:
            logger.info("discover_empty_viewer_profile", viewer_id=viewer_id)
            return []

        already_liked = await self._store.list_liked_user_ids(viewer_id)
        seen: set[str] = set()
        profiles: list[DiscoverProfile] = []

        for candidate_id in candidate_ids:
            if candidate_id == viewer_id or candidate_id in already_liked or candidate_id in seen:
                continue
            seen.add(candidate_id)

            try:
                candidate_profile = await self._compatibility.fetch_profile(candidate_id)
                result = await self._compatibility.calculate(
                    viewer_id,
                    candidate_id,
                    profile_x=viewer_profile,
                    profile_y=candidate_profile,
                )
            except ExternalSourceError as exc:
                logger.warning("discover_candidate_skipped", candidate_id=candidate_id, error=str(exc))
                continue

            if result.score < self._min_score:
                continue

            profiles.append(
                DiscoverProfile(
                    user_id=candidate_id,
                    compatibility_score=result.score,
                    top_artists=candidate_profile.names()[: self._top_artists],
                    common_artists=_in_viewer_rank_order(viewer_profile, result.common_artists),
                )
            )

        profiles.sort(key=lambda p: (-p.compatibility_score, p.user_id))
        if limit is not None:
            profiles = profiles[:limit]
        logger.info(
            "discover_feed_built",
            viewer_id=viewer_id,
            candidates=len(candidate_ids),
            returned=len(profiles),
        )
        return profiles


def _in_viewer_rank_order(viewer: RankedProfile, names: frozenset[str]) -> list[str]:
    ordered = [name for name in viewer.names() if name in names]
    # Dedupe while keeping the first (highest) rank.
    return list(dict.fromkeys(ordered))
