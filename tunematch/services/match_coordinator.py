"""Like -> match orchestration.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Services (business logic orchestration).
# Depends on: IMatchStore, CompatibilityService.
#
# create_like() runs the reciprocity sequence:
#
#   1. VALIDATE   -- no self-likes, target must be a registered user.
#   2. DEDUPE     -- an existing (from -> to) like is a no-op.
#   3. PERSIST    -- the new like is committed before anything else happens.
#   4. RECIPROCITY-- look for the reverse (to -> from) like.
#   5. MATCH      -- if present: fetch both current profiles, score them
#                    (bypassing the result cache), insert the canonical
#                    Match row and return it.
#
# The like committed in step 3 is never rolled back.  If step 5 fails
# (profile source down), the caller sees ExternalSourceError but the like
# signal is kept; resolve_match() re-derives reciprocity from the persisted
# likes and finishes the job later.
#
# Two users liking each other at the same moment can both reach step 5.
# The store's UNIQUE(user_a, user_b) lets exactly one insert win; the
# other gets ConflictError, which is resolved to the winner's row.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import structlog

from tunematch.interfaces.match_store import IMatchStore
from tunematch.models.match import Like, Match
from tunematch.services.compatibility_service import CompatibilityService
from tunematch.utils.errors import ConflictError, NotFoundError, ValidationError

logger = structlog.get_logger(logger_name=__name__)


class MatchCoordinator:
    """Turns likes into matches.

    All dependencies are constructor-injected.
    """

    def __init__(
        self,
        store: IMatchStore,
        compatibility: CompatibilityService,
    ) -> None:
        self._store = store
        self._compatibility = compatibility

    # ── Public API ─────────────────────────────────────────────────────

    async def create_like(self, from_user: str, to_user: str) -> Match | None:
        """Record that *from_user* likes *to_user*.

        Returns the Match when this like completes a reciprocal pair, else
        ``None``.  Repeating a like is a no-op that returns ``None``: it
        never inserts a second row and never creates a Match.

        Raises
        ------
        ValidationError
            Self-like, or *to_user* is not a registered user.
        ExternalSourceError
            Profiles could not be fetched for scoring.  The like is kept.
        """
        await self._validate_like(from_user, to_user)

        existing = await self._store.get_like(from_user, to_user)
        if existing is not None:
            logger.info("like_already_exists", from_user=from_user, to_user=to_user)
            return None

        like = Like(from_user=from_user, to_user=to_user)
        if not await self._store.insert_like(like):
            # A concurrent request inserted the same like first.
            logger.info("like_insert_raced", from_user=from_user, to_user=to_user)
            return None
        logger.info("like_created", like_id=like.id, from_user=from_user, to_user=to_user)

        reverse = await self._store.get_like(to_user, from_user)
        if reverse is None:
            return None

        return await self._create_match(from_user, to_user)

    async def resolve_match(self, user_x: str, user_y: str) -> Match | None:
        """Create the pair's Match if both likes exist and it is still missing.

        Safe to call repeatedly; this is the retry path after a scoring
        failure inside :meth:`create_like`.
        """
        if user_x == user_y:
            raise ValidationError(message="A user cannot match with themselves")

        existing = await self._store.get_match_by_pair(user_x, user_y)
        if existing is not None:
            return existing

        forward = await self._store.get_like(user_x, user_y)
        reverse = await self._store.get_like(user_y, user_x)
        if forward is None or reverse is None:
            return None

        return await self._create_match(user_x, user_y)

    async def delete_match(self, match_id: str, requesting_user: str) -> None:
        """Delete a match on behalf of one of its participants.

        Unknown matches and matches the user is not part of are both
        reported as NotFoundError.
        """
        match = await self._store.get_match(match_id)
        if match is None or not match.involves(requesting_user):
            logger.info("match_delete_not_found", match_id=match_id, user_id=requesting_user)
            raise NotFoundError(message="Match not found")

        if not await self._store.delete_match(match_id):
            raise NotFoundError(message="Match not found")
        logger.info("match_deleted", match_id=match_id, user_id=requesting_user)

    async def get_user_matches(self, user_id: str) -> list[Match]:
        """All matches involving *user_id*, newest first."""
        return await self._store.list_matches(user_id)

    # ── Private ────────────────────────────────────────────────────────

    async def _validate_like(self, from_user: str, to_user: str) -> None:
        if from_user == to_user:
            raise ValidationError(message="Users cannot like themselves")
        if not await self._store.user_exists(to_user):
            raise ValidationError(message=f"User {to_user} does not exist")

    async def _create_match(self, user_x: str, user_y: str) -> Match | None:
        # Always rescore: a cached pair result may predate a profile resync.
        result = await self._compatibility.calculate(user_x, user_y, use_cache=False)
        match = Match.create(user_x, user_y, compatibility_score=result.score)

        try:
            stored = await self._store.insert_match(match)
        except ConflictError:
            winner = await self._store.get_match_by_pair(user_x, user_y)
            logger.info(
                "match_conflict_resolved",
                user_a=match.user_a,
                user_b=match.user_b,
                existing_match_id=winner.id if winner else None,
            )
            return winner

        logger.info(
            "match_created",
            match_id=stored.id,
            user_a=stored.user_a,
            user_b=stored.user_b,
            compatibility_score=stored.compatibility_score,
        )
        return stored
