"""Abstract base class for like/match persistence.

# ─── UNIQUENESS CONTRACT ─────────────────────────────────────────────
#
# Implementations MUST enforce, at the storage level:
#
#   - at most one Like per (from_user, to_user)
#   - at most one Match per canonical pair (user_a, user_b), user_a < user_b
#
# The MatchCoordinator performs a check-then-act sequence across two
# requests that can race (both users liking each other at the same time).
# Storage-level uniqueness is what turns that race into "one writer wins,
# the other sees ConflictError" instead of a duplicate match row.
# A backend without composite unique constraints must run the reciprocity
# check and the match insert inside one serializable transaction instead.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from tunematch.models.match import Like, Match


class IMatchStore(ABC):
    """Contract for user, like and match persistence."""

    # ── Lifecycle ──────────────────────────────────────────────────────

    @abstractmethod
    async def initialize(self) -> None:
        """Create tables/indices if they don't exist.  Called at startup."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""

    # ── Users ──────────────────────────────────────────────────────────

    @abstractmethod
    async def add_user(self, user_id: str) -> bool:
        """Register a user id.  Returns False if it was already known."""

    @abstractmethod
    async def user_exists(self, user_id: str) -> bool:
        """Return True if *user_id* is a registered user."""

    # ── Likes ──────────────────────────────────────────────────────────

    @abstractmethod
    async def get_like(self, from_user: str, to_user: str) -> Like | None:
        """Return the like from *from_user* to *to_user*, if any."""

    @abstractmethod
    async def insert_like(self, like: Like) -> bool:
        """Persist *like*.

        Returns False, without raising, if a like for the same
        (from_user, to_user) already exists.
        """

    @abstractmethod
    async def list_liked_user_ids(self, from_user: str) -> set[str]:
        """Return every user id that *from_user* has liked."""

    # ── Matches ────────────────────────────────────────────────────────

    @abstractmethod
    async def insert_match(self, match: Match) -> Match:
        """Persist *match* and return it.

        Raises
        ------
        ConflictError
            If a match for the same canonical pair already exists.
        """

    @abstractmethod
    async def get_match(self, match_id: str) -> Match | None:
        """Return the match with id *match_id*, if any."""

    @abstractmethod
    async def get_match_by_pair(self, user_x: str, user_y: str) -> Match | None:
        """Return the match between two users, in either argument order."""

    @abstractmethod
    async def list_matches(self, user_id: str) -> list[Match]:
        """Return every match involving *user_id*, newest first."""

    @abstractmethod
    async def delete_match(self, match_id: str) -> bool:
        """Delete the match.  Returns True if a row was removed."""
