"""Abstract base class for listening-profile sources.

A profile source answers "what are this user's top artists?" from a cached
copy of the user's synced listening history.  The concrete implementation is
SQLiteProfileSource (tunematch/providers/profile/).  A source backed directly
by a remote listening-history API would implement the same contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from tunematch.models.profile import ArtistAffinity, RankedProfile


class IProfileSource(ABC):
    """Contract for listening-profile sources.

    All operations are async to support network-backed sources.
    """

    @abstractmethod
    async def get_top_artists(self, user_id: str, limit: int = 50) -> RankedProfile:
        """Return the user's ranked artists, most played first.

        Parameters
        ----------
        user_id:
            Application user id.
        limit:
            Maximum number of artists to return.

        Returns
        -------
        RankedProfile
            Possibly empty if the user never synced a listening history.

        Raises
        ------
        ExternalSourceError
            If the underlying source cannot be read.
        """

    @abstractmethod
    async def replace_top_artists(
        self,
        user_id: str,
        artists: list[ArtistAffinity],
    ) -> int:
        """Replace the user's cached ranking with *artists* (in rank order).

        Returns the number of artists stored.
        """

    @abstractmethod
    async def initialize(self) -> None:
        """Create tables/indices if they don't exist.  Called at startup."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
