"""SQLite-backed listening-profile source.

Holds the cached copy of each user's synced listening history (the last
top-artists snapshot pulled from the listening-history provider).  A sync
replaces a user's whole ranking atomically; reads return it in the stored
rank order.  Rank is persisted explicitly rather than re-derived from play
counts, so the order the provider reported is the order the scorer sees.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import aiosqlite
import structlog

from tunematch.interfaces.profile_source import IProfileSource
from tunematch.models.profile import ArtistAffinity, RankedProfile
from tunematch.utils.errors import ExternalSourceError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("data/tunematch.db")
_PROVIDER_NAME = "sqlite_profile_source"
_DEFAULT_PERIOD = "6month"

_CREATE_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS artist_rankings (
    user_id         TEXT    NOT NULL,
    period          TEXT    NOT NULL,
    rank            INTEGER NOT NULL,
    artist_name     TEXT    NOT NULL,
    external_id     TEXT,
    play_count      INTEGER NOT NULL DEFAULT 0,
    listener_count  INTEGER NOT NULL DEFAULT 0,
    synced_at       TEXT    NOT NULL,
    PRIMARY KEY (user_id, period, rank)
);
"""

_DELETE_RANKING_SQL = "DELETE FROM artist_rankings WHERE user_id = ? AND period = ?;"

_INSERT_ENTRY_SQL = """\
INSERT INTO artist_rankings
    (user_id, period, rank, artist_name, external_id, play_count, listener_count, synced_at)
VALUES (?, ?, ?, ?, ?, ?, ?, ?);
"""

_SELECT_RANKING_SQL = """\
SELECT artist_name, external_id, play_count, listener_count
FROM artist_rankings
WHERE user_id = ? AND period = ?
ORDER BY rank ASC
LIMIT ?;
"""


class SQLiteProfileSource(IProfileSource):
    """Serves ranked profiles from the local listening-history cache.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.
    period:
        Listening-history window the rankings belong to.
    max_artists:
        Upper bound on how many artists a sync stores per user.
    """

    def __init__(
        self,
        db_path: str | Path = _DEFAULT_DB_PATH,
        period: str = _DEFAULT_PERIOD,
        max_artists: int = 50,
    ) -> None:
        self._db_path = Path(db_path)
        self._period = period
        self._max_artists = max_artists

    async def initialize(self) -> None:
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                await db.execute(_CREATE_TABLE_SQL)
                await db.commit()
        except aiosqlite.Error as exc:
            raise ExternalSourceError(message=str(exc), provider_name=_PROVIDER_NAME) from exc
        logger.info("profile_source_initialized", path=str(self._db_path), period=self._period)

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    async def get_top_artists(self, user_id: str, limit: int = 50) -> RankedProfile:
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                db.row_factory = aiosqlite.Row
                cursor = await db.execute(
                    _SELECT_RANKING_SQL,
                    (user_id, self._period, limit),
                )
                rows = await cursor.fetchall()
        except aiosqlite.Error as exc:
            logger.warning("profile_fetch_failed", user_id=user_id, error=str(exc))
            raise ExternalSourceError(
                message=f"Could not read profile for {user_id}: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        artists = tuple(
            ArtistAffinity(
                name=row["artist_name"],
                external_id=row["external_id"],
                play_count=row["play_count"],
                listener_count=row["listener_count"],
            )
            for row in rows
        )
        return RankedProfile(user_id=user_id, artists=artists)

    async def replace_top_artists(
        self,
        user_id: str,
        artists: list[ArtistAffinity],
    ) -> int:
        """Replace the user's ranking in one transaction; keeps the first occurrence of each name."""
        synced_at = datetime.now(timezone.utc).isoformat()
        unique: list[ArtistAffinity] = []
        seen: set[str] = set()
        for artist in artists:
            if artist.name in seen:
                continue
            seen.add(artist.name)
            unique.append(artist)
        unique = unique[: self._max_artists]

        rows = [
            (
                user_id,
                self._period,
                rank,
                artist.name,
                artist.external_id,
                artist.play_count,
                artist.listener_count,
                synced_at,
            )
            for rank, artist in enumerate(unique)
        ]
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                await db.execute(_DELETE_RANKING_SQL, (user_id, self._period))
                await db.executemany(_INSERT_ENTRY_SQL, rows)
                await db.commit()
        except aiosqlite.Error as exc:
            raise ExternalSourceError(
                message=f"Could not store profile for {user_id}: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        logger.info("profile_synced", user_id=user_id, period=self._period, artists=len(rows))
        return len(rows)
