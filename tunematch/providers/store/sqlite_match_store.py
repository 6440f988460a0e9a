"""SQLite-backed like/match persistence provider.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Providers (concrete adapter implementing IMatchStore).
# Database: ``data/tunematch.db`` -- users, likes and matches.
#
# Uniqueness lives in the schema, not in application code:
#   - likes:   UNIQUE(from_user, to_user)
#   - matches: UNIQUE(user_a, user_b) with CHECK(user_a < user_b)
#
# so two coroutines racing through the like -> match sequence cannot
# produce a second match row; the loser's insert fails with an
# IntegrityError that this adapter reports as ConflictError.
#
# Every operation opens a short-lived ``aiosqlite`` connection.  WAL
# journaling keeps readers from blocking behind the single writer.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite
import structlog

from tunematch.interfaces.match_store import IMatchStore
from tunematch.models.match import Like, Match, canonical_pair
from tunematch.utils.errors import ConflictError, StoreError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("data/tunematch.db")
_PROVIDER_NAME = "sqlite_match_store"

# ── Schema DDL ────────────────────────────────────────────────────────

_CREATE_USERS_TABLE = """\
CREATE TABLE IF NOT EXISTS users (
    id          TEXT PRIMARY KEY,
    created_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);
"""

_CREATE_LIKES_TABLE = """\
CREATE TABLE IF NOT EXISTS likes (
    id          TEXT PRIMARY KEY,
    from_user   TEXT NOT NULL,
    to_user     TEXT NOT NULL,
    created_at  TEXT NOT NULL,
    UNIQUE(from_user, to_user)
);
"""

_CREATE_MATCHES_TABLE = """\
CREATE TABLE IF NOT EXISTS matches (
    id                  TEXT PRIMARY KEY,
    user_a              TEXT NOT NULL,
    user_b              TEXT NOT NULL,
    compatibility_score REAL,
    created_at          TEXT NOT NULL,
    UNIQUE(user_a, user_b),
    CHECK(user_a < user_b)
);
"""

_CREATE_INDICES = [
    "CREATE INDEX IF NOT EXISTS idx_likes_to_user ON likes(to_user);",
    "CREATE INDEX IF NOT EXISTS idx_matches_user_b ON matches(user_b);",
]

# ── Queries ───────────────────────────────────────────────────────────

_INSERT_USER = "INSERT OR IGNORE INTO users (id) VALUES (?);"
_USER_EXISTS = "SELECT 1 FROM users WHERE id = ? LIMIT 1;"

_SELECT_LIKE = """\
SELECT id, from_user, to_user, created_at
FROM likes
WHERE from_user = ? AND to_user = ?;
"""

_INSERT_LIKE = """\
INSERT INTO likes (id, from_user, to_user, created_at)
VALUES (?, ?, ?, ?)
ON CONFLICT(from_user, to_user) DO NOTHING;
"""

_SELECT_LIKED_IDS = "SELECT to_user FROM likes WHERE from_user = ?;"

_MATCH_COLUMNS = "id, user_a, user_b, compatibility_score, created_at"

_INSERT_MATCH = """\
INSERT INTO matches (id, user_a, user_b, compatibility_score, created_at)
VALUES (?, ?, ?, ?, ?);
"""

_SELECT_MATCH = f"SELECT {_MATCH_COLUMNS} FROM matches WHERE id = ?;"

_SELECT_MATCH_BY_PAIR = (
    f"SELECT {_MATCH_COLUMNS} FROM matches WHERE user_a = ? AND user_b = ?;"
)

_SELECT_USER_MATCHES = (
    f"SELECT {_MATCH_COLUMNS} FROM matches "
    "WHERE user_a = ? OR user_b = ? "
    "ORDER BY created_at DESC, id ASC;"
)

_DELETE_MATCH = "DELETE FROM matches WHERE id = ?;"


def _row_to_like(row: aiosqlite.Row) -> Like:
    return Like(
        id=row["id"],
        from_user=row["from_user"],
        to_user=row["to_user"],
        created_at=row["created_at"],
    )


def _row_to_match(row: aiosqlite.Row) -> Match:
    return Match(
        id=row["id"],
        user_a=row["user_a"],
        user_b=row["user_b"],
        compatibility_score=row["compatibility_score"],
        created_at=row["created_at"],
    )


class SQLiteMatchStore(IMatchStore):
    """SQLite-backed user, like and match persistence.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.  Parent directories are created
        on :meth:`initialize`.
    timeout:
        Seconds a connection waits on a locked database before failing.
    """

    def __init__(self, db_path: str | Path = _DEFAULT_DB_PATH, timeout: float = 5.0) -> None:
        self._db_path = Path(db_path)
        self._timeout = timeout

    @asynccontextmanager
    async def _connect(self) -> AsyncIterator[aiosqlite.Connection]:
        try:
            async with aiosqlite.connect(str(self._db_path), timeout=self._timeout) as db:
                db.row_factory = aiosqlite.Row
                yield db
        except aiosqlite.Error as exc:
            logger.error("match_store_error", error=str(exc), path=str(self._db_path))
            raise StoreError(message=str(exc), provider_name=_PROVIDER_NAME) from exc

    # ── Lifecycle ──────────────────────────────────────────────────────

    async def initialize(self) -> None:
        """Create the users, likes and matches tables if they don't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        async with self._connect() as db:
            await db.execute("PRAGMA journal_mode=WAL;")
            await db.execute(_CREATE_USERS_TABLE)
            await db.execute(_CREATE_LIKES_TABLE)
            await db.execute(_CREATE_MATCHES_TABLE)
            for idx_sql in _CREATE_INDICES:
                await db.execute(idx_sql)
            await db.commit()
        logger.info("match_store_initialized", path=str(self._db_path))

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    # ── Users ──────────────────────────────────────────────────────────

    async def add_user(self, user_id: str) -> bool:
        async with self._connect() as db:
            cursor = await db.execute(_INSERT_USER, (user_id,))
            await db.commit()
            return cursor.rowcount > 0

    async def user_exists(self, user_id: str) -> bool:
        async with self._connect() as db:
            cursor = await db.execute(_USER_EXISTS, (user_id,))
            row = await cursor.fetchone()
        return row is not None

    # ── Likes ──────────────────────────────────────────────────────────

    async def get_like(self, from_user: str, to_user: str) -> Like | None:
        async with self._connect() as db:
            cursor = await db.execute(_SELECT_LIKE, (from_user, to_user))
            row = await cursor.fetchone()
        return _row_to_like(row) if row else None

    async def insert_like(self, like: Like) -> bool:
        """Insert *like*; returns False if the (from, to) pair already exists."""
        async with self._connect() as db:
            cursor = await db.execute(
                _INSERT_LIKE,
                (like.id, like.from_user, like.to_user, like.created_at.isoformat()),
            )
            await db.commit()
            inserted = cursor.rowcount > 0
        if inserted:
            logger.debug("like_inserted", from_user=like.from_user, to_user=like.to_user)
        return inserted

    async def list_liked_user_ids(self, from_user: str) -> set[str]:
        async with self._connect() as db:
            cursor = await db.execute(_SELECT_LIKED_IDS, (from_user,))
            rows = await cursor.fetchall()
        return {row["to_user"] for row in rows}

    # ── Matches ────────────────────────────────────────────────────────

    async def insert_match(self, match: Match) -> Match:
        """Insert *match*.

        Raises ConflictError when the canonical pair is already matched.
        """
        async with self._connect() as db:
            try:
                await db.execute(
                    _INSERT_MATCH,
                    (
                        match.id,
                        match.user_a,
                        match.user_b,
                        match.compatibility_score,
                        match.created_at.isoformat(),
                    ),
                )
                await db.commit()
            except aiosqlite.IntegrityError as exc:
                raise ConflictError(
                    message=f"Match already exists for {match.user_a}/{match.user_b}",
                    provider_name=_PROVIDER_NAME,
                ) from exc
        logger.debug("match_inserted", match_id=match.id, user_a=match.user_a, user_b=match.user_b)
        return match

    async def get_match(self, match_id: str) -> Match | None:
        async with self._connect() as db:
            cursor = await db.execute(_SELECT_MATCH, (match_id,))
            row = await cursor.fetchone()
        return _row_to_match(row) if row else None

    async def get_match_by_pair(self, user_x: str, user_y: str) -> Match | None:
        user_a, user_b = canonical_pair(user_x, user_y)
        async with self._connect() as db:
            cursor = await db.execute(_SELECT_MATCH_BY_PAIR, (user_a, user_b))
            row = await cursor.fetchone()
        return _row_to_match(row) if row else None

    async def list_matches(self, user_id: str) -> list[Match]:
        async with self._connect() as db:
            cursor = await db.execute(_SELECT_USER_MATCHES, (user_id, user_id))
            rows = await cursor.fetchall()
        return [_row_to_match(r) for r in rows]

    async def delete_match(self, match_id: str) -> bool:
        async with self._connect() as db:
            cursor = await db.execute(_DELETE_MATCH, (match_id,))
            await db.commit()
            return cursor.rowcount > 0
