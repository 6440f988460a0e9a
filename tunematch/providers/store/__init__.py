"""Like/match persistence providers.

SQLiteMatchStore keeps users, likes and matches in one SQLite file and
enforces the pair uniqueness the match coordinator relies on.
"""

from tunematch.providers.store.sqlite_match_store import SQLiteMatchStore

__all__ = ["SQLiteMatchStore"]
