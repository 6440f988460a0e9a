"""Listening-profile sources.

SQLiteProfileSource serves ranked top-artist snapshots from the local cache
of each user's synced listening history.
"""

from tunematch.providers.profile.sqlite_profile_source import SQLiteProfileSource

__all__ = ["SQLiteProfileSource"]
