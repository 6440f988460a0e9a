"""Public interface definitions for TuneMatch's external collaborators.

Business logic in ``tunematch.services`` talks to storage, the listening
history and caches only through these abstract base classes.  Concrete
adapters live in ``tunematch.providers`` and are wired together in
``tunematch.main``; unit tests inject mocks instead.

CONCRETE PROVIDER MAP:
    Interface         ->  Concrete implementations (in tunematch/providers/)
    ─────────────────────────────────────────────────────────────────────
    IProfileSource    ->  SQLiteProfileSource
    IMatchStore       ->  SQLiteMatchStore
    ICacheProvider    ->  MemoryCacheProvider
"""

from tunematch.interfaces.cache_provider import ICacheProvider
from tunematch.interfaces.match_store import IMatchStore
from tunematch.interfaces.profile_source import IProfileSource

__all__ = [
    "ICacheProvider",
    "IMatchStore",
    "IProfileSource",
]
