"""Cache providers.

MemoryCacheProvider keeps compatibility results in process memory so that
the discover feed does not re-score the same pair on every request.
"""

from tunematch.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
