"""Unit tests for the in-memory compatibility cache."""

from __future__ import annotations

import pytest

from tunematch.models.profile import CompatibilityResult
from tunematch.providers.cache.memory_cache import MemoryCacheProvider


@pytest.fixture()
def cache() -> MemoryCacheProvider:
    return MemoryCacheProvider(max_size=2, ttl=3600)


class TestMemoryCacheProvider:
    @pytest.mark.asyncio
    async def test_miss_returns_none(self, cache: MemoryCacheProvider) -> None:
        assert await cache.get("compatibility:alice:bob") is None
        assert await cache.exists("compatibility:alice:bob") is False

    @pytest.mark.asyncio
    async def test_stores_compatibility_results(self, cache: MemoryCacheProvider) -> None:
        result = CompatibilityResult(score=71.5, common_artists=frozenset({"Gas"}))
        await cache.set("compatibility:alice:bob", result)

        assert await cache.get("compatibility:alice:bob") == result
        assert await cache.exists("compatibility:alice:bob") is True

    @pytest.mark.asyncio
    async def test_delete(self, cache: MemoryCacheProvider) -> None:
        await cache.set("k", CompatibilityResult.empty())
        await cache.delete("k")
        await cache.delete("k")
        assert await cache.get("k") is None

    @pytest.mark.asyncio
    async def test_evicts_when_full(self, cache: MemoryCacheProvider) -> None:
        await cache.set("a", 1)
        await cache.set("b", 2)
        await cache.set("c", 3)

        present = [key for key in ("a", "b", "c") if await cache.exists(key)]
        assert len(present) == 2
        assert "c" in present

    @pytest.mark.asyncio
    async def test_per_item_ttl_is_accepted(self, cache: MemoryCacheProvider) -> None:
        await cache.set("k", "v", ttl=5)
        assert await cache.get("k") == "v"

