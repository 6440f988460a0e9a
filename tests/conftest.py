"""Shared pytest fixtures for the TuneMatch test suite."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from tunematch.interfaces.match_store import IMatchStore
from tunematch.interfaces.profile_source import IProfileSource
from tunematch.models.profile import ArtistAffinity, RankedProfile
from tunematch.providers.profile.sqlite_profile_source import SQLiteProfileSource
from tunematch.providers.store.sqlite_match_store import SQLiteMatchStore


def make_profile(*entries: tuple[str, int, int], user_id: str | None = None) -> RankedProfile:
    """Build a RankedProfile from ``(name, play_count, listener_count)`` tuples."""
    return RankedProfile(
        user_id=user_id,
        artists=tuple(
            ArtistAffinity(name=name, play_count=plays, listener_count=listeners)
            for name, plays, listeners in entries
        ),
    )


# ---------------------------------------------------------------------------
# Sample profiles
# ---------------------------------------------------------------------------


@pytest.fixture
def techno_profile() -> RankedProfile:
    return make_profile(
        ("Jeff Mills", 320, 450_000),
        ("Robert Hood", 210, 120_000),
        ("Surgeon", 150, 60_000),
        ("Regis", 90, 25_000),
        ("Planetary Assault Systems", 40, 40_000),
        user_id="alice",
    )


@pytest.fixture
def house_profile() -> RankedProfile:
    return make_profile(
        ("Larry Heard", 280, 300_000),
        ("Robert Hood", 120, 120_000),
        ("Theo Parrish", 95, 150_000),
        ("Moodymann", 60, 350_000),
        user_id="bob",
    )


@pytest.fixture
def ambient_profile() -> RankedProfile:
    return make_profile(
        ("Brian Eno", 500, 2_500_000),
        ("Gas", 140, 90_000),
        user_id="carol",
    )


# ---------------------------------------------------------------------------
# Mock collaborators
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_profile_source() -> IProfileSource:
    """Mock IProfileSource serving profiles from the ``profiles`` dict attribute.

    Tests assign ``mock_profile_source.profiles = {"alice": ..., ...}``;
    unknown users get an empty profile.
    """
    mock = MagicMock(spec=IProfileSource)
    mock.profiles = {}

    async def _get_top_artists(user_id: str, limit: int = 50) -> RankedProfile:
        profile = mock.profiles.get(user_id, RankedProfile(user_id=user_id))
        return profile.top(limit)

    mock.get_top_artists = AsyncMock(side_effect=_get_top_artists)
    mock.replace_top_artists = AsyncMock(return_value=0)
    mock.initialize = AsyncMock()
    mock.get_provider_name.return_value = "mock-profiles"
    return mock


@pytest.fixture
def mock_store() -> IMatchStore:
    """Mock IMatchStore describing an empty database with every user registered."""
    store = MagicMock(spec=IMatchStore)
    store.get_provider_name.return_value = "mock-store"
    store.initialize = AsyncMock()
    store.add_user = AsyncMock(return_value=True)
    store.user_exists = AsyncMock(return_value=True)
    store.get_like = AsyncMock(return_value=None)
    store.insert_like = AsyncMock(return_value=True)
    store.list_liked_user_ids = AsyncMock(return_value=set())
    store.insert_match = AsyncMock(side_effect=lambda match: match)
    store.get_match = AsyncMock(return_value=None)
    store.get_match_by_pair = AsyncMock(return_value=None)
    store.list_matches = AsyncMock(return_value=[])
    store.delete_match = AsyncMock(return_value=True)
    return store


# ---------------------------------------------------------------------------
# SQLite adapters on a temporary database
# ---------------------------------------------------------------------------


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "tunematch.db"


@pytest.fixture
async def match_store(db_path: Path) -> SQLiteMatchStore:
    store = SQLiteMatchStore(db_path=db_path)
    await store.initialize()
    return store


@pytest.fixture
async def profile_source(db_path: Path) -> SQLiteProfileSource:
    source = SQLiteProfileSource(db_path=db_path)
    await source.initialize()
    return source
