"""Unit tests for SQLiteMatchStore against a temporary database file."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from tunematch.models.match import Like, Match
from tunematch.providers.store.sqlite_match_store import SQLiteMatchStore
from tunematch.utils.errors import ConflictError, StoreError


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_initialize_creates_parent_dirs(self, db_path) -> None:
        store = SQLiteMatchStore(db_path=db_path)
        await store.initialize()
        assert db_path.exists()

    @pytest.mark.asyncio
    async def test_initialize_is_idempotent(self, match_store) -> None:
        await match_store.initialize()
        assert await match_store.list_matches("alice") == []

    def test_provider_name(self, match_store) -> None:
        assert match_store.get_provider_name() == "sqlite_match_store"

    @pytest.mark.asyncio
    async def test_unreadable_database_raises_store_error(self, tmp_path) -> None:
        # A directory cannot be opened as a database file.
        store = SQLiteMatchStore(db_path=tmp_path)
        with pytest.raises(StoreError) as exc_info:
            await store.user_exists("alice")
        assert exc_info.value.provider_name == "sqlite_match_store"
        assert exc_info.value.retryable is True


class TestUsers:
    @pytest.mark.asyncio
    async def test_add_and_exists(self, match_store) -> None:
        assert not await match_store.user_exists("alice")
        assert await match_store.add_user("alice") is True
        assert await match_store.user_exists("alice")

    @pytest.mark.asyncio
    async def test_add_existing_user_returns_false(self, match_store) -> None:
        await match_store.add_user("alice")
        assert await match_store.add_user("alice") is False


class TestLikes:
    @pytest.mark.asyncio
    async def test_insert_and_get(self, match_store) -> None:
        like = Like(from_user="alice", to_user="bob")
        assert await match_store.insert_like(like) is True

        stored = await match_store.get_like("alice", "bob")
        assert stored is not None
        assert stored.id == like.id
        assert stored.created_at == like.created_at

    @pytest.mark.asyncio
    async def test_likes_are_directional(self, match_store) -> None:
        await match_store.insert_like(Like(from_user="alice", to_user="bob"))
        assert await match_store.get_like("bob", "alice") is None

    @pytest.mark.asyncio
    async def test_duplicate_pair_is_not_inserted(self, match_store) -> None:
        first = Like(from_user="alice", to_user="bob")
        await match_store.insert_like(first)

        assert await match_store.insert_like(Like(from_user="alice", to_user="bob")) is False
        stored = await match_store.get_like("alice", "bob")
        assert stored.id == first.id

    @pytest.mark.asyncio
    async def test_list_liked_user_ids(self, match_store) -> None:
        await match_store.insert_like(Like(from_user="alice", to_user="bob"))
        await match_store.insert_like(Like(from_user="alice", to_user="carol"))
        await match_store.insert_like(Like(from_user="bob", to_user="alice"))

        assert await match_store.list_liked_user_ids("alice") == {"bob", "carol"}
        assert await match_store.list_liked_user_ids("dave") == set()


class TestMatches:
    @pytest.mark.asyncio
    async def test_insert_and_fetch(self, match_store) -> None:
        match = Match.create("bob", "alice", compatibility_score=73.25)
        returned = await match_store.insert_match(match)
        assert returned == match

        by_id = await match_store.get_match(match.id)
        assert by_id == match
        assert await match_store.get_match_by_pair("bob", "alice") == match
        assert await match_store.get_match_by_pair("alice", "bob") == match

    @pytest.mark.asyncio
    async def test_null_score_round_trips(self, match_store) -> None:
        match = Match.create("alice", "bob")
        await match_store.insert_match(match)
        assert (await match_store.get_match(match.id)).compatibility_score is None

    @pytest.mark.asyncio
    async def test_duplicate_pair_raises_conflict(self, match_store) -> None:
        await match_store.insert_match(Match.create("alice", "bob", 50.0))

        with pytest.raises(ConflictError) as exc_info:
            await match_store.insert_match(Match.create("bob", "alice", 60.0))

        assert exc_info.value.provider_name == "sqlite_match_store"
        assert len(await match_store.list_matches("alice")) == 1

    @pytest.mark.asyncio
    async def test_missing_lookups_return_none(self, match_store) -> None:
        assert await match_store.get_match("nope") is None
        assert await match_store.get_match_by_pair("alice", "bob") is None

    @pytest.mark.asyncio
    async def test_list_matches_newest_first(self, match_store) -> None:
        now = datetime.now(timezone.utc)
        older = Match.create("alice", "bob").model_copy(update={"created_at": now - timedelta(hours=1)})
        newer = Match.create("alice", "carol").model_copy(update={"created_at": now})
        unrelated = Match.create("bob", "carol")
        for match in (older, newer, unrelated):
            await match_store.insert_match(match)

        listed = await match_store.list_matches("alice")

        assert [m.id for m in listed] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_list_matches_includes_user_b_side(self, match_store) -> None:
        match = Match.create("alice", "zoe")
        await match_store.insert_match(match)
        assert [m.id for m in await match_store.list_matches("zoe")] == [match.id]

    @pytest.mark.asyncio
    async def test_delete(self, match_store) -> None:
        match = Match.create("alice", "bob")
        await match_store.insert_match(match)

        assert await match_store.delete_match(match.id) is True
        assert await match_store.get_match(match.id) is None
        assert await match_store.delete_match(match.id) is False

    @pytest.mark.asyncio
    async def test_pair_can_match_again_after_delete(self, match_store) -> None:
        first = Match.create("alice", "bob")
        await match_store.insert_match(first)
        await match_store.delete_match(first.id)

        second = Match.create("alice", "bob")
        await match_store.insert_match(second)

        assert (await match_store.get_match_by_pair("alice", "bob")).id == second.id
