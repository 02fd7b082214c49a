"""
MoodEntryRepository 测试
"""
# 标准库导包
from datetime import datetime, timedelta

# 第三方库导包
import pytest
from sqlalchemy import func, select

# 项目内部导包
from exceptions import ConflictError, NotFound
from storage.models.mood_entry import MoodEntry
from storage.repositories.mood_entry_repository import MoodEntryRepository

DAY_ONE = datetime(2024, 3, 10)


async def _count(session) -> int:
    result = await session.execute(select(func.count(MoodEntry.id)))
    return result.scalar_one()


async def test_upsert_creates_then_replaces_same_row(session):
    repo = MoodEntryRepository(session)

    first = await repo.upsert_for_day("user-a", DAY_ONE, 2, "rough day", ["tired"])
    await session.commit()
    second = await repo.upsert_for_day("user-a", DAY_ONE, 4, "better now", [])
    await session.commit()

    assert second.id == first.id
    assert second.mood_rating == 4
    assert second.journal == "better now"
    assert second.tags == []
    assert second.date == DAY_ONE
    assert await _count(session) == 1


async def test_upsert_on_different_days_creates_two_rows(session):
    repo = MoodEntryRepository(session)

    first = await repo.upsert_for_day("user-a", DAY_ONE, 3, "day one", [])
    second = await repo.upsert_for_day("user-a", DAY_ONE + timedelta(days=1), 5, "day two", [])
    await session.commit()

    assert first.id != second.id
    assert await _count(session) == 2


async def test_upsert_keeps_users_apart(session):
    repo = MoodEntryRepository(session)

    await repo.upsert_for_day("user-a", DAY_ONE, 3, "mine", [])
    await repo.upsert_for_day("user-b", DAY_ONE, 1, "theirs", [])
    await session.commit()

    assert await _count(session) == 2


async def test_writers_in_separate_sessions_converge_on_one_row(session_factory):
    async with session_factory() as first_session:
        await MoodEntryRepository(first_session).upsert_for_day("user-a", DAY_ONE, 1, "first", ["a"])
        await first_session.commit()

    async with session_factory() as second_session:
        await MoodEntryRepository(second_session).upsert_for_day("user-a", DAY_ONE, 5, "second", ["b"])
        await second_session.commit()

    async with session_factory() as check_session:
        entries = await MoodEntryRepository(check_session).find_all_by_user("user-a")

    assert len(entries) == 1
    assert entries[0].journal == "second"
    assert entries[0].tags == ["b"]


async def test_find_by_user_and_day_uses_day_window(session):
    repo = MoodEntryRepository(session)
    await repo.upsert_for_day("user-a", DAY_ONE, 3, "hello", [])
    await session.commit()

    assert await repo.find_by_user_and_day("user-a", DAY_ONE) is not None
    assert await repo.find_by_user_and_day("user-a", DAY_ONE + timedelta(days=1)) is None
    assert await repo.find_by_user_and_day("user-a", DAY_ONE - timedelta(days=1)) is None
    assert await repo.find_by_user_and_day("user-b", DAY_ONE) is None


async def test_find_all_by_user_is_descending(session):
    repo = MoodEntryRepository(session)
    for offset in (1, 0, 2):
        await repo.upsert_for_day("user-a", DAY_ONE + timedelta(days=offset), 3, f"day {offset}", [])
    await repo.upsert_for_day("user-b", DAY_ONE, 3, "other user", [])
    await session.commit()

    entries = await repo.find_all_by_user("user-a")

    assert [entry.date for entry in entries] == [
        DAY_ONE + timedelta(days=2),
        DAY_ONE + timedelta(days=1),
        DAY_ONE,
    ]


async def test_find_by_date_range_is_inclusive_and_ascending(session):
    repo = MoodEntryRepository(session)
    for offset in range(5):
        await repo.upsert_for_day("user-a", DAY_ONE + timedelta(days=offset), 3, f"day {offset}", [])
    await session.commit()

    entries = await repo.find_by_date_range(
        "user-a",
        DAY_ONE + timedelta(days=1),
        DAY_ONE + timedelta(days=3)
    )

    assert [entry.journal for entry in entries] == ["day 1", "day 2", "day 3"]


async def test_plain_create_on_taken_day_raises_conflict(session):
    repo = MoodEntryRepository(session)
    await repo.upsert_for_day("user-a", DAY_ONE, 3, "hello", [])
    await session.commit()

    with pytest.raises(ConflictError):
        await repo.create(user_id="user-a", date=DAY_ONE, mood_rating=4, journal="again", tags=[])

    await session.rollback()


async def test_fallback_upsert_updates_existing_row(session):
    repo = MoodEntryRepository(session)
    created = await repo.upsert_for_day("user-a", DAY_ONE, 2, "before", ["x"])
    await session.commit()

    changes = {"mood_rating": 5, "journal": "after", "tags": ["y"], "updated_at": datetime.utcnow()}
    updated = await repo._upsert_with_retry("user-a", DAY_ONE, {}, changes)
    await session.commit()

    assert updated.id == created.id
    assert updated.mood_rating == 5
    assert updated.tags == ["y"]


async def test_fallback_upsert_turns_lost_insert_race_into_update(session, monkeypatch):
    repo = MoodEntryRepository(session)
    created = await repo.upsert_for_day("user-a", DAY_ONE, 2, "first", ["x"])
    await session.commit()

    # 第一次查询看不到已存在的记录，模拟另一个写入者抢先提交
    real_find = repo.find_by_user_and_day
    lookups = []

    async def find_after_race(user_id, day_start):
        lookups.append(day_start)
        if len(lookups) == 1:
            return None
        return await real_find(user_id, day_start)

    monkeypatch.setattr(repo, "find_by_user_and_day", find_after_race)

    now = datetime.utcnow()
    changes = {"mood_rating": 4, "journal": "second", "tags": ["y"], "updated_at": now}
    values = {"id": "lost-race-id", "user_id": "user-a", "date": DAY_ONE, "created_at": now, **changes}
    updated = await repo._upsert_with_retry("user-a", DAY_ONE, values, changes)
    await session.commit()

    assert len(lookups) == 2
    assert updated.id == created.id
    assert updated.journal == "second"
    assert updated.tags == ["y"]
    assert await _count(session) == 1


async def test_unsupported_filter_operator_is_rejected(session):
    repo = MoodEntryRepository(session)

    with pytest.raises(ValueError):
        await repo.query_by_filters({"date": {"ne": DAY_ONE}})


async def test_get_by_id_or_raise_and_delete(session):
    repo = MoodEntryRepository(session)
    entry = await repo.upsert_for_day("user-a", DAY_ONE, 3, "hello", [])
    await session.commit()

    assert (await repo.get_by_id_or_raise(entry.id)).journal == "hello"

    assert await repo.delete_by_id(entry.id) is True
    await session.commit()
    assert await repo.delete_by_id(entry.id) is False

    with pytest.raises(NotFound):
        await repo.get_by_id_or_raise(entry.id)
