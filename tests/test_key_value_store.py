"""Tests for key-value storage adapters."""

import os
import threading
from datetime import date
from pathlib import Path
from uuid import uuid4

import pytest

from naijafit.adapters.key_value_repositories import (
    MEALS_KEY,
    KeyValueMealRepository,
    KeyValueProfileRepository,
    KeyValueStatsRepository,
    KeyValueUserRepository,
)
from naijafit.adapters.key_value_store import InMemoryKeyValueStore, JsonFileStore
from naijafit.domain.errors import DuplicateUserError, StorageError
from naijafit.domain.profiles import ProfileSettings, Units, UserProfile
from naijafit.domain.stats import UserStats
from naijafit.services.meals import MealLogService
from naijafit.services.stats import StatsService
from tests.conftest import FIXED_NOW, TODAY, fixed_clock, make_meal


def test_json_file_store_roundtrip(tmp_path: Path) -> None:
    store = JsonFileStore(tmp_path / "store")

    assert store.load("missing", []) == []
    store.save("numbers", {"value": 0.1 + 0.2})

    assert store.load("numbers", None) == {"value": 0.1 + 0.2}
    assert (tmp_path / "store" / "numbers.json").exists()


def test_json_file_store_failed_save_keeps_previous(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    store = JsonFileStore(tmp_path)
    store.save("stats", [1, 2, 3])

    def broken_replace(src: str, dst: str) -> None:
        raise OSError("read-only file system")

    monkeypatch.setattr(os, "replace", broken_replace)

    with pytest.raises(StorageError):
        store.save("stats", [4])
    assert store.load("stats", None) == [1, 2, 3]
    assert list(tmp_path.glob("*.tmp")) == []


def test_json_file_store_rejects_unserializable(tmp_path: Path) -> None:
    store = JsonFileStore(tmp_path)

    with pytest.raises(StorageError):
        store.save("bad", {"value": object()})


def test_json_file_store_corrupt_file_raises(tmp_path: Path) -> None:
    (tmp_path / "meals.json").write_text("{not json", encoding="utf-8")
    store = JsonFileStore(tmp_path)

    with pytest.raises(StorageError, match="Corrupt data"):
        store.load("meals", [])


def test_corrupt_collection_is_not_overwritten(tmp_path: Path) -> None:
    path = tmp_path / f"{MEALS_KEY}.json"
    path.write_text("{not json", encoding="utf-8")
    repository = KeyValueMealRepository(JsonFileStore(tmp_path))

    with pytest.raises(StorageError):
        repository.insert_meal(make_meal(uuid4(), TODAY, [("Eba", 360)]))

    assert path.read_text(encoding="utf-8") == "{not json"


def test_update_aborts_when_change_raises() -> None:
    store = InMemoryKeyValueStore()
    store.save("rows", [1])

    def fail(_value: object) -> object:
        raise DuplicateUserError("rows")

    with pytest.raises(DuplicateUserError):
        store.update("rows", [], fail)

    assert store.load("rows", []) == [1]


def test_meal_repository_filters_and_deletes() -> None:
    store = InMemoryKeyValueStore()
    repository = KeyValueMealRepository(store)
    user_id = uuid4()
    other_id = uuid4()
    first = make_meal(user_id, date(2024, 1, 3), [("Akara", 150)])
    second = make_meal(user_id, TODAY, [("Suya", 250)])
    repository.insert_meal(first)
    repository.insert_meal(second)
    repository.insert_meal(make_meal(other_id, TODAY, [("Eba", 360)]))

    assert repository.get_user_meals(user_id) == [first, second]
    assert repository.get_user_meals(user_id, start=TODAY) == [second]
    assert repository.get_user_meals(user_id, end=date(2024, 1, 4)) == [first]
    assert repository.get_meals_by_date(user_id, TODAY) == [second]
    assert repository.delete_meal(second.id, other_id) is False
    assert repository.delete_meal(second.id, user_id) is True
    assert repository.count_meals() == 2
    assert len(store.load(MEALS_KEY, [])) == 2


def test_stats_repository_unique_per_user() -> None:
    repository = KeyValueStatsRepository(InMemoryKeyValueStore())
    stats = UserStats(user_id=uuid4(), achievements=("Welcome",))
    repository.create_stats(stats)

    with pytest.raises(DuplicateUserError):
        repository.create_stats(stats)

    updated = UserStats(
        user_id=stats.user_id,
        total_meals_logged=3,
        last_updated=stats.last_updated,
    )
    repository.save_stats(updated)

    assert repository.get_stats(stats.user_id) == updated
    assert repository.list_stats() == [updated]


def test_user_repository_lookup_and_touch() -> None:
    repository = KeyValueUserRepository(InMemoryKeyValueStore())
    user = repository.create_user("ada@naijafit.com", "Ada", 60.0)

    repository.touch_last_active(user.id)

    assert repository.get_by_email("ada@naijafit.com") is not None
    fetched = repository.get_user(user.id)
    assert fetched is not None
    assert fetched.last_active_at is not None
    assert len(repository.list_users()) == 1


def test_profile_repository_upserts_per_user() -> None:
    repository = KeyValueProfileRepository(InMemoryKeyValueStore())
    first = UserProfile(user_id=uuid4(), updated_at=FIXED_NOW)
    second = UserProfile(user_id=uuid4(), updated_at=FIXED_NOW)
    repository.save_profile(first)
    repository.save_profile(second)

    changed = UserProfile(
        user_id=first.user_id,
        updated_at=FIXED_NOW,
        settings=ProfileSettings(units=Units.IMPERIAL),
    )
    repository.save_profile(changed)

    assert repository.get_profile(first.user_id) == changed
    assert repository.get_profile(second.user_id) == second
    assert repository.get_profile(uuid4()) is None
    assert repository.count_profiles() == 2


def test_concurrent_meals_from_many_users_are_all_stored(tmp_path: Path) -> None:
    store = JsonFileStore(tmp_path)
    meal_repository = KeyValueMealRepository(store)
    stats_repository = KeyValueStatsRepository(store)
    stats_service = StatsService(
        repository=stats_repository, meals=meal_repository, clock=fixed_clock
    )
    service = MealLogService(meal_repository, stats_service)
    user_ids = [uuid4() for _ in range(8)]
    for user_id in user_ids:
        stats_service.initialize(user_id)
    barrier = threading.Barrier(len(user_ids))

    def log_five(user_id) -> None:  # type: ignore[no-untyped-def]
        barrier.wait()
        for calories in range(5):
            service.save_meal(make_meal(user_id, TODAY, [("Akara", 100 + calories)]))

    threads = [
        threading.Thread(target=log_five, args=(user_id,)) for user_id in user_ids
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert meal_repository.count_meals() == 40
    for user_id in user_ids:
        assert len(meal_repository.get_user_meals(user_id)) == 5
        assert stats_repository.get_stats(user_id).total_meals_logged == 5
