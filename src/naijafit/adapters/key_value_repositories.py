"""Meal, stats, user and profile repositories over a key-value store.

Each collection lives under one key as a JSON list. Every write goes through
``KeyValueStore.update`` so concurrent writers to the same collection never
overwrite each other's rows.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

from naijafit.adapters.key_value_store import KeyValueStore
from naijafit.domain.codec import (
    meal_from_dict,
    meal_to_dict,
    profile_from_dict,
    profile_to_dict,
    stats_from_dict,
    stats_to_dict,
    user_from_dict,
    user_to_dict,
)
from naijafit.domain.errors import DuplicateUserError
from naijafit.domain.meals import Meal
from naijafit.domain.models import UserRecord
from naijafit.domain.profiles import UserProfile
from naijafit.domain.stats import UserStats
from naijafit.services.meals import MealRepository
from naijafit.services.profiles import ProfileRepository
from naijafit.services.stats import UserStatsRepository
from naijafit.services.users import UserRepository

MEALS_KEY = "naijafit_meals"
USER_STATS_KEY = "naijafit_user_stats"
USERS_KEY = "naijafit_users"
PROFILES_KEY = "naijafit_profiles"


def _rows(value: object) -> list[dict[str, object]]:
    if not isinstance(value, list):
        return []
    return [row for row in value if isinstance(row, dict)]


def _load_list(store: KeyValueStore, key: str) -> list[dict[str, object]]:
    return _rows(store.load(key, []))


def _upsert(
    store: KeyValueStore, key: str, id_field: str, row: dict[str, object]
) -> None:
    def put(value: object) -> list[dict[str, object]]:
        rows = [item for item in _rows(value) if item.get(id_field) != row[id_field]]
        rows.append(row)
        return rows

    store.update(key, [], put)


@dataclass
class KeyValueMealRepository(MealRepository):
    """Meal repository storing all meals under one key."""

    store: KeyValueStore

    def insert_meal(self, meal: Meal) -> None:
        """Append a meal."""
        row = meal_to_dict(meal)
        self.store.update(MEALS_KEY, [], lambda value: [*_rows(value), row])

    def delete_meal(self, meal_id: UUID, user_id: UUID) -> bool:
        """Remove a meal owned by the user."""
        removed = False

        def drop(value: object) -> list[dict[str, object]]:
            nonlocal removed
            rows = _rows(value)
            remaining = [
                row
                for row in rows
                if not (
                    row.get("id") == str(meal_id) and row.get("userId") == str(user_id)
                )
            ]
            removed = len(remaining) != len(rows)
            return remaining

        self.store.update(MEALS_KEY, [], drop)
        return removed

    def get_user_meals(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> list[Meal]:
        """Return a user's meals in insertion order."""
        meals = [
            meal_from_dict(row)
            for row in _load_list(self.store, MEALS_KEY)
            if row.get("userId") == str(user_id)
        ]
        if start is not None:
            meals = [meal for meal in meals if meal.date >= start]
        if end is not None:
            meals = [meal for meal in meals if meal.date <= end]
        return meals

    def get_meals_by_date(self, user_id: UUID, day: date) -> list[Meal]:
        """Return a user's meals for one day."""
        return self.get_user_meals(user_id, start=day, end=day)

    def count_meals(self) -> int:
        """Return the number of stored meals."""
        return len(_load_list(self.store, MEALS_KEY))


@dataclass
class KeyValueStatsRepository(UserStatsRepository):
    """Stats repository storing all records under one key."""

    store: KeyValueStore

    def get_stats(self, user_id: UUID) -> UserStats | None:
        """Return a user's stats record."""
        for row in _load_list(self.store, USER_STATS_KEY):
            if row.get("userId") == str(user_id):
                return stats_from_dict(row)
        return None

    def create_stats(self, stats: UserStats) -> None:
        """Append a stats record; user ids stay unique."""
        row = stats_to_dict(stats)

        def append(value: object) -> list[dict[str, object]]:
            rows = _rows(value)
            if any(item.get("userId") == row["userId"] for item in rows):
                raise DuplicateUserError(stats.user_id)
            return [*rows, row]

        self.store.update(USER_STATS_KEY, [], append)

    def save_stats(self, stats: UserStats) -> None:
        """Replace a user's stats record."""
        _upsert(self.store, USER_STATS_KEY, "userId", stats_to_dict(stats))

    def list_stats(self) -> list[UserStats]:
        """Return every stats record."""
        return [stats_from_dict(row) for row in _load_list(self.store, USER_STATS_KEY)]


@dataclass
class KeyValueUserRepository(UserRepository):
    """User repository storing all users under one key."""

    store: KeyValueStore

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id."""
        for user in self.list_users():
            if user.id == user_id:
                return user
        return None

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return a user by email."""
        for user in self.list_users():
            if user.email == email:
                return user
        return None

    def create_user(
        self, email: str, full_name: str, weight: float | None
    ) -> UserRecord:
        """Create a user with a fresh id."""
        user = UserRecord(
            id=uuid4(),
            email=email,
            full_name=full_name,
            weight=weight,
            created_at=datetime.now(tz=UTC),
        )
        self.save_user(user)
        return user

    def save_user(self, user: UserRecord) -> None:
        """Insert or replace a user."""
        _upsert(self.store, USERS_KEY, "id", user_to_dict(user))

    def touch_last_active(self, user_id: UUID) -> None:
        """Stamp the user's last activity."""
        stamp = datetime.now(tz=UTC).isoformat()

        def touch(value: object) -> list[dict[str, object]]:
            rows = _rows(value)
            for row in rows:
                if row.get("id") == str(user_id):
                    row["lastActiveAt"] = stamp
            return rows

        self.store.update(USERS_KEY, [], touch)

    def list_users(self) -> list[UserRecord]:
        """Return all users."""
        return [user_from_dict(row) for row in _load_list(self.store, USERS_KEY)]


@dataclass
class KeyValueProfileRepository(ProfileRepository):
    """Profile repository storing all profiles under one key."""

    store: KeyValueStore

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return a user's profile."""
        for row in _load_list(self.store, PROFILES_KEY):
            if row.get("userId") == str(user_id):
                return profile_from_dict(row)
        return None

    def save_profile(self, profile: UserProfile) -> None:
        """Insert or replace a user's profile."""
        _upsert(self.store, PROFILES_KEY, "userId", profile_to_dict(profile))

    def count_profiles(self) -> int:
        """Return the number of stored profiles."""
        return len(_load_list(self.store, PROFILES_KEY))
