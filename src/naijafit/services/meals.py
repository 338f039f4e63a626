"""Meal logging service."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol
from uuid import UUID

from naijafit.domain.errors import StorageError, UserNotFoundError
from naijafit.domain.meals import FoodPortion, Meal, MealType, Mood, build_meal
from naijafit.domain.sessions import UserSession
from naijafit.domain.stats import UserStats
from naijafit.services.locks import UserLocks
from naijafit.services.nutrition import portion_to_meal_food
from naijafit.services.stats import StatsService

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals."""

    def insert_meal(self, meal: Meal) -> None:
        """Persist a new meal."""

    def delete_meal(self, meal_id: UUID, user_id: UUID) -> bool:
        """Remove a user's meal; return whether it existed."""

    def get_user_meals(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> list[Meal]:
        """Return the user's meals, optionally within an inclusive date range."""

    def get_meals_by_date(self, user_id: UUID, day: date) -> list[Meal]:
        """Return the user's meals for one day."""

    def count_meals(self) -> int:
        """Return the number of stored meals across all users."""


@dataclass(frozen=True)
class MealLogResult:
    """Outcome of a meal mutation.

    ``stats`` is None when the derived stats could not be refreshed.
    """

    meal: Meal | None
    stats: UserStats | None


@dataclass
class MealLogService:
    """Persists meals and weight samples and keeps the owner's stats in step.

    Every mutation of a user's meals or stats runs under that user's lock.
    """

    repository: MealRepository
    stats_service: StatsService
    locks: UserLocks = field(default_factory=UserLocks)

    def log_meal(  # noqa: PLR0913
        self,
        session: UserSession,
        meal_type: MealType,
        day: date,
        time: str,
        portions: Sequence[FoodPortion],
        mood: Mood | None = None,
        notes: str | None = None,
    ) -> MealLogResult:
        """Scale portions, persist the meal and refresh stats."""
        meal = build_meal(
            user_id=session.user_id,
            meal_type=meal_type,
            day=day,
            time=time,
            foods=[portion_to_meal_food(portion) for portion in portions],
            mood=mood,
            notes=notes,
        )
        return self.save_meal(meal)

    def save_meal(self, meal: Meal) -> MealLogResult:
        """Persist an already built meal and refresh stats."""
        with self.locks.hold(meal.user_id):
            self.repository.insert_meal(meal)
            stats = self.on_meal_saved(meal.user_id, meal)
        return MealLogResult(meal=meal, stats=stats)

    def delete_meal(self, session: UserSession, meal_id: UUID) -> MealLogResult | None:
        """Delete a meal; return None when it does not exist for the user."""
        with self.locks.hold(session.user_id):
            if not self.repository.delete_meal(meal_id, session.user_id):
                return None
            stats = self.on_meal_deleted(session.user_id, meal_id)
        return MealLogResult(meal=None, stats=stats)

    def record_weight(
        self, session: UserSession, day: date, weight: float
    ) -> UserStats:
        """Record a body weight sample for the session user."""
        with self.locks.hold(session.user_id):
            return self.stats_service.record_weight(session.user_id, day, weight)

    def on_meal_saved(self, user_id: UUID, meal: Meal) -> UserStats | None:
        """Run the incremental stats update for a saved meal."""
        try:
            return self.stats_service.update_after_insert(user_id, meal)
        except UserNotFoundError:
            _logger.warning("Stats unavailable after insert: user_id=%s", user_id)
        except StorageError:
            _logger.exception("Failed to store stats after insert: user_id=%s", user_id)
        return None

    def on_meal_deleted(self, user_id: UUID, meal_id: UUID) -> UserStats | None:
        """Run the full stats recomputation after a deletion."""
        try:
            return self.stats_service.recompute_full(user_id)
        except UserNotFoundError:
            _logger.warning(
                "Stats unavailable after delete: user_id=%s meal_id=%s",
                user_id,
                meal_id,
            )
        except StorageError:
            _logger.exception("Failed to store stats after delete: user_id=%s", user_id)
        return None

    def list_meals(
        self, session: UserSession, start: date | None = None, end: date | None = None
    ) -> list[Meal]:
        """Return the session user's meals, newest day first."""
        meals = self.repository.get_user_meals(session.user_id, start, end)
        return sorted(meals, key=lambda meal: meal.date, reverse=True)

    def meals_on(self, session: UserSession, day: date) -> list[Meal]:
        """Return the session user's meals for a single day."""
        return self.repository.get_meals_by_date(session.user_id, day)
