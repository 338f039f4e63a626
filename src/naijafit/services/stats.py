"""User statistics aggregation for meal logs."""

import logging
from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from naijafit.domain.errors import DuplicateUserError, UserNotFoundError
from naijafit.domain.meals import Meal
from naijafit.domain.stats import (
    DEFAULT_FAVORITE_FOOD,
    WELCOME_ACHIEVEMENT,
    UserStats,
    WeightSample,
)
from naijafit.services.achievements import evaluate_achievements
from naijafit.services.streaks import analyze_streaks

_logger = logging.getLogger(__name__)


class UserStatsRepository(Protocol):
    """Persistence interface for user stats records."""

    def get_stats(self, user_id: UUID) -> UserStats | None:
        """Return the stats record for a user, if present."""

    def create_stats(self, stats: UserStats) -> None:
        """Insert a new stats record."""

    def save_stats(self, stats: UserStats) -> None:
        """Replace the stored stats record for ``stats.user_id``."""

    def list_stats(self) -> list[UserStats]:
        """Return every stats record."""


class MealSource(Protocol):
    """Read access to a user's logged meals."""

    def get_user_meals(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> list[Meal]:
        """Return the user's meals, optionally within an inclusive date range."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class StatsService:
    """Derives and maintains each user's stats from their meal log."""

    repository: UserStatsRepository
    meals: MealSource
    timezone_name: str = "Africa/Lagos"
    clock: Callable[[], datetime] = _utc_now

    def today(self) -> date:
        """Return the current calendar day in the configured timezone."""
        return self.clock().astimezone(ZoneInfo(self.timezone_name)).date()

    def initialize(self, user_id: UUID, weight: float | None = None) -> UserStats:
        """Create the zeroed stats record for a new user."""
        if self.repository.get_stats(user_id) is not None:
            raise DuplicateUserError(user_id)
        samples: tuple[WeightSample, ...] = ()
        if weight is not None:
            samples = (WeightSample(date=self.today(), weight=weight),)
        stats = UserStats(
            user_id=user_id,
            achievements=(WELCOME_ACHIEVEMENT,),
            weight_progress=samples,
            last_updated=self.clock(),
        )
        self.repository.create_stats(stats)
        _logger.info("Initialized stats: user_id=%s", user_id)
        return stats

    def get_stats(self, user_id: UUID) -> UserStats:
        """Return the stored stats, or a zeroed view for unknown users."""
        stats = self.repository.get_stats(user_id)
        if stats is None:
            return UserStats(user_id=user_id, last_updated=self.clock())
        return stats

    def update_after_insert(self, user_id: UUID, new_meal: Meal) -> UserStats:
        """Refresh stats after ``new_meal`` has been persisted.

        The meal count is incremented; averages, favorite food and streaks are
        recomputed from the full meal list. The longest streak is only ever
        raised on this path.
        """
        current = self._require(user_id)
        meals = self.meals.get_user_meals(user_id)
        streaks = analyze_streaks((meal.date for meal in meals), self.today())
        updated = replace(
            current,
            total_meals_logged=current.total_meals_logged + 1,
            average_daily_calories=average_daily_calories(meals),
            favorite_food=favorite_food(meals) or current.favorite_food,
            current_streak=streaks.current_streak,
            longest_streak=max(current.longest_streak, streaks.longest_streak),
            last_updated=self.clock(),
        )
        updated = evaluate_achievements(updated)
        self.repository.save_stats(updated)
        _logger.info(
            "Stats updated after insert: user_id=%s meal_id=%s total=%s",
            user_id,
            new_meal.id,
            updated.total_meals_logged,
        )
        return updated

    def recompute_full(self, user_id: UUID) -> UserStats:
        """Rebuild stats from the stored meals after a deletion or import.

        Both streaks are overwritten with fresh values, except that an empty
        log leaves the stored longest streak as it was. Achievements are kept.
        """
        current = self._require(user_id)
        meals = self.meals.get_user_meals(user_id)
        if not meals:
            updated = replace(
                current,
                total_meals_logged=0,
                average_daily_calories=0.0,
                favorite_food=DEFAULT_FAVORITE_FOOD,
                current_streak=0,
                last_updated=self.clock(),
            )
        else:
            streaks = analyze_streaks((meal.date for meal in meals), self.today())
            updated = replace(
                current,
                total_meals_logged=len(meals),
                average_daily_calories=average_daily_calories(meals),
                favorite_food=favorite_food(meals) or DEFAULT_FAVORITE_FOOD,
                current_streak=streaks.current_streak,
                longest_streak=streaks.longest_streak,
                last_updated=self.clock(),
            )
        self.repository.save_stats(updated)
        _logger.info(
            "Stats recomputed: user_id=%s total=%s",
            user_id,
            updated.total_meals_logged,
        )
        return updated

    def record_weight(self, user_id: UUID, day: date, weight: float) -> UserStats:
        """Add a weight sample, replacing any sample for the same day."""
        current = self._require(user_id)
        samples = [sample for sample in current.weight_progress if sample.date != day]
        samples.append(WeightSample(date=day, weight=weight))
        samples.sort(key=lambda sample: sample.date)
        updated = replace(
            current, weight_progress=tuple(samples), last_updated=self.clock()
        )
        self.repository.save_stats(updated)
        return updated

    def _require(self, user_id: UUID) -> UserStats:
        stats = self.repository.get_stats(user_id)
        if stats is None:
            raise UserNotFoundError(user_id)
        return stats


def average_daily_calories(meals: Sequence[Meal]) -> float:
    """Mean calories per distinct logged day; days without meals are skipped."""
    if not meals:
        return 0.0
    total = sum(meal.total_nutrition.calories for meal in meals)
    days = {meal.date for meal in meals}
    return total / len(days)


def favorite_food(meals: Sequence[Meal]) -> str | None:
    """Most frequently logged food name.

    Meals are tallied in logging order, so ties go to the name seen first.
    """
    counts: Counter[str] = Counter()
    for meal in sorted(meals, key=lambda meal: (meal.date, meal.created_at)):
        for food in meal.foods:
            counts[food.name] += 1
    if not counts:
        return None
    return counts.most_common(1)[0][0]
