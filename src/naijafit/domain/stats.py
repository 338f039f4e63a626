"""Domain models for user statistics."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID

DEFAULT_FAVORITE_FOOD = "Not determined yet"
WELCOME_ACHIEVEMENT = "Welcome"


@dataclass(frozen=True)
class WeightSample:
    """Body weight recorded on a given day."""

    date: date
    weight: float


@dataclass(frozen=True)
class StreakSummary:
    """Current and longest logging streaks."""

    current_streak: int
    longest_streak: int


@dataclass(frozen=True)
class UserStats:
    """Derived statistics for a single user."""

    user_id: UUID
    total_meals_logged: int = 0
    average_daily_calories: float = 0.0
    favorite_food: str = DEFAULT_FAVORITE_FOOD
    current_streak: int = 0
    longest_streak: int = 0
    achievements: tuple[str, ...] = ()
    weight_progress: tuple[WeightSample, ...] = ()
    last_updated: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
