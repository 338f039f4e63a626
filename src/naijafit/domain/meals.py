"""Domain models for meal logging."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import Enum
from uuid import UUID, uuid4

from naijafit.domain.nutrition import Nutrition, sum_nutrition


class MealType(Enum):
    """Meal slot within a day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class Mood(Enum):
    """Optional mood recorded with a meal."""

    GREAT = "great"
    GOOD = "good"
    OKAY = "okay"
    POOR = "poor"


@dataclass(frozen=True)
class FoodPortion:
    """A food with its per-100g values and the eaten quantity."""

    food_id: str
    name: str
    grams: float
    per_100g: Nutrition


@dataclass(frozen=True)
class MealFood:
    """Line item of a meal with already-scaled nutrition."""

    food_id: str
    name: str
    grams: float
    nutrition: Nutrition


@dataclass(frozen=True)
class Meal:
    """A logged meal.

    ``date`` is the logical day the meal counts toward; ``time`` is display
    only. ``total_nutrition`` is the sum of ``foods[*].nutrition`` and is set
    once by :func:`build_meal`.
    """

    id: UUID
    user_id: UUID
    type: MealType
    date: date
    time: str
    foods: tuple[MealFood, ...]
    total_nutrition: Nutrition
    created_at: datetime
    mood: Mood | None = None
    notes: str | None = None


def build_meal(  # noqa: PLR0913
    user_id: UUID,
    meal_type: MealType,
    day: date,
    time: str,
    foods: Sequence[MealFood],
    *,
    mood: Mood | None = None,
    notes: str | None = None,
    meal_id: UUID | None = None,
    created_at: datetime | None = None,
) -> Meal:
    """Create a meal with a fresh id and its denormalized totals."""
    items = tuple(foods)
    return Meal(
        id=meal_id or uuid4(),
        user_id=user_id,
        type=meal_type,
        date=day,
        time=time,
        foods=items,
        total_nutrition=sum_nutrition(item.nutrition for item in items),
        created_at=created_at or datetime.now(tz=UTC),
        mood=mood,
        notes=notes,
    )
