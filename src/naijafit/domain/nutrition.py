"""Nutrition domain models."""

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Nutrition:
    """Macro and micronutrient bundle for a food or meal."""

    calories: float
    protein: float
    carbs: float
    fats: float
    fiber: float
    iron: float
    vitamin_a: float

    @classmethod
    def zero(cls) -> "Nutrition":
        """Return an all-zero bundle."""
        return cls(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    def plus(self, other: "Nutrition") -> "Nutrition":
        """Return the element-wise sum of two bundles."""
        return Nutrition(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fats=self.fats + other.fats,
            fiber=self.fiber + other.fiber,
            iron=self.iron + other.iron,
            vitamin_a=self.vitamin_a + other.vitamin_a,
        )

    def scaled(self, factor: float) -> "Nutrition":
        """Return every nutrient multiplied by ``factor``."""
        return Nutrition(
            calories=self.calories * factor,
            protein=self.protein * factor,
            carbs=self.carbs * factor,
            fats=self.fats * factor,
            fiber=self.fiber * factor,
            iron=self.iron * factor,
            vitamin_a=self.vitamin_a * factor,
        )


def sum_nutrition(items: Iterable[Nutrition]) -> Nutrition:
    """Sum nutrition bundles element-wise."""
    total = Nutrition.zero()
    for item in items:
        total = total.plus(item)
    return total
