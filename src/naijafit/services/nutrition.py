"""Portion scaling for per-100g nutrition values."""

from naijafit.domain.meals import FoodPortion, MealFood
from naijafit.domain.nutrition import Nutrition


def compute_nutrition(per_100g: Nutrition, grams: float) -> Nutrition:
    """Scale per-100g values to an absolute portion."""
    if grams <= 0:
        return Nutrition.zero()
    return per_100g.scaled(grams / 100.0)


def portion_to_meal_food(portion: FoodPortion) -> MealFood:
    """Turn a food portion into a meal line item."""
    return MealFood(
        food_id=portion.food_id,
        name=portion.name,
        grams=portion.grams,
        nutrition=compute_nutrition(portion.per_100g, portion.grams),
    )
