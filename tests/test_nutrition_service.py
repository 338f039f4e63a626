"""Tests for portion scaling."""

import pytest

from naijafit.domain.meals import FoodPortion
from naijafit.domain.nutrition import Nutrition, sum_nutrition
from naijafit.services.nutrition import compute_nutrition, portion_to_meal_food

EGUSI_PER_100G = Nutrition(
    calories=221.0,
    protein=10.2,
    carbs=9.1,
    fats=19.3,
    fiber=3.5,
    iron=3.2,
    vitamin_a=180.0,
)


def test_compute_nutrition_scales_by_grams() -> None:
    portion = compute_nutrition(EGUSI_PER_100G, 200)

    assert portion.calories == pytest.approx(442.0)
    assert portion.fats == pytest.approx(38.6)
    assert portion.vitamin_a == pytest.approx(360.0)


def test_compute_nutrition_non_positive_grams() -> None:
    assert compute_nutrition(EGUSI_PER_100G, 0) == Nutrition.zero()
    assert compute_nutrition(EGUSI_PER_100G, -5) == Nutrition.zero()


def test_portion_to_meal_food_keeps_identity() -> None:
    food = portion_to_meal_food(
        FoodPortion(
            food_id="egusi-soup", name="Egusi Soup", grams=50, per_100g=EGUSI_PER_100G
        )
    )

    assert food.food_id == "egusi-soup"
    assert food.grams == 50
    assert food.nutrition.calories == pytest.approx(110.5)


def test_sum_nutrition_is_element_wise() -> None:
    total = sum_nutrition([EGUSI_PER_100G, EGUSI_PER_100G.scaled(0.5)])

    assert total.calories == pytest.approx(331.5)
    assert total.iron == pytest.approx(4.8)
    assert sum_nutrition([]) == Nutrition.zero()
