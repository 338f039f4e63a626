"""Tests for record encoding."""

import json
from datetime import UTC, date, datetime
from uuid import uuid4

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
from naijafit.domain.meals import MealFood, MealType, Mood, build_meal
from naijafit.domain.models import Gender, UserRecord
from naijafit.domain.nutrition import Nutrition
from naijafit.domain.profiles import ActivityLevel, Preferences, Units, UserProfile
from naijafit.domain.stats import UserStats, WeightSample


def test_meal_survives_json() -> None:
    meal = build_meal(
        user_id=uuid4(),
        meal_type=MealType.DINNER,
        day=date(2024, 1, 5),
        time="07:00 PM",
        foods=[
            MealFood(
                food_id="pounded-yam",
                name="Pounded Yam",
                grams=250.0,
                nutrition=Nutrition(295.1, 5.3, 68.3, 0.3, 5.8, 2.0, 25.0),
            ),
            MealFood(
                food_id="egusi-soup",
                name="Egusi Soup",
                grams=200.0,
                nutrition=Nutrition(442.0, 20.4, 18.2, 38.6, 7.0, 6.4, 1 / 3),
            ),
        ],
        mood=Mood.GREAT,
        notes="Family dinner",
    )

    decoded = meal_from_dict(json.loads(json.dumps(meal_to_dict(meal))))

    assert decoded == meal
    assert decoded.foods[1].nutrition.vitamin_a == 1 / 3


def test_stats_survive_json() -> None:
    stats = UserStats(
        user_id=uuid4(),
        total_meals_logged=42,
        average_daily_calories=1834.3333333333333,
        favorite_food="Jollof Rice",
        current_streak=5,
        longest_streak=12,
        achievements=("Welcome", "First Meal Logged"),
        weight_progress=(WeightSample(date=date(2024, 1, 1), weight=70.2),),
        last_updated=datetime(2024, 1, 5, 12, 0, tzinfo=UTC),
    )

    decoded = stats_from_dict(json.loads(json.dumps(stats_to_dict(stats))))

    assert decoded == stats


def test_user_survives_json() -> None:
    user = UserRecord(
        id=uuid4(),
        email="adunni@naijafit.com",
        full_name="Adunni Okafor",
        weight=68.0,
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
        last_active_at=None,
        age=31,
        gender=Gender.FEMALE,
        height=165.0,
        occupation="Nurse",
        fitness_goals=("build-stamina",),
    )

    assert user_from_dict(json.loads(json.dumps(user_to_dict(user)))) == user


def test_meal_keys_use_export_layout() -> None:
    meal = build_meal(
        user_id=uuid4(),
        meal_type=MealType.SNACK,
        day=date(2024, 1, 5),
        time="",
        foods=[],
    )

    payload = meal_to_dict(meal)

    assert payload["type"] == "snack"
    assert payload["totalNutrition"]["vitaminA"] == 0.0
    assert payload["mood"] is None


def test_user_without_personal_details_decodes() -> None:
    user = user_from_dict(
        {
            "id": str(uuid4()),
            "email": "emeka@naijafit.com",
            "fullName": "Emeka Nwosu",
            "createdAt": "2024-01-01T00:00:00+00:00",
        }
    )

    assert user.weight is None
    assert user.gender is None
    assert user.health_conditions == ()
    assert user.updated_at is None


def test_profile_keys_use_export_layout() -> None:
    profile = UserProfile(
        user_id=uuid4(),
        updated_at=datetime(2024, 1, 5, tzinfo=UTC),
        preferences=Preferences(activity_level=ActivityLevel.ACTIVE),
    )

    payload = profile_to_dict(profile)

    assert payload["preferences"]["activityLevel"] == "active"
    assert payload["settings"]["reminderTimes"]["dinner"] == "19:00"
    assert payload["personalizedRecommendations"]["mealPlanPreferences"] == (
        "balanced_nigerian"
    )
    assert profile_from_dict(json.loads(json.dumps(payload))) == profile


def test_profile_missing_sections_use_defaults() -> None:
    user_id = uuid4()

    profile = profile_from_dict(
        {
            "userId": str(user_id),
            "settings": {"units": "imperial", "weeklyGoals": {"exerciseDays": 5}},
            "updatedAt": "2024-01-05T00:00:00+00:00",
        }
    )

    assert profile.preferences == Preferences()
    assert profile.settings.units is Units.IMPERIAL
    assert profile.settings.weekly_goals.exercise_days == 5
    assert profile.settings.weekly_goals.calorie_target == 2000
    assert profile.settings.notifications is True
