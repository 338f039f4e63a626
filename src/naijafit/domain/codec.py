"""JSON-compatible encoding for domain records.

Keys follow the camelCase layout used by exported data files. Floats are
written unchanged so a ``json.dumps``/``json.loads`` cycle is lossless.
"""

from datetime import date, datetime
from uuid import UUID

from naijafit.domain.meals import Meal, MealFood, MealType, Mood
from naijafit.domain.models import Gender, UserRecord
from naijafit.domain.nutrition import Nutrition
from naijafit.domain.profiles import (
    ActivityLevel,
    MealPreferences,
    Preferences,
    ProfileSettings,
    Recommendations,
    ReminderTimes,
    Units,
    UserProfile,
    WeeklyGoals,
)
from naijafit.domain.stats import DEFAULT_FAVORITE_FOOD, UserStats, WeightSample


def nutrition_to_dict(nutrition: Nutrition) -> dict[str, float]:
    """Encode a nutrition bundle."""
    return {
        "calories": nutrition.calories,
        "protein": nutrition.protein,
        "carbs": nutrition.carbs,
        "fats": nutrition.fats,
        "fiber": nutrition.fiber,
        "iron": nutrition.iron,
        "vitaminA": nutrition.vitamin_a,
    }


def nutrition_from_dict(payload: dict[str, object]) -> Nutrition:
    """Decode a nutrition bundle, treating missing nutrients as zero."""
    return Nutrition(
        calories=_to_float(payload.get("calories")),
        protein=_to_float(payload.get("protein")),
        carbs=_to_float(payload.get("carbs")),
        fats=_to_float(payload.get("fats")),
        fiber=_to_float(payload.get("fiber")),
        iron=_to_float(payload.get("iron")),
        vitamin_a=_to_float(payload.get("vitaminA")),
    )


def meal_to_dict(meal: Meal) -> dict[str, object]:
    """Encode a meal."""
    return {
        "id": str(meal.id),
        "userId": str(meal.user_id),
        "type": meal.type.value,
        "date": meal.date.isoformat(),
        "time": meal.time,
        "foods": [
            {
                "id": food.food_id,
                "name": food.name,
                "grams": food.grams,
                "nutrition": nutrition_to_dict(food.nutrition),
            }
            for food in meal.foods
        ],
        "totalNutrition": nutrition_to_dict(meal.total_nutrition),
        "mood": meal.mood.value if meal.mood else None,
        "notes": meal.notes,
        "createdAt": meal.created_at.isoformat(),
    }


def meal_from_dict(payload: dict[str, object]) -> Meal:
    """Decode a meal.

    The stored ``totalNutrition`` is kept as written; it is the value the
    meal was created with.
    """
    foods = tuple(
        MealFood(
            food_id=str(food["id"]),
            name=str(food["name"]),
            grams=_to_float(food.get("grams")),
            nutrition=nutrition_from_dict(food.get("nutrition") or {}),
        )
        for food in payload.get("foods") or []
    )
    mood = payload.get("mood")
    notes = payload.get("notes")
    return Meal(
        id=UUID(str(payload["id"])),
        user_id=UUID(str(payload["userId"])),
        type=MealType(payload["type"]),
        date=date.fromisoformat(str(payload["date"])),
        time=str(payload.get("time") or ""),
        foods=foods,
        total_nutrition=nutrition_from_dict(payload.get("totalNutrition") or {}),
        created_at=datetime.fromisoformat(str(payload["createdAt"])),
        mood=Mood(mood) if mood else None,
        notes=str(notes) if notes is not None else None,
    )


def stats_to_dict(stats: UserStats) -> dict[str, object]:
    """Encode a user stats record."""
    return {
        "userId": str(stats.user_id),
        "totalMealsLogged": stats.total_meals_logged,
        "averageDailyCalories": stats.average_daily_calories,
        "favoriteFood": stats.favorite_food,
        "longestStreak": stats.longest_streak,
        "currentStreak": stats.current_streak,
        "weightProgress": [
            {"date": sample.date.isoformat(), "weight": sample.weight}
            for sample in stats.weight_progress
        ],
        "achievements": list(stats.achievements),
        "lastUpdated": stats.last_updated.isoformat(),
    }


def stats_from_dict(payload: dict[str, object]) -> UserStats:
    """Decode a user stats record."""
    return UserStats(
        user_id=UUID(str(payload["userId"])),
        total_meals_logged=int(payload.get("totalMealsLogged") or 0),
        average_daily_calories=_to_float(payload.get("averageDailyCalories")),
        favorite_food=str(payload.get("favoriteFood") or DEFAULT_FAVORITE_FOOD),
        current_streak=int(payload.get("currentStreak") or 0),
        longest_streak=int(payload.get("longestStreak") or 0),
        achievements=tuple(str(name) for name in payload.get("achievements") or []),
        weight_progress=tuple(
            WeightSample(
                date=date.fromisoformat(str(sample["date"])),
                weight=_to_float(sample.get("weight")),
            )
            for sample in payload.get("weightProgress") or []
        ),
        last_updated=datetime.fromisoformat(str(payload["lastUpdated"])),
    )


def user_to_dict(user: UserRecord) -> dict[str, object]:
    """Encode a user record."""
    return {
        "id": str(user.id),
        "email": user.email,
        "fullName": user.full_name,
        "weight": user.weight,
        "age": user.age,
        "gender": user.gender.value if user.gender else None,
        "height": user.height,
        "location": user.location,
        "occupation": user.occupation,
        "healthConditions": list(user.health_conditions),
        "fitnessGoals": list(user.fitness_goals),
        "createdAt": user.created_at.isoformat(),
        "updatedAt": _isoformat(user.updated_at),
        "lastActiveAt": _isoformat(user.last_active_at),
    }


def user_from_dict(payload: dict[str, object]) -> UserRecord:
    """Decode a user record; personal details are optional."""
    weight = payload.get("weight")
    age = payload.get("age")
    height = payload.get("height")
    gender = payload.get("gender")
    location = payload.get("location")
    occupation = payload.get("occupation")
    return UserRecord(
        id=UUID(str(payload["id"])),
        email=str(payload["email"]),
        full_name=str(payload.get("fullName") or ""),
        weight=_to_float(weight) if weight is not None else None,
        created_at=datetime.fromisoformat(str(payload["createdAt"])),
        last_active_at=_parse_datetime(payload.get("lastActiveAt")),
        age=int(age) if age is not None else None,
        gender=Gender(gender) if gender else None,
        height=_to_float(height) if height is not None else None,
        location=str(location) if location is not None else None,
        occupation=str(occupation) if occupation is not None else None,
        health_conditions=_strings(payload.get("healthConditions")),
        fitness_goals=_strings(payload.get("fitnessGoals")),
        updated_at=_parse_datetime(payload.get("updatedAt")),
    )


def profile_to_dict(profile: UserProfile) -> dict[str, object]:
    """Encode a user profile."""
    preferences = profile.preferences
    settings = profile.settings
    recommendations = profile.recommendations
    return {
        "userId": str(profile.user_id),
        "preferences": {
            "culturalBackground": list(preferences.cultural_background),
            "dietaryRestrictions": list(preferences.dietary_restrictions),
            "activityLevel": preferences.activity_level.value,
            "healthGoals": list(preferences.health_goals),
            "favoriteNigerianFoods": list(preferences.favorite_nigerian_foods),
            "mealPreferences": {
                "breakfast": list(preferences.meal_preferences.breakfast),
                "lunch": list(preferences.meal_preferences.lunch),
                "dinner": list(preferences.meal_preferences.dinner),
                "snacks": list(preferences.meal_preferences.snacks),
            },
        },
        "settings": {
            "notifications": settings.notifications,
            "dataSharing": settings.data_sharing,
            "units": settings.units.value,
            "reminderTimes": {
                "breakfast": settings.reminder_times.breakfast,
                "lunch": settings.reminder_times.lunch,
                "dinner": settings.reminder_times.dinner,
            },
            "weeklyGoals": {
                "calorieTarget": settings.weekly_goals.calorie_target,
                "proteinTarget": settings.weekly_goals.protein_target,
                "exerciseDays": settings.weekly_goals.exercise_days,
            },
        },
        "personalizedRecommendations": {
            "suggestedFoods": list(recommendations.suggested_foods),
            "avoidFoods": list(recommendations.avoid_foods),
            "mealPlanPreferences": recommendations.meal_plan_preferences,
            "supplementSuggestions": list(recommendations.supplement_suggestions),
        },
        "updatedAt": profile.updated_at.isoformat(),
    }


def profile_from_dict(payload: dict[str, object]) -> UserProfile:
    """Decode a user profile, filling missing sections with defaults."""
    raw_preferences = _section(payload, "preferences")
    raw_meals = _section(raw_preferences, "mealPreferences")
    raw_settings = _section(payload, "settings")
    raw_reminders = _section(raw_settings, "reminderTimes")
    raw_goals = _section(raw_settings, "weeklyGoals")
    raw_recommendations = _section(payload, "personalizedRecommendations")
    defaults = Preferences()
    default_settings = ProfileSettings()
    default_recommendations = Recommendations()
    return UserProfile(
        user_id=UUID(str(payload["userId"])),
        updated_at=datetime.fromisoformat(str(payload["updatedAt"])),
        preferences=Preferences(
            cultural_background=_strings(
                raw_preferences.get("culturalBackground"),
                defaults.cultural_background,
            ),
            dietary_restrictions=_strings(raw_preferences.get("dietaryRestrictions")),
            activity_level=ActivityLevel(
                raw_preferences.get("activityLevel") or defaults.activity_level.value
            ),
            health_goals=_strings(
                raw_preferences.get("healthGoals"), defaults.health_goals
            ),
            favorite_nigerian_foods=_strings(
                raw_preferences.get("favoriteNigerianFoods")
            ),
            meal_preferences=MealPreferences(
                breakfast=_strings(raw_meals.get("breakfast")),
                lunch=_strings(raw_meals.get("lunch")),
                dinner=_strings(raw_meals.get("dinner")),
                snacks=_strings(raw_meals.get("snacks")),
            ),
        ),
        settings=ProfileSettings(
            notifications=bool(
                raw_settings.get("notifications", default_settings.notifications)
            ),
            data_sharing=bool(
                raw_settings.get("dataSharing", default_settings.data_sharing)
            ),
            units=Units(raw_settings.get("units") or default_settings.units.value),
            reminder_times=ReminderTimes(
                breakfast=str(raw_reminders.get("breakfast") or "07:00"),
                lunch=str(raw_reminders.get("lunch") or "12:00"),
                dinner=str(raw_reminders.get("dinner") or "19:00"),
            ),
            weekly_goals=WeeklyGoals(
                calorie_target=int(raw_goals.get("calorieTarget", 2000)),
                protein_target=int(raw_goals.get("proteinTarget", 100)),
                exercise_days=int(raw_goals.get("exerciseDays", 3)),
            ),
        ),
        recommendations=Recommendations(
            suggested_foods=_strings(
                raw_recommendations.get("suggestedFoods"),
                default_recommendations.suggested_foods,
            ),
            avoid_foods=_strings(raw_recommendations.get("avoidFoods")),
            meal_plan_preferences=str(
                raw_recommendations.get("mealPlanPreferences")
                or default_recommendations.meal_plan_preferences
            ),
            supplement_suggestions=_strings(
                raw_recommendations.get("supplementSuggestions")
            ),
        ),
    )


def _section(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key)
    return value if isinstance(value, dict) else {}


def _strings(value: object, default: tuple[str, ...] = ()) -> tuple[str, ...]:
    if value is None:
        return default
    if not isinstance(value, list | tuple):
        raise TypeError(f"Expected a list of strings, got {type(value).__name__}")
    return tuple(str(item) for item in value)


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_datetime(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None



def _to_float(value: object) -> float:
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0
