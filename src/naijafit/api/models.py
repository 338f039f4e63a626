"""Pydantic request models for the HTTP API."""

from datetime import UTC, date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from naijafit.domain.meals import FoodPortion, MealType, Mood
from naijafit.domain.models import Gender
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


class NutritionIn(BaseModel):
    """Per-100g nutrient values for a food."""

    calories: float = Field(ge=0)
    protein: float = Field(default=0.0, ge=0)
    carbs: float = Field(default=0.0, ge=0)
    fats: float = Field(default=0.0, ge=0)
    fiber: float = Field(default=0.0, ge=0)
    iron: float = Field(default=0.0, ge=0)
    vitamin_a: float = Field(default=0.0, ge=0)

    def to_domain(self) -> Nutrition:
        """Convert to the domain bundle."""
        return Nutrition(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fats=self.fats,
            fiber=self.fiber,
            iron=self.iron,
            vitamin_a=self.vitamin_a,
        )


class FoodPortionIn(BaseModel):
    """Food eaten in a meal."""

    food_id: str
    name: str
    grams: float = Field(gt=0)
    per_100g: NutritionIn

    def to_domain(self) -> FoodPortion:
        """Convert to a domain portion."""
        return FoodPortion(
            food_id=self.food_id,
            name=self.name,
            grams=self.grams,
            per_100g=self.per_100g.to_domain(),
        )


class MealIn(BaseModel):
    """Payload for logging a meal."""

    type: MealType
    date: date
    time: str = ""
    foods: list[FoodPortionIn] = Field(min_length=1)
    mood: Mood | None = None
    notes: str | None = None


class RegisterIn(BaseModel):
    """Payload for creating a user."""

    email: str
    full_name: str
    weight: float | None = Field(default=None, gt=0)


class WeightIn(BaseModel):
    """Payload for recording body weight."""

    date: date
    weight: float = Field(gt=0)


class UserUpdateIn(BaseModel):
    """Partial update of the caller's personal details."""

    full_name: str | None = Field(default=None, min_length=1)
    weight: float | None = Field(default=None, gt=0)
    age: int | None = Field(default=None, gt=0, lt=150)
    gender: Gender | None = None
    height: float | None = Field(default=None, gt=0)
    location: str | None = None
    occupation: str | None = None
    health_conditions: list[str] | None = None
    fitness_goals: list[str] | None = None

    def changes(self) -> dict[str, object]:
        """Return only the fields present in the request."""
        changes: dict[str, object] = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if name == "full_name" and value is None:
                continue
            changes[name] = tuple(value) if isinstance(value, list) else value
        return changes


class MealPreferencesIn(BaseModel):
    breakfast: list[str] = []
    lunch: list[str] = []
    dinner: list[str] = []
    snacks: list[str] = []


class PreferencesIn(BaseModel):
    cultural_background: list[str] = ["general-nigerian"]
    dietary_restrictions: list[str] = []
    activity_level: ActivityLevel = ActivityLevel.MODERATE
    health_goals: list[str] = ["balanced"]
    favorite_nigerian_foods: list[str] = []
    meal_preferences: MealPreferencesIn = MealPreferencesIn()


class ReminderTimesIn(BaseModel):
    breakfast: str = Field(default="07:00", pattern=r"^\d{2}:\d{2}$")
    lunch: str = Field(default="12:00", pattern=r"^\d{2}:\d{2}$")
    dinner: str = Field(default="19:00", pattern=r"^\d{2}:\d{2}$")


class WeeklyGoalsIn(BaseModel):
    calorie_target: int = Field(default=2000, ge=0)
    protein_target: int = Field(default=100, ge=0)
    exercise_days: int = Field(default=3, ge=0, le=7)


class ProfileSettingsIn(BaseModel):
    notifications: bool = True
    data_sharing: bool = False
    units: Units = Units.METRIC
    reminder_times: ReminderTimesIn = ReminderTimesIn()
    weekly_goals: WeeklyGoalsIn = WeeklyGoalsIn()


class RecommendationsIn(BaseModel):
    suggested_foods: list[str] = ["jollof-rice", "grilled-fish", "vegetables"]
    avoid_foods: list[str] = []
    meal_plan_preferences: str = "balanced_nigerian"
    supplement_suggestions: list[str] = []


class ProfileIn(BaseModel):
    """Full replacement of the caller's profile; omitted sections reset."""

    preferences: PreferencesIn = PreferencesIn()
    settings: ProfileSettingsIn = ProfileSettingsIn()
    recommendations: RecommendationsIn = RecommendationsIn()

    def to_domain(self, user_id: UUID) -> UserProfile:
        """Convert to a domain profile owned by ``user_id``."""
        preferences = self.preferences
        meals = preferences.meal_preferences
        settings = self.settings
        recommendations = self.recommendations
        return UserProfile(
            user_id=user_id,
            # Stamped by the profile service on save.
            updated_at=datetime.min.replace(tzinfo=UTC),
            preferences=Preferences(
                cultural_background=tuple(preferences.cultural_background),
                dietary_restrictions=tuple(preferences.dietary_restrictions),
                activity_level=preferences.activity_level,
                health_goals=tuple(preferences.health_goals),
                favorite_nigerian_foods=tuple(preferences.favorite_nigerian_foods),
                meal_preferences=MealPreferences(
                    breakfast=tuple(meals.breakfast),
                    lunch=tuple(meals.lunch),
                    dinner=tuple(meals.dinner),
                    snacks=tuple(meals.snacks),
                ),
            ),
            settings=ProfileSettings(
                notifications=settings.notifications,
                data_sharing=settings.data_sharing,
                units=settings.units,
                reminder_times=ReminderTimes(
                    breakfast=settings.reminder_times.breakfast,
                    lunch=settings.reminder_times.lunch,
                    dinner=settings.reminder_times.dinner,
                ),
                weekly_goals=WeeklyGoals(
                    calorie_target=settings.weekly_goals.calorie_target,
                    protein_target=settings.weekly_goals.protein_target,
                    exercise_days=settings.weekly_goals.exercise_days,
                ),
            ),
            recommendations=Recommendations(
                suggested_foods=tuple(recommendations.suggested_foods),
                avoid_foods=tuple(recommendations.avoid_foods),
                meal_plan_preferences=recommendations.meal_plan_preferences,
                supplement_suggestions=tuple(recommendations.supplement_suggestions),
            ),
        )
