"""Dietary preferences, reminders and goals attached to a user."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID


class ActivityLevel(Enum):
    """How active the user is day to day."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"


class Units(Enum):
    """Measurement system used for display."""

    METRIC = "metric"
    IMPERIAL = "imperial"


@dataclass(frozen=True)
class MealPreferences:
    """Preferred foods per meal slot."""

    breakfast: tuple[str, ...] = ()
    lunch: tuple[str, ...] = ()
    dinner: tuple[str, ...] = ()
    snacks: tuple[str, ...] = ()


@dataclass(frozen=True)
class Preferences:
    """Cultural and dietary preferences."""

    cultural_background: tuple[str, ...] = ("general-nigerian",)
    dietary_restrictions: tuple[str, ...] = ()
    activity_level: ActivityLevel = ActivityLevel.MODERATE
    health_goals: tuple[str, ...] = ("balanced",)
    favorite_nigerian_foods: tuple[str, ...] = ()
    meal_preferences: MealPreferences = field(default_factory=MealPreferences)


@dataclass(frozen=True)
class ReminderTimes:
    """Local ``HH:MM`` reminder times per main meal."""

    breakfast: str = "07:00"
    lunch: str = "12:00"
    dinner: str = "19:00"


@dataclass(frozen=True)
class WeeklyGoals:
    calorie_target: int = 2000
    protein_target: int = 100
    exercise_days: int = 3


@dataclass(frozen=True)
class ProfileSettings:
    """Notification, sharing and goal settings."""

    notifications: bool = True
    data_sharing: bool = False
    units: Units = Units.METRIC
    reminder_times: ReminderTimes = field(default_factory=ReminderTimes)
    weekly_goals: WeeklyGoals = field(default_factory=WeeklyGoals)


@dataclass(frozen=True)
class Recommendations:
    suggested_foods: tuple[str, ...] = ("jollof-rice", "grilled-fish", "vegetables")
    avoid_foods: tuple[str, ...] = ()
    meal_plan_preferences: str = "balanced_nigerian"
    supplement_suggestions: tuple[str, ...] = ()


@dataclass(frozen=True)
class UserProfile:
    """A user's profile; the defaults are what a new account starts with."""

    user_id: UUID
    updated_at: datetime
    preferences: Preferences = field(default_factory=Preferences)
    settings: ProfileSettings = field(default_factory=ProfileSettings)
    recommendations: Recommendations = field(default_factory=Recommendations)
