"""Supabase repository for user statistics."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from naijafit.domain.codec import stats_from_dict, stats_to_dict
from naijafit.domain.errors import StorageError
from naijafit.domain.stats import UserStats
from naijafit.services.stats import UserStatsRepository

_COLUMNS = (
    "user_id, total_meals_logged, average_daily_calories, favorite_food, "
    "current_streak, longest_streak, achievements, weight_progress, last_updated"
)


@dataclass
class SupabaseStatsRepository(UserStatsRepository):
    """Supabase implementation for the user_stats table."""

    client: Client

    def get_stats(self, user_id: UUID) -> UserStats | None:
        """Return the stats row for a user."""
        response = (
            self.client.table("user_stats")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_stats(self, stats: UserStats) -> None:
        """Insert a stats row."""
        response = self.client.table("user_stats").insert(_to_row(stats)).execute()
        if not response.data:
            raise StorageError("Failed to create user stats")

    def save_stats(self, stats: UserStats) -> None:
        """Overwrite the stats row for a user."""
        response = (
            self.client.table("user_stats")
            .update(_to_row(stats))
            .eq("user_id", str(stats.user_id))
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to update user stats")

    def list_stats(self) -> list[UserStats]:
        """Return all stats rows."""
        response = self.client.table("user_stats").select(_COLUMNS).execute()
        return [_parse_row(row) for row in response.data or []]


def _to_row(stats: UserStats) -> dict[str, object]:
    payload = stats_to_dict(stats)
    return {
        "user_id": payload["userId"],
        "total_meals_logged": payload["totalMealsLogged"],
        "average_daily_calories": payload["averageDailyCalories"],
        "favorite_food": payload["favoriteFood"],
        "current_streak": payload["currentStreak"],
        "longest_streak": payload["longestStreak"],
        "achievements": payload["achievements"],
        "weight_progress": payload["weightProgress"],
        "last_updated": payload["lastUpdated"],
    }


def _parse_row(row: dict[str, object]) -> UserStats:
    return stats_from_dict(
        {
            "userId": row["user_id"],
            "totalMealsLogged": row.get("total_meals_logged"),
            "averageDailyCalories": row.get("average_daily_calories"),
            "favoriteFood": row.get("favorite_food"),
            "currentStreak": row.get("current_streak"),
            "longestStreak": row.get("longest_streak"),
            "achievements": row.get("achievements"),
            "weightProgress": row.get("weight_progress"),
            "lastUpdated": row["last_updated"],
        }
    )
