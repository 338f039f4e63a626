"""Supabase repository for meals."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from naijafit.domain.codec import meal_from_dict, meal_to_dict
from naijafit.domain.errors import StorageError
from naijafit.domain.meals import Meal
from naijafit.services.meals import MealRepository

_COLUMNS = (
    "id, user_id, type, date, time, foods, total_nutrition, mood, notes, created_at"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meal persistence."""

    client: Client

    def insert_meal(self, meal: Meal) -> None:
        """Insert a meal row."""
        response = self.client.table("meals").insert(_meal_to_row(meal)).execute()
        if not response.data:
            raise StorageError("Failed to create meal")

    def delete_meal(self, meal_id: UUID, user_id: UUID) -> bool:
        """Delete a meal row owned by the user."""
        response = (
            self.client.table("meals")
            .delete()
            .eq("id", str(meal_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)

    def get_user_meals(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> list[Meal]:
        """Return meals for a user within an optional date range."""
        query = (
            self.client.table("meals").select(_COLUMNS).eq("user_id", str(user_id))
        )
        if start is not None:
            query = query.gte("date", start.isoformat())
        if end is not None:
            query = query.lte("date", end.isoformat())
        response = query.order("created_at", desc=False).execute()
        return [_parse_meal(row) for row in response.data or []]

    def get_meals_by_date(self, user_id: UUID, day: date) -> list[Meal]:
        """Return meals for a user on one day."""
        response = (
            self.client.table("meals")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def count_meals(self) -> int:
        """Return the total number of meal rows."""
        response = self.client.table("meals").select("id", count="exact").execute()
        if response.count is not None:
            return response.count
        return len(response.data or [])


def _meal_to_row(meal: Meal) -> dict[str, object]:
    payload = meal_to_dict(meal)
    return {
        "id": payload["id"],
        "user_id": payload["userId"],
        "type": payload["type"],
        "date": payload["date"],
        "time": payload["time"],
        "foods": payload["foods"],
        "total_nutrition": payload["totalNutrition"],
        "mood": payload["mood"],
        "notes": payload["notes"],
        "created_at": payload["createdAt"],
    }


def _parse_meal(row: dict[str, object]) -> Meal:
    return meal_from_dict(
        {
            "id": row["id"],
            "userId": row["user_id"],
            "type": row["type"],
            "date": row["date"],
            "time": row.get("time"),
            "foods": row.get("foods"),
            "totalNutrition": row.get("total_nutrition"),
            "mood": row.get("mood"),
            "notes": row.get("notes"),
            "createdAt": row["created_at"],
        }
    )
