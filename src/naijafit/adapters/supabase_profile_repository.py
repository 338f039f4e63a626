"""Supabase repository for user profiles."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from naijafit.domain.codec import profile_from_dict, profile_to_dict
from naijafit.domain.errors import StorageError
from naijafit.domain.profiles import UserProfile
from naijafit.services.profiles import ProfileRepository

_COLUMNS = "user_id, preferences, settings, personalized_recommendations, updated_at"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for the user_profiles table.

    The nested sections are stored as JSON columns in their encoded form.
    """

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile row for a user."""
        response = (
            self.client.table("user_profiles")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def save_profile(self, profile: UserProfile) -> None:
        """Insert or replace the profile row for a user."""
        response = (
            self.client.table("user_profiles")
            .upsert(_to_row(profile), on_conflict="user_id")
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to save user profile")

    def count_profiles(self) -> int:
        """Return the number of profile rows."""
        response = (
            self.client.table("user_profiles")
            .select("user_id", count="exact")
            .execute()
        )
        return response.count or 0


def _to_row(profile: UserProfile) -> dict[str, object]:
    payload = profile_to_dict(profile)
    return {
        "user_id": payload["userId"],
        "preferences": payload["preferences"],
        "settings": payload["settings"],
        "personalized_recommendations": payload["personalizedRecommendations"],
        "updated_at": payload["updatedAt"],
    }


def _parse_row(row: dict[str, object]) -> UserProfile:
    return profile_from_dict(
        {
            "userId": row["user_id"],
            "preferences": row.get("preferences"),
            "settings": row.get("settings"),
            "personalizedRecommendations": row.get("personalized_recommendations"),
            "updatedAt": row["updated_at"],
        }
    )
