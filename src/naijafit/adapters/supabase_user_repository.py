"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from naijafit.domain.codec import user_from_dict, user_to_dict
from naijafit.domain.errors import StorageError
from naijafit.domain.models import UserRecord
from naijafit.services.users import UserRepository

# Row column -> codec key.
_FIELDS = {
    "id": "id",
    "email": "email",
    "full_name": "fullName",
    "weight": "weight",
    "age": "age",
    "gender": "gender",
    "height": "height",
    "location": "location",
    "occupation": "occupation",
    "health_conditions": "healthConditions",
    "fitness_goals": "fitnessGoals",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
    "last_active_at": "lastActiveAt",
}
_COLUMNS = ", ".join(_FIELDS)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with an email, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def create_user(
        self, email: str, full_name: str, weight: float | None
    ) -> UserRecord:
        """Create a new user row and return it."""
        response = (
            self.client.table("users")
            .insert(
                {
                    "email": email,
                    "full_name": full_name,
                    "weight": weight,
                    "created_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def save_user(self, user: UserRecord) -> None:
        """Insert or replace a user row."""
        payload = user_to_dict(user)
        self.client.table("users").upsert(
            {column: payload[key] for column, key in _FIELDS.items()}
        ).execute()

    def touch_last_active(self, user_id: UUID) -> None:
        """Update the last_active_at timestamp for a user."""
        self.client.table("users").update(
            {"last_active_at": datetime.now(tz=UTC).isoformat()}
        ).eq("id", str(user_id)).execute()

    def list_users(self) -> list[UserRecord]:
        """Return all user rows."""
        response = self.client.table("users").select(_COLUMNS).execute()
        return [_parse_user(row) for row in response.data or []]


def _parse_user(row: dict[str, object]) -> UserRecord:
    return user_from_dict({key: row.get(column) for column, key in _FIELDS.items()})
