"""Admin service for reporting and repairs."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

from naijafit.domain.stats import UserStats
from naijafit.services.meals import MealRepository
from naijafit.services.profiles import ProfileRepository
from naijafit.services.stats import StatsService
from naijafit.services.users import UserRepository

ACTIVE_WINDOW = timedelta(days=7)


@dataclass
class AdminService:
    """Service for admin dashboards."""

    user_repository: UserRepository
    meal_repository: MealRepository
    profile_repository: ProfileRepository
    stats_service: StatsService

    def app_stats(self) -> dict[str, int]:
        """Return application-wide counters."""
        users = self.user_repository.list_users()
        since = datetime.now(tz=UTC) - ACTIVE_WINDOW
        active = [
            user
            for user in users
            if user.last_active_at is not None and user.last_active_at > since
        ]
        return {
            "total_users": len(users),
            "total_meals": self.meal_repository.count_meals(),
            "total_stats": len(self.stats_service.repository.list_stats()),
            "total_profiles": self.profile_repository.count_profiles(),
            "active_users": len(active),
        }

    def recompute_user(self, user_id: UUID) -> UserStats:
        """Rebuild a user's stats from their meals."""
        return self.stats_service.recompute_full(user_id)
