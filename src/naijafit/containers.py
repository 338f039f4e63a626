"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from naijafit.adapters.key_value_repositories import (
    KeyValueMealRepository,
    KeyValueProfileRepository,
    KeyValueStatsRepository,
    KeyValueUserRepository,
)
from naijafit.adapters.key_value_store import JsonFileStore
from naijafit.adapters.supabase_meal_repository import SupabaseMealRepository
from naijafit.adapters.supabase_profile_repository import SupabaseProfileRepository
from naijafit.adapters.supabase_stats_repository import SupabaseStatsRepository
from naijafit.adapters.supabase_user_repository import SupabaseUserRepository
from naijafit.config import Settings
from naijafit.services.admin import AdminService
from naijafit.services.export import DataExportService
from naijafit.services.locks import UserLocks
from naijafit.services.meals import MealLogService, MealRepository
from naijafit.services.profiles import ProfileRepository, ProfileService
from naijafit.services.stats import StatsService, UserStatsRepository
from naijafit.services.users import UserRepository, UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    profile_service: ProfileService
    meal_log_service: MealLogService
    stats_service: StatsService
    export_service: DataExportService
    admin_service: AdminService


@dataclass(frozen=True)
class Repositories:
    """The storage ports one backend provides."""

    users: UserRepository
    meals: MealRepository
    stats: UserStatsRepository
    profiles: ProfileRepository


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    return assemble_container(resolved_settings, _build_repositories(resolved_settings))


def assemble_container(
    settings: Settings, repositories: Repositories
) -> AppContainer:
    """Wire services around the given repositories."""
    stats_service = StatsService(
        repository=repositories.stats,
        meals=repositories.meals,
        timezone_name=settings.timezone,
    )
    profile_service = ProfileService(repositories.profiles)
    # Meal logging and imports mutate the same per-user state.
    locks = UserLocks()
    return AppContainer(
        settings=settings,
        user_service=UserService(repositories.users, stats_service, profile_service),
        profile_service=profile_service,
        meal_log_service=MealLogService(repositories.meals, stats_service, locks),
        stats_service=stats_service,
        export_service=DataExportService(
            user_repository=repositories.users,
            meal_repository=repositories.meals,
            profile_repository=repositories.profiles,
            stats_service=stats_service,
            locks=locks,
        ),
        admin_service=AdminService(
            user_repository=repositories.users,
            meal_repository=repositories.meals,
            profile_repository=repositories.profiles,
            stats_service=stats_service,
        ),
    )


def _build_repositories(settings: Settings) -> Repositories:
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase backend requires url and service key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return Repositories(
            users=SupabaseUserRepository(client),
            meals=SupabaseMealRepository(client),
            stats=SupabaseStatsRepository(client),
            profiles=SupabaseProfileRepository(client),
        )
    store = JsonFileStore(settings.data_path)
    return Repositories(
        users=KeyValueUserRepository(store),
        meals=KeyValueMealRepository(store),
        stats=KeyValueStatsRepository(store),
        profiles=KeyValueProfileRepository(store),
    )
