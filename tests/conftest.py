"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from naijafit.config import Settings
from naijafit.containers import AppContainer, Repositories, assemble_container
from naijafit.domain.errors import DuplicateUserError, StorageError
from naijafit.domain.meals import Meal, MealFood, MealType, build_meal
from naijafit.domain.models import UserRecord
from naijafit.domain.nutrition import Nutrition
from naijafit.domain.profiles import UserProfile
from naijafit.domain.stats import UserStats
from naijafit.services.meals import MealRepository
from naijafit.services.profiles import ProfileRepository, ProfileService
from naijafit.services.stats import StatsService, UserStatsRepository
from naijafit.services.users import UserRepository, UserService

FIXED_NOW = datetime(2024, 1, 5, 12, 0, tzinfo=UTC)
TODAY = date(2024, 1, 5)


def fixed_clock() -> datetime:
    return FIXED_NOW


def nutrition(calories: float) -> Nutrition:
    return Nutrition(
        calories=calories,
        protein=calories / 20,
        carbs=calories / 8,
        fats=calories / 30,
        fiber=1.5,
        iron=0.4,
        vitamin_a=12.0,
    )


def make_meal(
    user_id: UUID,
    day: date,
    foods: list[tuple[str, float]],
    *,
    meal_type: MealType = MealType.LUNCH,
    created_at: datetime | None = None,
) -> Meal:
    return build_meal(
        user_id=user_id,
        meal_type=meal_type,
        day=day,
        time="12:30 PM",
        foods=[
            MealFood(
                food_id=name.lower().replace(" ", "-"),
                name=name,
                grams=100.0,
                nutrition=nutrition(calories),
            )
            for name, calories in foods
        ],
        created_at=created_at
        or datetime.combine(day, datetime.min.time(), tzinfo=UTC),
    )


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: list[Meal] = field(default_factory=list)

    def insert_meal(self, meal: Meal) -> None:
        self.meals.append(meal)

    def delete_meal(self, meal_id: UUID, user_id: UUID) -> bool:
        for index, meal in enumerate(self.meals):
            if meal.id == meal_id and meal.user_id == user_id:
                del self.meals[index]
                return True
        return False

    def get_user_meals(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> list[Meal]:
        return [
            meal
            for meal in self.meals
            if meal.user_id == user_id
            and (start is None or meal.date >= start)
            and (end is None or meal.date <= end)
        ]

    def get_meals_by_date(self, user_id: UUID, day: date) -> list[Meal]:
        return self.get_user_meals(user_id, start=day, end=day)

    def count_meals(self) -> int:
        return len(self.meals)


@dataclass
class InMemoryStatsRepository(UserStatsRepository):
    """In-memory stats repository for tests."""

    records: dict[UUID, UserStats] = field(default_factory=dict)
    fail_saves: bool = False
    saves: int = 0

    def get_stats(self, user_id: UUID) -> UserStats | None:
        return self.records.get(user_id)

    def create_stats(self, stats: UserStats) -> None:
        if stats.user_id in self.records:
            raise DuplicateUserError(stats.user_id)
        self.records[stats.user_id] = stats

    def save_stats(self, stats: UserStats) -> None:
        if self.fail_saves:
            raise StorageError("disk full")
        self.saves += 1
        self.records[stats.user_id] = stats

    def list_stats(self) -> list[UserStats]:
        return list(self.records.values())


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)
    touched: list[UUID] = field(default_factory=list)

    def get_user(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> UserRecord | None:
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    def create_user(
        self, email: str, full_name: str, weight: float | None
    ) -> UserRecord:
        user = UserRecord(
            id=uuid4(),
            email=email,
            full_name=full_name,
            weight=weight,
            created_at=FIXED_NOW,
        )
        self.users[user.id] = user
        return user

    def save_user(self, user: UserRecord) -> None:
        self.users[user.id] = user

    def touch_last_active(self, user_id: UUID) -> None:
        self.touched.append(user_id)
        user = self.users[user_id]
        self.users[user_id] = replace(
            user, last_active_at=datetime.now(tz=UTC) - timedelta(minutes=1)
        )

    def list_users(self) -> list[UserRecord]:
        return list(self.users.values())


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)

    def save_profile(self, profile: UserProfile) -> None:
        self.profiles[profile.user_id] = profile

    def count_profiles(self) -> int:
        return len(self.profiles)


@pytest.fixture
def settings() -> Settings:
    return Settings(admin_token="admin-token", timezone="Africa/Lagos")


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def stats_repository() -> InMemoryStatsRepository:
    return InMemoryStatsRepository()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def stats_service(
    stats_repository: InMemoryStatsRepository,
    meal_repository: InMemoryMealRepository,
) -> StatsService:
    return StatsService(
        repository=stats_repository,
        meals=meal_repository,
        timezone_name="Africa/Lagos",
        clock=fixed_clock,
    )


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def profile_service(profile_repository: InMemoryProfileRepository) -> ProfileService:
    return ProfileService(profile_repository, clock=fixed_clock)


@pytest.fixture
def user_service(
    user_repository: InMemoryUserRepository,
    stats_service: StatsService,
    profile_service: ProfileService,
) -> UserService:
    return UserService(user_repository, stats_service, profile_service)


@pytest.fixture
def container(
    settings: Settings,
    user_repository: InMemoryUserRepository,
    meal_repository: InMemoryMealRepository,
    stats_repository: InMemoryStatsRepository,
    profile_repository: InMemoryProfileRepository,
) -> AppContainer:
    built = assemble_container(
        settings,
        Repositories(
            users=user_repository,
            meals=meal_repository,
            stats=stats_repository,
            profiles=profile_repository,
        ),
    )
    built.stats_service.clock = fixed_clock
    built.profile_service.clock = fixed_clock
    return built
