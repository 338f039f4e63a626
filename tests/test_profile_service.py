"""Tests for profile service."""

from uuid import uuid4

from naijafit.domain.profiles import (
    ActivityLevel,
    Preferences,
    ProfileSettings,
    UserProfile,
    WeeklyGoals,
)
from naijafit.domain.sessions import UserSession
from naijafit.services.profiles import ProfileService
from tests.conftest import FIXED_NOW, InMemoryProfileRepository


def _session() -> UserSession:
    return UserSession(user_id=uuid4(), opened_at=FIXED_NOW)


def test_get_profile_without_record_returns_defaults(
    profile_service: ProfileService, profile_repository: InMemoryProfileRepository
) -> None:
    session = _session()

    profile = profile_service.get_profile(session)

    assert profile == UserProfile(user_id=session.user_id, updated_at=FIXED_NOW)
    assert profile_repository.profiles == {}


def test_update_profile_belongs_to_session_user(
    profile_service: ProfileService, profile_repository: InMemoryProfileRepository
) -> None:
    session = _session()
    requested = UserProfile(
        user_id=uuid4(),
        updated_at=FIXED_NOW.replace(year=2020),
        preferences=Preferences(activity_level=ActivityLevel.SEDENTARY),
        settings=ProfileSettings(weekly_goals=WeeklyGoals(calorie_target=1600)),
    )

    saved = profile_service.update_profile(session, requested)

    assert saved.user_id == session.user_id
    assert saved.updated_at == FIXED_NOW
    assert profile_repository.profiles == {session.user_id: saved}
    goals = profile_service.get_profile(session).settings.weekly_goals
    assert goals.calorie_target == 1600
