"""User profile service."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from naijafit.domain.profiles import UserProfile
from naijafit.domain.sessions import UserSession

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return a user's profile, if present."""

    def save_profile(self, profile: UserProfile) -> None:
        """Insert or replace the profile for ``profile.user_id``."""

    def count_profiles(self) -> int:
        """Return the number of stored profiles."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class ProfileService:
    """Reads and updates dietary preferences, settings and goals."""

    repository: ProfileRepository
    clock: Callable[[], datetime] = _utc_now

    def create_default(self, user_id: UUID) -> UserProfile:
        """Store the starting profile for a newly registered user."""
        profile = UserProfile(user_id=user_id, updated_at=self.clock())
        self.repository.save_profile(profile)
        _logger.info("Created default profile: user_id=%s", user_id)
        return profile

    def get_profile(self, session: UserSession) -> UserProfile:
        """Return the session user's profile, or the defaults if none is stored."""
        profile = self.repository.get_profile(session.user_id)
        if profile is None:
            return UserProfile(user_id=session.user_id, updated_at=self.clock())
        return profile

    def update_profile(self, session: UserSession, profile: UserProfile) -> UserProfile:
        """Replace the session user's profile.

        The stored record always belongs to the session user, whatever
        ``profile.user_id`` says.
        """
        updated = replace(profile, user_id=session.user_id, updated_at=self.clock())
        self.repository.save_profile(updated)
        return updated
