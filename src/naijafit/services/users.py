"""User-related business logic."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from naijafit.domain.errors import DuplicateUserError, UserNotFoundError
from naijafit.domain.models import EDITABLE_USER_FIELDS, UserRecord
from naijafit.domain.sessions import UserSession
from naijafit.services.profiles import ProfileService
from naijafit.services.stats import StatsService

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with an email, if present."""

    def create_user(
        self, email: str, full_name: str, weight: float | None
    ) -> UserRecord:
        """Create and return a new user record."""

    def save_user(self, user: UserRecord) -> None:
        """Insert or replace a user record."""

    def touch_last_active(self, user_id: UUID) -> None:
        """Update the last active timestamp for the user."""

    def list_users(self) -> list[UserRecord]:
        """Return all users."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository
    stats_service: StatsService
    profile_service: ProfileService

    def register(
        self, email: str, full_name: str, weight: float | None = None
    ) -> UserRecord:
        """Create a user with a default profile and a zeroed stats record."""
        normalized = email.strip().lower()
        if self.repository.get_by_email(normalized) is not None:
            raise DuplicateUserError(normalized)

        created = self.repository.create_user(normalized, full_name, weight)
        try:
            self.stats_service.initialize(created.id, weight=weight)
        except DuplicateUserError:
            _logger.warning("Stats already initialized: user_id=%s", created.id)
        self.profile_service.create_default(created.id)
        return created

    def open_session(self, user_id: UUID) -> UserSession:
        """Start a session for an existing user."""
        if self.repository.get_user(user_id) is None:
            raise UserNotFoundError(user_id)
        self.repository.touch_last_active(user_id)
        return UserSession(user_id=user_id, opened_at=datetime.now(tz=UTC))

    def get_user(self, user_id: UUID) -> UserRecord:
        """Return a user or raise when unknown."""
        user = self.repository.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def update_user(
        self, session: UserSession, changes: Mapping[str, object]
    ) -> UserRecord:
        """Apply personal-detail changes to the session user's record."""
        unknown = set(changes) - EDITABLE_USER_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be changed: {', '.join(sorted(unknown))}")
        current = self.get_user(session.user_id)
        updated = replace(current, **changes, updated_at=datetime.now(tz=UTC))
        self.repository.save_user(updated)
        _logger.info(
            "Updated user: user_id=%s fields=%s", session.user_id, sorted(changes)
        )
        return updated
