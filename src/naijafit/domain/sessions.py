"""Session domain models."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserSession:
    """Explicit per-request context identifying the acting user."""

    user_id: UUID
    opened_at: datetime
