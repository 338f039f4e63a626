"""Domain models for registered users."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class Gender(Enum):
    """Self-reported gender."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


@dataclass(frozen=True)
class UserRecord:
    """Represents a registered user and their personal details."""

    id: UUID
    email: str
    full_name: str
    weight: float | None
    created_at: datetime
    last_active_at: datetime | None = None
    age: int | None = None
    gender: Gender | None = None
    height: float | None = None
    location: str | None = None
    occupation: str | None = None
    health_conditions: tuple[str, ...] = ()
    fitness_goals: tuple[str, ...] = ()
    updated_at: datetime | None = None


# Fields a user may change on their own record; email and id stay fixed.
EDITABLE_USER_FIELDS = frozenset(
    {
        "full_name",
        "weight",
        "age",
        "gender",
        "height",
        "location",
        "occupation",
        "health_conditions",
        "fitness_goals",
    }
)
