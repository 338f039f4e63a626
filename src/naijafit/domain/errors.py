"""Error taxonomy for the stats core."""

from uuid import UUID


class NaijaFitError(Exception):
    """Base class for application errors."""


class UserNotFoundError(NaijaFitError):
    """Raised when no initialized record exists for a user."""

    def __init__(self, user_id: UUID) -> None:
        super().__init__(f"No record for user {user_id}")
        self.user_id = user_id


class DuplicateUserError(NaijaFitError):
    """Raised when a user or stats record is created twice."""

    def __init__(self, key: object) -> None:
        super().__init__(f"Record already exists for {key}")
        self.key = key


class StorageError(NaijaFitError):
    """Raised by persistence adapters when a read or write fails."""


class InvalidImportError(NaijaFitError):
    """Raised when an import document cannot be parsed."""


class ForeignRecordError(NaijaFitError):
    """Raised when a request carries records owned by a different user."""

    def __init__(self, owner_id: UUID, user_id: UUID) -> None:
        super().__init__(f"Record for user {owner_id} cannot be written by {user_id}")
        self.owner_id = owner_id
        self.user_id = user_id
