"""Export and import of a user's data as a JSON document."""

import json
import logging
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID

from naijafit.domain.codec import (
    meal_from_dict,
    meal_to_dict,
    profile_from_dict,
    profile_to_dict,
    stats_from_dict,
    stats_to_dict,
    user_from_dict,
    user_to_dict,
)
from naijafit.domain.errors import ForeignRecordError, InvalidImportError
from naijafit.domain.meals import Meal, build_meal
from naijafit.domain.models import UserRecord
from naijafit.domain.profiles import UserProfile
from naijafit.domain.sessions import UserSession
from naijafit.domain.stats import WeightSample
from naijafit.services.locks import UserLocks
from naijafit.services.meals import MealRepository
from naijafit.services.profiles import ProfileRepository
from naijafit.services.stats import StatsService
from naijafit.services.users import UserRepository

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportSummary:
    """Counts of records written by an import."""

    users: int
    meals_added: int
    meals_skipped: int
    profiles: int
    weights_added: int


@dataclass(frozen=True)
class _ImportDocument:
    user: UserRecord | None
    meals: list[Meal]
    profile: UserProfile | None
    weights: tuple[WeightSample, ...]
    owners: set[UUID]


@dataclass
class DataExportService:
    """Moves a user's records in and out of a portable document."""

    user_repository: UserRepository
    meal_repository: MealRepository
    profile_repository: ProfileRepository
    stats_service: StatsService
    locks: UserLocks = field(default_factory=UserLocks)

    def export_user_data(self, session: UserSession) -> str:
        """Return the session user's records as pretty-printed JSON."""
        user = self.user_repository.get_user(session.user_id)
        meals = self.meal_repository.get_user_meals(session.user_id)
        profile = self.profile_repository.get_profile(session.user_id)
        stats = self.stats_service.repository.get_stats(session.user_id)
        document = {
            "user": user_to_dict(user) if user else None,
            "meals": [meal_to_dict(meal) for meal in meals],
            "profile": profile_to_dict(profile) if profile else None,
            "stats": stats_to_dict(stats) if stats else None,
            "exportDate": datetime.now(tz=UTC).isoformat(),
        }
        return json.dumps(document, indent=2)

    def import_user_data(self, session: UserSession, payload: str) -> ImportSummary:
        """Merge an exported document into the session user's data.

        Every record in the document must belong to the session user. Meals
        whose id already exists are skipped; new meals are rebuilt so their
        totals match their foods. Personal details and the profile replace the
        stored ones. Stats are never taken from the document: weight samples
        for new days are recorded and the rest is recomputed from the merged
        meal log.
        """
        document = _parse(payload)
        foreign = document.owners - {session.user_id}
        if foreign:
            raise ForeignRecordError(foreign.pop(), session.user_id)

        with self.locks.hold(session.user_id):
            if document.user is not None:
                self._merge_user(document.user)
            added = self._merge_meals(document.meals)
            if document.profile is not None:
                self.profile_repository.save_profile(document.profile)
            weights_added = self._merge_stats(session.user_id, document.weights)

        _logger.info(
            "Imported data: user_id=%s meals_added=%s", session.user_id, added
        )
        return ImportSummary(
            users=1 if document.user else 0,
            meals_added=added,
            meals_skipped=len(document.meals) - added,
            profiles=1 if document.profile else 0,
            weights_added=weights_added,
        )

    def _merge_user(self, imported: UserRecord) -> None:
        current = self.user_repository.get_user(imported.id)
        if current is not None:
            # Email and account timestamps are owned by the stored account.
            imported = replace(
                imported,
                email=current.email,
                created_at=current.created_at,
                last_active_at=current.last_active_at,
            )
        self.user_repository.save_user(imported)

    def _merge_meals(self, meals: list[Meal]) -> int:
        existing_ids: set[UUID] = set()
        for user_id in {meal.user_id for meal in meals}:
            existing_ids.update(
                meal.id for meal in self.meal_repository.get_user_meals(user_id)
            )
        added = 0
        for meal in meals:
            if meal.id in existing_ids:
                continue
            self.meal_repository.insert_meal(meal)
            existing_ids.add(meal.id)
            added += 1
        return added

    def _merge_stats(self, user_id: UUID, weights: tuple[WeightSample, ...]) -> int:
        if self.stats_service.repository.get_stats(user_id) is None:
            self.stats_service.initialize(user_id)
        known_days = {
            sample.date
            for sample in self.stats_service.get_stats(user_id).weight_progress
        }
        added = 0
        for sample in weights:
            if sample.date in known_days:
                continue
            self.stats_service.record_weight(user_id, sample.date, sample.weight)
            known_days.add(sample.date)
            added += 1
        self.stats_service.recompute_full(user_id)
        return added


def _parse(payload: str) -> _ImportDocument:
    try:
        document = json.loads(payload)
        if not isinstance(document, dict):
            raise InvalidImportError("Import document must be an object")
        user = user_from_dict(document["user"]) if document.get("user") else None
        meals = [_rebuild(meal_from_dict(raw)) for raw in document.get("meals") or []]
        profile = (
            profile_from_dict(document["profile"]) if document.get("profile") else None
        )
        stats = stats_from_dict(document["stats"]) if document.get("stats") else None
    except (ValueError, KeyError, TypeError) as exc:
        raise InvalidImportError("Invalid data format") from exc

    owners = {meal.user_id for meal in meals}
    if user is not None:
        owners.add(user.id)
    if profile is not None:
        owners.add(profile.user_id)
    if stats is not None:
        owners.add(stats.user_id)
    return _ImportDocument(
        user=user,
        meals=meals,
        profile=profile,
        weights=stats.weight_progress if stats else (),
        owners=owners,
    )


def _rebuild(meal: Meal) -> Meal:
    # Totals in a document are not trusted; they are derived from the foods.
    return build_meal(
        user_id=meal.user_id,
        meal_type=meal.type,
        day=meal.date,
        time=meal.time,
        foods=meal.foods,
        mood=meal.mood,
        notes=meal.notes,
        meal_id=meal.id,
        created_at=meal.created_at,
    )
