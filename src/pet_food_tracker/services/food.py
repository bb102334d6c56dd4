"""Food entry lifecycle service."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from pet_food_tracker.domain.errors import FoodEntryNotFoundError, FoodValidationError
from pet_food_tracker.domain.food import (
    DryFoodEntry,
    FoodEntry,
    FoodEntryView,
    FoodType,
)
from pet_food_tracker.services.consumption import reconcile_entry
from pet_food_tracker.services.presentation import DEFAULT_LOW_STOCK_DAYS
from pet_food_tracker.services.projection import project_entry
from pet_food_tracker.services.validation import (
    fields_for,
    validate_dry_food,
    validate_finish_date,
    validate_finished_limit,
    validate_wet_food,
)

_logger = logging.getLogger(__name__)

DEFAULT_FINISHED_RETAINED = 5


class FoodRepository(Protocol):
    """Persistence interface for food entries.

    Only source fields are stored; projections and reconciliations are
    recomputed on every read.
    """

    def pet_exists(self, pet_id: UUID) -> bool:
        """Return True when an active pet with this id exists."""

    def create_entry(
        self, pet_id: UUID, food_type: FoodType, fields: dict[str, object]
    ) -> FoodEntry:
        """Create an active food entry and return it."""

    def get_entry(self, pet_id: UUID, food_id: UUID) -> FoodEntry | None:
        """Return a pet's food entry by id, if present."""

    def list_entries(
        self,
        pet_id: UUID,
        food_type: FoodType | None = None,
        is_active: bool | None = None,
    ) -> list[FoodEntry]:
        """Return a pet's entries, newest first."""

    def list_finished_entries(
        self, pet_id: UUID, food_type: FoodType | None, limit: int | None
    ) -> list[FoodEntry]:
        """Return finished entries, most recently updated first."""

    def update_entry(self, food_id: UUID, fields: dict[str, object]) -> FoodEntry:
        """Update source fields of an entry and return it."""

    def delete_entries(self, food_ids: list[UUID]) -> None:
        """Delete entries by id."""


@dataclass
class FoodService:
    """Application service for food entries and their derived views."""

    repository: FoodRepository
    low_stock_threshold_days: int = DEFAULT_LOW_STOCK_DAYS
    finished_entries_retained: int = DEFAULT_FINISHED_RETAINED

    def __post_init__(self) -> None:
        if self.finished_entries_retained < 1:
            raise ValueError("finished_entries_retained must be at least 1")
        if self.low_stock_threshold_days < 0:
            raise ValueError("low_stock_threshold_days must not be negative")

    def create_dry_entry(
        self, pet_id: UUID, payload: dict[str, object], today: date | None = None
    ) -> FoodEntryView:
        """Validate and create an active dry food entry."""
        fields = validate_dry_food(payload, today=today)
        return self._create(pet_id, FoodType.DRY, fields, today)

    def create_wet_entry(
        self, pet_id: UUID, payload: dict[str, object], today: date | None = None
    ) -> FoodEntryView:
        """Validate and create an active wet food entry."""
        fields = validate_wet_food(payload, today=today)
        return self._create(pet_id, FoodType.WET, fields, today)

    def list_entries(
        self,
        pet_id: UUID,
        food_type: FoodType | None = None,
        active_only: bool = False,
        today: date | None = None,
    ) -> list[FoodEntryView]:
        """Return a pet's entries with freshly computed views."""
        self._require_pet(pet_id)
        entries = self.repository.list_entries(
            pet_id, food_type, is_active=True if active_only else None
        )
        return [self.build_view(entry, today) for entry in entries]

    def list_finished(
        self,
        pet_id: UUID,
        food_type: FoodType | None = None,
        limit: int = DEFAULT_FINISHED_RETAINED,
    ) -> list[FoodEntryView]:
        """Return the most recently finished entries with reconciliations."""
        validate_finished_limit(limit)
        self._require_pet(pet_id)
        entries = self.repository.list_finished_entries(pet_id, food_type, limit)
        return [self.build_view(entry) for entry in entries]

    def get_entry(
        self, pet_id: UUID, food_id: UUID, today: date | None = None
    ) -> FoodEntryView:
        """Return a single entry with its view."""
        self._require_pet(pet_id)
        return self.build_view(self._require_entry(pet_id, food_id), today)

    def update_entry(
        self,
        pet_id: UUID,
        food_id: UUID,
        changes: dict[str, object],
        today: date | None = None,
    ) -> FoodEntryView:
        """Apply a partial update to an active entry."""
        self._require_pet(pet_id)
        entry = self._require_entry(pet_id, food_id)
        if not entry.is_active:
            raise FoodEntryNotFoundError("Active food entry not found")
        accepted = {
            key: value
            for key, value in changes.items()
            if key in fields_for(entry.food_type)
        }
        if not accepted:
            raise FoodValidationError("At least one field must be provided for update")

        merged = {**_source_fields(entry), **accepted}
        if isinstance(entry, DryFoodEntry):
            cleaned = validate_dry_food(merged, today=today)
        else:
            cleaned = validate_wet_food(merged, today=today)
        updated = self.repository.update_entry(
            food_id, {key: cleaned[key] for key in accepted}
        )
        _logger.info(
            "Food entry updated: food_id=%s fields=%s", food_id, sorted(accepted)
        )
        return self.build_view(updated, today)

    def delete_entry(self, pet_id: UUID, food_id: UUID) -> None:
        """Delete an entry regardless of its state."""
        self._require_pet(pet_id)
        self._require_entry(pet_id, food_id)
        self.repository.delete_entries([food_id])
        _logger.info("Food entry deleted: food_id=%s", food_id)

    def mark_finished(
        self, pet_id: UUID, food_id: UUID, finished_on: date | str | None = None
    ) -> FoodEntryView:
        """Finish an active entry and reconcile its consumption."""
        self._require_pet(pet_id)
        entry = self._require_entry(pet_id, food_id)
        if not entry.is_active:
            raise FoodEntryNotFoundError("Active food entry not found")
        date_finished = validate_finish_date(
            finished_on or date.today(), entry.date_started
        )
        updated = self.repository.update_entry(
            food_id, {"date_finished": date_finished}
        )
        _logger.info(
            "Food entry finished: food_id=%s date_finished=%s",
            food_id,
            date_finished.isoformat(),
        )
        self._prune_finished(pet_id, entry.food_type)
        return self.build_view(updated)

    def update_finish_date(
        self,
        pet_id: UUID,
        food_id: UUID,
        date_finished: date | str,
        today: date | None = None,
    ) -> FoodEntryView:
        """Correct the finish date of a finished entry."""
        self._require_pet(pet_id)
        entry = self._require_entry(pet_id, food_id)
        if entry.is_active:
            raise FoodValidationError(
                "Only finished food entries can have their finish date changed"
            )
        corrected = validate_finish_date(date_finished, entry.date_started, today)
        updated = self.repository.update_entry(food_id, {"date_finished": corrected})
        _logger.info(
            "Food entry finish date changed: food_id=%s date_finished=%s",
            food_id,
            corrected.isoformat(),
        )
        return self.build_view(updated)

    def build_view(self, entry: FoodEntry, today: date | None = None) -> FoodEntryView:
        """Compute the projection or reconciliation for an entry's state."""
        if entry.is_active:
            return FoodEntryView(entry=entry, projection=project_entry(entry, today))
        return FoodEntryView(entry=entry, consumption=reconcile_entry(entry))

    def _create(
        self,
        pet_id: UUID,
        food_type: FoodType,
        fields: dict[str, object],
        today: date | None,
    ) -> FoodEntryView:
        self._require_pet(pet_id)
        if self.repository.list_entries(pet_id, food_type, is_active=True):
            raise FoodValidationError(
                f"You already have an active {food_type} food entry. "
                "Finish or delete it before adding a new one."
            )
        entry = self.repository.create_entry(pet_id, food_type, fields)
        _logger.info(
            "Food entry created: pet_id=%s food_id=%s type=%s",
            pet_id,
            entry.id,
            food_type,
        )
        return self.build_view(entry, today)

    def _prune_finished(self, pet_id: UUID, food_type: FoodType) -> None:
        finished = self.repository.list_finished_entries(pet_id, food_type, None)
        stale = [entry.id for entry in finished[self.finished_entries_retained :]]
        if not stale:
            return
        self.repository.delete_entries(stale)
        _logger.info(
            "Pruned finished food entries: pet_id=%s type=%s count=%s",
            pet_id,
            food_type,
            len(stale),
        )

    def _require_pet(self, pet_id: UUID) -> None:
        if not self.repository.pet_exists(pet_id):
            raise FoodEntryNotFoundError("Pet not found")

    def _require_entry(self, pet_id: UUID, food_id: UUID) -> FoodEntry:
        entry = self.repository.get_entry(pet_id, food_id)
        if entry is None:
            raise FoodEntryNotFoundError("Food entry not found")
        return entry


def _source_fields(entry: FoodEntry) -> dict[str, object]:
    """Return the editable source fields of an entry as a payload."""
    fields: dict[str, object] = {
        "brand_name": entry.brand_name,
        "product_name": entry.product_name,
        "daily_amount": entry.daily_amount,
        "daily_amount_unit": entry.daily_amount_unit,
        "date_started": entry.date_started,
    }
    if isinstance(entry, DryFoodEntry):
        fields["bag_weight"] = entry.bag_weight
        fields["bag_weight_unit"] = entry.bag_weight_unit
    else:
        fields["number_of_units"] = entry.number_of_units
        fields["weight_per_unit"] = entry.weight_per_unit
        fields["weight_unit"] = entry.weight_unit
    return fields
