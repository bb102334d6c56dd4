"""Supabase implementation for food entries."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from pet_food_tracker.domain.food import DryFoodEntry, FoodEntry, FoodType, WetFoodEntry
from pet_food_tracker.domain.units import MassUnit
from pet_food_tracker.services.food import FoodRepository

# Domain field name -> food_entries column, per food type.
_DRY_COLUMNS = {"daily_amount_unit": "dry_daily_amount_unit"}
_WET_COLUMNS = {
    "weight_unit": "wet_weight_unit",
    "daily_amount_unit": "wet_daily_amount_unit",
}


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for pet food entries."""

    client: Client

    def pet_exists(self, pet_id: UUID) -> bool:
        """Return True when an active pet with this id exists."""
        response = (
            self.client.table("pets")
            .select("id")
            .eq("id", str(pet_id))
            .eq("is_active", True)
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def create_entry(
        self, pet_id: UUID, food_type: FoodType, fields: dict[str, object]
    ) -> FoodEntry:
        """Create an active food entry and return it."""
        response = (
            self.client.table("food_entries")
            .insert(
                {
                    "pet_id": str(pet_id),
                    "food_type": str(food_type),
                    "is_active": True,
                    **_to_columns(food_type, fields),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food entry")
        return _parse_entry(response.data[0])

    def get_entry(self, pet_id: UUID, food_id: UUID) -> FoodEntry | None:
        """Return a pet's food entry by id, if present."""
        response = (
            self.client.table("food_entries")
            .select("*")
            .eq("id", str(food_id))
            .eq("pet_id", str(pet_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def list_entries(
        self,
        pet_id: UUID,
        food_type: FoodType | None = None,
        is_active: bool | None = None,
    ) -> list[FoodEntry]:
        """Return a pet's entries, newest first."""
        query = self.client.table("food_entries").select("*").eq("pet_id", str(pet_id))
        if food_type is not None:
            query = query.eq("food_type", str(food_type))
        if is_active is not None:
            query = query.eq("is_active", is_active)
        response = query.order("created_at", desc=True).execute()
        return [_parse_entry(row) for row in response.data or []]

    def list_finished_entries(
        self, pet_id: UUID, food_type: FoodType | None, limit: int | None
    ) -> list[FoodEntry]:
        """Return finished entries, most recently updated first."""
        query = (
            self.client.table("food_entries")
            .select("*")
            .eq("pet_id", str(pet_id))
            .eq("is_active", False)
        )
        if food_type is not None:
            query = query.eq("food_type", str(food_type))
        query = query.order("updated_at", desc=True)
        if limit is not None:
            query = query.limit(limit)
        response = query.execute()
        return [_parse_entry(row) for row in response.data or []]

    def update_entry(self, food_id: UUID, fields: dict[str, object]) -> FoodEntry:
        """Update source fields of an entry and return it."""
        existing = (
            self.client.table("food_entries")
            .select("food_type")
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not existing.data:
            raise RuntimeError("Failed to update food entry")
        food_type = FoodType(existing.data[0]["food_type"])
        payload = _to_columns(food_type, fields)
        if "date_finished" in fields:
            payload["is_active"] = fields["date_finished"] is None
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("food_entries")
            .update(payload)
            .eq("id", str(food_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update food entry")
        return _parse_entry(response.data[0])

    def delete_entries(self, food_ids: list[UUID]) -> None:
        """Delete entries by id."""
        if not food_ids:
            return
        self.client.table("food_entries").delete().in_(
            "id", [str(food_id) for food_id in food_ids]
        ).execute()


def _to_columns(food_type: FoodType, fields: dict[str, object]) -> dict[str, object]:
    """Map domain field names and values to food_entries columns."""
    renames = _DRY_COLUMNS if food_type is FoodType.DRY else _WET_COLUMNS
    row: dict[str, object] = {}
    for key, value in fields.items():
        if isinstance(value, date):
            value = value.isoformat()  # noqa: PLW2901
        elif isinstance(value, MassUnit):
            value = str(value)  # noqa: PLW2901
        row[renames.get(key, key)] = value
    return row


def _parse_entry(row: dict[str, object]) -> FoodEntry:
    """Parse a food_entries row into a dry or wet domain model."""
    common = {
        "id": UUID(str(row["id"])),
        "pet_id": UUID(str(row["pet_id"])),
        "brand_name": row.get("brand_name"),
        "product_name": row.get("product_name"),
        "daily_amount": str(row.get("daily_amount", "")),
        "date_started": date.fromisoformat(str(row["date_started"])),
        "date_finished": _parse_date(row.get("date_finished")),
        "created_at": _parse_datetime(row.get("created_at")),
        "updated_at": _parse_datetime(row.get("updated_at")),
    }
    if row.get("food_type") == FoodType.DRY:
        return DryFoodEntry(
            **common,
            bag_weight=str(row.get("bag_weight", "")),
            bag_weight_unit=MassUnit(str(row["bag_weight_unit"])),
            daily_amount_unit=MassUnit(
                str(row.get("dry_daily_amount_unit") or MassUnit.GRAMS)
            ),
        )
    return WetFoodEntry(
        **common,
        number_of_units=int(row.get("number_of_units") or 0),
        weight_per_unit=str(row.get("weight_per_unit", "")),
        weight_unit=MassUnit(str(row["wet_weight_unit"])),
        daily_amount_unit=MassUnit(str(row["wet_daily_amount_unit"])),
    )


def _parse_date(raw: object) -> date | None:
    if isinstance(raw, str) and raw:
        return date.fromisoformat(raw[:10])
    return None


def _parse_datetime(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None
