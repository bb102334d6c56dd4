"""Tests for the Supabase food repository."""

from dataclasses import dataclass, field
from datetime import date
from uuid import uuid4

from pet_food_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from pet_food_tracker.domain.food import DryFoodEntry, FoodType, WetFoodEntry
from pet_food_tracker.domain.units import MassUnit


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None
    last_limit: int | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def in_(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, count: int) -> "FakeTable":
        self.last_limit = count
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _dry_row(**overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": str(uuid4()),
        "pet_id": str(uuid4()),
        "food_type": "dry",
        "brand_name": "Acme",
        "product_name": None,
        "bag_weight": "2.00",
        "bag_weight_unit": "kg",
        "dry_daily_amount_unit": "grams",
        "number_of_units": None,
        "weight_per_unit": None,
        "wet_weight_unit": None,
        "wet_daily_amount_unit": None,
        "daily_amount": "100.00",
        "date_started": "2024-01-01",
        "date_finished": None,
        "is_active": True,
        "created_at": "2024-01-01T08:00:00+00:00",
        "updated_at": "2024-01-01T08:00:00+00:00",
    }
    row.update(overrides)
    return row


def _wet_row(**overrides: object) -> dict[str, object]:
    row = _dry_row(
        food_type="wet",
        bag_weight=None,
        bag_weight_unit=None,
        dry_daily_amount_unit=None,
        number_of_units=12,
        weight_per_unit="85.00",
        wet_weight_unit="grams",
        wet_daily_amount_unit="oz",
        daily_amount="6",
    )
    row.update(overrides)
    return row


def test_pet_exists_checks_active_pets() -> None:
    client = FakeSupabaseClient()
    pets_table = client.table("pets")
    pets_table.queue("select", [{"id": str(uuid4())}])

    repository = SupabaseFoodRepository(client)

    assert repository.pet_exists(uuid4())
    assert not repository.pet_exists(uuid4())
    assert ("is_active", True) in pets_table.last_filters


def test_create_entry_maps_columns() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_entries")
    table.queue("insert", [_wet_row()])

    repository = SupabaseFoodRepository(client)
    pet_id = uuid4()
    entry = repository.create_entry(
        pet_id,
        FoodType.WET,
        {
            "number_of_units": 12,
            "weight_per_unit": "85",
            "weight_unit": MassUnit.GRAMS,
            "daily_amount": "6",
            "daily_amount_unit": MassUnit.OZ,
            "date_started": date(2024, 1, 1),
            "brand_name": None,
        },
    )

    assert isinstance(entry, WetFoodEntry)
    assert entry.number_of_units == 12
    assert entry.daily_amount_unit is MassUnit.OZ
    assert table.last_payload == {
        "pet_id": str(pet_id),
        "food_type": "wet",
        "is_active": True,
        "number_of_units": 12,
        "weight_per_unit": "85",
        "wet_weight_unit": "grams",
        "daily_amount": "6",
        "wet_daily_amount_unit": "oz",
        "date_started": "2024-01-01",
        "brand_name": None,
    }


def test_get_entry_parses_dry_row() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_entries")
    table.queue("select", [_dry_row(date_finished="2024-01-20", is_active=False)])

    repository = SupabaseFoodRepository(client)
    entry = repository.get_entry(uuid4(), uuid4())

    assert isinstance(entry, DryFoodEntry)
    assert entry.bag_weight == "2.00"
    assert entry.bag_weight_unit is MassUnit.KG
    assert entry.date_finished == date(2024, 1, 20)
    assert not entry.is_active
    assert entry.updated_at is not None
    assert repository.get_entry(uuid4(), uuid4()) is None


def test_list_finished_entries_orders_by_update() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_entries")
    table.queue("select", [_dry_row(date_finished="2024-01-20", is_active=False)])

    repository = SupabaseFoodRepository(client)
    entries = repository.list_finished_entries(uuid4(), FoodType.DRY, 5)

    assert len(entries) == 1
    assert ("is_active", False) in table.last_filters
    assert ("food_type", "dry") in table.last_filters
    assert table.last_order == ("updated_at", True)
    assert table.last_limit == 5


def test_update_entry_flags_finished_rows() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_entries")
    table.queue("select", [{"food_type": "dry"}])
    table.queue("update", [_dry_row(date_finished="2024-01-20", is_active=False)])

    repository = SupabaseFoodRepository(client)
    entry = repository.update_entry(uuid4(), {"date_finished": date(2024, 1, 20)})

    assert entry.date_finished == date(2024, 1, 20)
    assert isinstance(table.last_payload, dict)
    assert table.last_payload["date_finished"] == "2024-01-20"
    assert table.last_payload["is_active"] is False
    assert "updated_at" in table.last_payload


def test_update_entry_renames_dry_unit_column() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_entries")
    table.queue("select", [{"food_type": "dry"}])
    table.queue("update", [_dry_row()])

    repository = SupabaseFoodRepository(client)
    repository.update_entry(uuid4(), {"daily_amount_unit": MassUnit.GRAMS})

    assert isinstance(table.last_payload, dict)
    assert table.last_payload["dry_daily_amount_unit"] == "grams"
    assert "is_active" not in table.last_payload


def test_delete_entries_filters_by_ids() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_entries")
    food_ids = [uuid4(), uuid4()]

    repository = SupabaseFoodRepository(client)
    repository.delete_entries(food_ids)

    assert ("id", [str(food_id) for food_id in food_ids]) in table.last_filters
