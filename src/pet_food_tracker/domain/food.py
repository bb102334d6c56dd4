"""Domain models for pet food entries and their derived views."""

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import ClassVar, assert_never
from uuid import UUID

from pet_food_tracker.domain.errors import InvalidQuantityError, InvalidRateError
from pet_food_tracker.domain.units import MassUnit


class FoodType(StrEnum):
    """Food category; each category has its own unit system."""

    DRY = "dry"
    WET = "wet"


class FeedingStatus(StrEnum):
    """Classification of actual versus declared daily consumption."""

    OVERFEEDING = "overfeeding"
    SLIGHTLY_OVER = "slightly-over"
    NORMAL = "normal"
    SLIGHTLY_UNDER = "slightly-under"
    UNDERFEEDING = "underfeeding"


@dataclass(frozen=True, kw_only=True)
class _FoodEntryBase:
    id: UUID
    pet_id: UUID
    daily_amount: str
    date_started: date
    brand_name: str | None = None
    product_name: str | None = None
    date_finished: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        """An entry stays active until it has a finish date."""
        return self.date_finished is None


@dataclass(frozen=True, kw_only=True)
class DryFoodEntry(_FoodEntryBase):
    """A bag of dry food measured by bag weight, dosed in grams."""

    food_type: ClassVar[FoodType] = FoodType.DRY

    bag_weight: str
    bag_weight_unit: MassUnit
    daily_amount_unit: MassUnit = MassUnit.GRAMS


@dataclass(frozen=True, kw_only=True)
class WetFoodEntry(_FoodEntryBase):
    """A batch of cans or pouches measured by count and per-unit weight."""

    food_type: ClassVar[FoodType] = FoodType.WET

    number_of_units: int
    weight_per_unit: str
    weight_unit: MassUnit
    daily_amount_unit: MassUnit


FoodEntry = DryFoodEntry | WetFoodEntry


@dataclass(frozen=True)
class SupplyProjection:
    """Remaining supply of an active entry."""

    remaining_weight: float
    remaining_weight_unit: MassUnit
    remaining_days: int
    depletion_date: date


@dataclass(frozen=True)
class ConsumptionSummary:
    """Actual consumption of a finished entry compared to its declared rate."""

    actual_days_elapsed: int
    actual_daily_consumption: float
    expected_daily_consumption: float
    variance_percentage: float
    feeding_status: FeedingStatus


@dataclass(frozen=True)
class FoodEntryView:
    """A food entry together with the view computed for its lifecycle state."""

    entry: FoodEntry
    projection: SupplyProjection | None = None
    consumption: ConsumptionSummary | None = None


def parse_decimal(raw: str | float | int) -> float:
    """Parse a decimal string into a float, returning NaN when unparsable."""
    try:
        return float(raw)
    except (TypeError, ValueError):
        return math.nan


def entry_supply(entry: FoodEntry) -> tuple[float, MassUnit]:
    """Return the package's total supply and the unit it is expressed in."""
    match entry:
        case DryFoodEntry():
            quantity = parse_decimal(entry.bag_weight)
            unit = entry.bag_weight_unit
        case WetFoodEntry():
            quantity = entry.number_of_units * parse_decimal(entry.weight_per_unit)
            unit = entry.weight_unit
        case _:
            assert_never(entry)
    if not math.isfinite(quantity) or quantity <= 0:
        raise InvalidQuantityError(
            f"Total supply must be a positive number, got {quantity!r}"
        )
    return quantity, unit


def entry_daily_rate(entry: FoodEntry) -> tuple[float, MassUnit]:
    """Return the declared daily amount and its unit."""
    match entry:
        case DryFoodEntry() | WetFoodEntry():
            amount = parse_decimal(entry.daily_amount)
            unit = entry.daily_amount_unit
        case _:
            assert_never(entry)
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidRateError(
            f"Daily amount must be a positive number, got {amount!r}"
        )
    return amount, unit
