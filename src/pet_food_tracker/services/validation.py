"""Validation of food entry payloads before they reach the engine."""

import math
from datetime import date

from pet_food_tracker.domain.errors import FoodValidationError
from pet_food_tracker.domain.food import FoodType, parse_decimal
from pet_food_tracker.domain.units import MassUnit, to_grams

MAX_NAME_LENGTH = 100
MAX_FINISHED_LIMIT = 100
MAX_NUMBER_OF_UNITS = 100

DRY_BAG_UNITS = frozenset({MassUnit.KG, MassUnit.POUNDS})
DRY_DAILY_UNITS = frozenset({MassUnit.GRAMS})
WET_UNITS = frozenset({MassUnit.GRAMS, MassUnit.OZ})

MAX_BAG_WEIGHT = {MassUnit.KG: 50.0, MassUnit.POUNDS: 110.0}
MAX_WEIGHT_PER_UNIT = {MassUnit.GRAMS: 5000.0, MassUnit.OZ: 176.0}
MAX_DAILY_AMOUNT = {MassUnit.GRAMS: 2000.0, MassUnit.OZ: 70.0}

COMMON_FIELDS = ("brand_name", "product_name", "daily_amount", "date_started")
DRY_FIELDS = (*COMMON_FIELDS, "bag_weight", "bag_weight_unit", "daily_amount_unit")
WET_FIELDS = (
    *COMMON_FIELDS,
    "number_of_units",
    "weight_per_unit",
    "weight_unit",
    "daily_amount_unit",
)


def fields_for(food_type: FoodType) -> tuple[str, ...]:
    """Return the payload keys accepted for a food type."""
    return DRY_FIELDS if food_type is FoodType.DRY else WET_FIELDS


def validate_dry_food(
    payload: dict[str, object], today: date | None = None
) -> dict[str, object]:
    """Validate a complete dry food payload and return normalized fields."""
    required = ("bag_weight", "bag_weight_unit", "daily_amount", "date_started")
    if any(_is_blank(payload.get(key)) for key in required):
        raise FoodValidationError(
            "Bag weight, bag weight unit, daily amount, and start date "
            "are required for dry food"
        )
    bag_unit = _parse_unit(
        payload["bag_weight_unit"],
        DRY_BAG_UNITS,
        "Invalid bag weight unit for dry food. Must be kg or pounds",
    )
    daily_unit = _parse_unit(
        payload.get("daily_amount_unit") or MassUnit.GRAMS,
        DRY_DAILY_UNITS,
        "Invalid daily amount unit for dry food. Must be grams",
    )
    bag_weight = _parse_positive(
        payload["bag_weight"], "Bag weight must be a positive number"
    )
    if bag_weight > MAX_BAG_WEIGHT[bag_unit]:
        raise FoodValidationError(
            "Bag weight seems unreasonably large "
            f"(max {MAX_BAG_WEIGHT[bag_unit]:g} {bag_unit})"
        )
    daily_amount = _parse_daily_amount(payload["daily_amount"], daily_unit)
    if to_grams(daily_amount, daily_unit) > to_grams(bag_weight, bag_unit):
        raise FoodValidationError("Daily amount cannot exceed the bag weight")

    return {
        **_validate_common(payload, today),
        "bag_weight": str(payload["bag_weight"]).strip(),
        "bag_weight_unit": bag_unit,
        "daily_amount_unit": daily_unit,
    }


def validate_wet_food(
    payload: dict[str, object], today: date | None = None
) -> dict[str, object]:
    """Validate a complete wet food payload and return normalized fields."""
    required = (
        "number_of_units",
        "weight_per_unit",
        "weight_unit",
        "daily_amount",
        "daily_amount_unit",
        "date_started",
    )
    if any(_is_blank(payload.get(key)) for key in required):
        raise FoodValidationError(
            "Number of units, weight per unit, weight unit, daily amount, "
            "daily amount unit, and start date are required for wet food"
        )
    weight_unit = _parse_unit(
        payload["weight_unit"],
        WET_UNITS,
        "Invalid weight unit for wet food. Must be grams or oz",
    )
    daily_unit = _parse_unit(
        payload["daily_amount_unit"],
        WET_UNITS,
        "Invalid daily amount unit for wet food. Must be grams or oz",
    )
    number_of_units = _parse_units_count(payload["number_of_units"])
    weight_per_unit = _parse_positive(
        payload["weight_per_unit"], "Weight per unit must be a positive number"
    )
    if weight_per_unit > MAX_WEIGHT_PER_UNIT[weight_unit]:
        raise FoodValidationError(
            "Weight per unit seems unreasonably large "
            f"(max {MAX_WEIGHT_PER_UNIT[weight_unit]:g} {weight_unit})"
        )
    daily_amount = _parse_daily_amount(payload["daily_amount"], daily_unit)
    total_grams = to_grams(number_of_units * weight_per_unit, weight_unit)
    if to_grams(daily_amount, daily_unit) > total_grams:
        raise FoodValidationError("Daily amount cannot exceed the total food supply")

    return {
        **_validate_common(payload, today),
        "number_of_units": number_of_units,
        "weight_per_unit": str(payload["weight_per_unit"]).strip(),
        "weight_unit": weight_unit,
        "daily_amount_unit": daily_unit,
    }


def validate_finish_date(
    raw: object, date_started: date, today: date | None = None
) -> date:
    """Validate a finish date against the entry's start date."""
    finished = _parse_date(raw, "Invalid date format for finish date")
    if finished < date_started:
        raise FoodValidationError("Finish date cannot be before the start date")
    if finished > (today or date.today()):
        raise FoodValidationError("Finish date cannot be in the future")
    return finished


def validate_finished_limit(limit: int) -> int:
    """Validate the page size for finished entry listings."""
    if limit <= 0 or limit > MAX_FINISHED_LIMIT:
        raise FoodValidationError(f"Limit must be between 1 and {MAX_FINISHED_LIMIT}")
    return limit


def _validate_common(
    payload: dict[str, object], today: date | None
) -> dict[str, object]:
    date_started = _parse_date(
        payload["date_started"], "Invalid date format for start date"
    )
    if date_started > (today or date.today()):
        raise FoodValidationError("Start date cannot be in the future")
    cleaned: dict[str, object] = {
        "daily_amount": str(payload["daily_amount"]).strip(),
        "date_started": date_started,
    }
    for key, label in (("brand_name", "Brand name"), ("product_name", "Product name")):
        value = payload.get(key)
        if value is None:
            cleaned[key] = None
            continue
        if len(str(value)) > MAX_NAME_LENGTH:
            raise FoodValidationError(
                f"{label} must be {MAX_NAME_LENGTH} characters or less"
            )
        # Empty names are stored as NULL.
        cleaned[key] = str(value).strip() or None
    return cleaned


def _parse_daily_amount(raw: object, unit: MassUnit) -> float:
    amount = _parse_positive(raw, "Daily amount must be a positive number")
    if amount > MAX_DAILY_AMOUNT[unit]:
        raise FoodValidationError(
            "Daily amount seems unreasonably large "
            f"(max {MAX_DAILY_AMOUNT[unit]:g} {unit})"
        )
    return amount


def _parse_units_count(raw: object) -> int:
    message = "Number of units must be a positive integer"
    if isinstance(raw, bool):
        raise FoodValidationError(message)
    try:
        count = int(str(raw).strip())
    except ValueError as exc:
        raise FoodValidationError(message) from exc
    if count <= 0:
        raise FoodValidationError(message)
    if count > MAX_NUMBER_OF_UNITS:
        raise FoodValidationError(
            f"Number of units seems unreasonably large (max {MAX_NUMBER_OF_UNITS})"
        )
    return count


def _parse_positive(raw: object, message: str) -> float:
    value = parse_decimal(raw)  # type: ignore[arg-type]
    if not math.isfinite(value) or value <= 0:
        raise FoodValidationError(message)
    return value


def _parse_unit(raw: object, allowed: frozenset[MassUnit], message: str) -> MassUnit:
    try:
        unit = MassUnit(str(raw))
    except ValueError as exc:
        raise FoodValidationError(message) from exc
    if unit not in allowed:
        raise FoodValidationError(message)
    return unit


def _parse_date(raw: object, message: str) -> date:
    if isinstance(raw, date):
        return raw
    try:
        return date.fromisoformat(str(raw))
    except ValueError as exc:
        raise FoodValidationError(message) from exc


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
