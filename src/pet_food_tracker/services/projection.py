"""Supply projection for active food entries.

All functions are pure: the caller supplies "today" when it needs a stable
result, and nothing is cached between calls.
"""

import math
from datetime import date, timedelta

from pet_food_tracker.domain.errors import InvalidQuantityError, InvalidRateError
from pet_food_tracker.domain.food import (
    FoodEntry,
    SupplyProjection,
    entry_daily_rate,
    entry_supply,
)
from pet_food_tracker.domain.units import MassUnit, from_grams, to_grams

# Quotients are rounded to this many places before taking a ceiling.
_DAY_PRECISION = 6


def ceil_days(grams: float, daily_grams: float) -> int:
    """Return how many whole days ``grams`` lasts at ``daily_grams`` per day.

    A partial day still counts as a day of supply. The quotient is
    rounded to 6 decimal places before the ceiling is taken.
    """
    return math.ceil(round(grams / daily_grams, _DAY_PRECISION))


def project_supply(  # noqa: PLR0913
    total_supply: float,
    supply_unit: MassUnit,
    daily_amount: float,
    daily_unit: MassUnit,
    date_started: date,
    today: date | None = None,
) -> SupplyProjection:
    """Project remaining weight, remaining days and depletion date.

    Args:
        total_supply: Package size in ``supply_unit``
        supply_unit: Unit the package size and remaining weight are shown in
        daily_amount: Declared daily dose in ``daily_unit``
        daily_unit: Unit of the daily dose
        date_started: Day the package was opened
        today: Day to project from (defaults to the current date)

    Returns:
        SupplyProjection with the remaining weight in ``supply_unit``

    Raises:
        InvalidRateError: daily amount is not a positive finite number
        InvalidQuantityError: total supply is not a positive finite number
    """
    if not math.isfinite(daily_amount) or daily_amount <= 0:
        raise InvalidRateError(
            f"Daily amount must be a positive number, got {daily_amount!r}"
        )
    if not math.isfinite(total_supply) or total_supply <= 0:
        raise InvalidQuantityError(
            f"Total supply must be a positive number, got {total_supply!r}"
        )
    today = today or date.today()

    total_grams = to_grams(total_supply, supply_unit)
    daily_grams = to_grams(daily_amount, daily_unit)

    days_since_start = max(0, (today - date_started).days)
    remaining_grams = max(0.0, total_grams - daily_grams * days_since_start)
    # A remainder that rounds to zero days is an empty package.
    if ceil_days(remaining_grams, daily_grams) == 0:
        remaining_grams = 0.0

    return SupplyProjection(
        remaining_weight=from_grams(remaining_grams, supply_unit),
        remaining_weight_unit=MassUnit(supply_unit),
        remaining_days=ceil_days(remaining_grams, daily_grams),
        depletion_date=date_started
        + timedelta(days=ceil_days(total_grams, daily_grams)),
    )


def project_entry(entry: FoodEntry, today: date | None = None) -> SupplyProjection:
    """Project the remaining supply of a dry or wet entry."""
    daily_amount, daily_unit = entry_daily_rate(entry)
    supply, supply_unit = entry_supply(entry)
    return project_supply(
        total_supply=supply,
        supply_unit=supply_unit,
        daily_amount=daily_amount,
        daily_unit=daily_unit,
        date_started=entry.date_started,
        today=today,
    )
