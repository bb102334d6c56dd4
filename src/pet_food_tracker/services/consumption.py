"""Consumption reconciliation for finished food entries."""

import math
from datetime import date

from pet_food_tracker.domain.errors import (
    InvalidDateRangeError,
    InvalidQuantityError,
    InvalidRateError,
)
from pet_food_tracker.domain.food import (
    ConsumptionSummary,
    FeedingStatus,
    FoodEntry,
    entry_daily_rate,
    entry_supply,
)
from pet_food_tracker.domain.units import MassUnit, to_grams

OVERFEEDING_THRESHOLD = 10.0
SLIGHT_VARIANCE_THRESHOLD = 5.0


def classify_feeding_status(variance_percentage: float) -> FeedingStatus:
    """Map a signed variance percentage to a feeding status.

    Boundaries are strict: exactly 10% is slightly over, exactly 5% is normal.
    """
    if variance_percentage > OVERFEEDING_THRESHOLD:
        return FeedingStatus.OVERFEEDING
    if variance_percentage > SLIGHT_VARIANCE_THRESHOLD:
        return FeedingStatus.SLIGHTLY_OVER
    if variance_percentage < -OVERFEEDING_THRESHOLD:
        return FeedingStatus.UNDERFEEDING
    if variance_percentage < -SLIGHT_VARIANCE_THRESHOLD:
        return FeedingStatus.SLIGHTLY_UNDER
    return FeedingStatus.NORMAL


def reconcile_consumption(  # noqa: PLR0913
    total_supply: float,
    supply_unit: MassUnit,
    daily_amount: float,
    daily_unit: MassUnit,
    date_started: date,
    date_finished: date,
) -> ConsumptionSummary:
    """Compare actual daily consumption of a finished package to its declared rate.

    Args:
        total_supply: Package size in ``supply_unit``
        supply_unit: Unit of the package size
        daily_amount: Declared daily dose in ``daily_unit``
        daily_unit: Unit of the daily dose
        date_started: Day the package was opened
        date_finished: Day the package ran out

    Returns:
        A complete ConsumptionSummary; consumption and variance figures are
        rounded to 2 decimals, the status is classified before rounding.

    Raises:
        InvalidDateRangeError: finish date precedes start date
        InvalidRateError: daily amount is not a positive finite number
        InvalidQuantityError: total supply is not a positive finite number
    """
    if date_finished < date_started:
        raise InvalidDateRangeError(
            f"Finish date {date_finished} is before start date {date_started}"
        )
    if not math.isfinite(daily_amount) or daily_amount <= 0:
        raise InvalidRateError(
            f"Daily amount must be a positive number, got {daily_amount!r}"
        )
    if not math.isfinite(total_supply) or total_supply <= 0:
        raise InvalidQuantityError(
            f"Total supply must be a positive number, got {total_supply!r}"
        )

    # Same-day finishes count as one day.
    actual_days_elapsed = max(1, (date_finished - date_started).days)
    total_grams = to_grams(total_supply, supply_unit)
    expected = to_grams(daily_amount, daily_unit)
    actual = total_grams / actual_days_elapsed
    variance = (actual - expected) / expected * 100

    return ConsumptionSummary(
        actual_days_elapsed=actual_days_elapsed,
        actual_daily_consumption=round(actual, 2),
        expected_daily_consumption=round(expected, 2),
        variance_percentage=round(variance, 2) + 0.0,
        feeding_status=classify_feeding_status(variance),
    )


def reconcile_entry(entry: FoodEntry) -> ConsumptionSummary:
    """Reconcile a finished dry or wet entry."""
    if entry.date_finished is None:
        raise InvalidDateRangeError("Entry has no finish date")
    daily_amount, daily_unit = entry_daily_rate(entry)
    supply, supply_unit = entry_supply(entry)
    return reconcile_consumption(
        total_supply=supply,
        supply_unit=supply_unit,
        daily_amount=daily_amount,
        daily_unit=daily_unit,
        date_started=entry.date_started,
        date_finished=entry.date_finished,
    )
