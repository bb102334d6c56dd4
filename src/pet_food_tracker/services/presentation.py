"""Human-readable labels and messages for food entry views."""

from pet_food_tracker.domain.food import (
    ConsumptionSummary,
    FeedingStatus,
    FoodEntry,
    SupplyProjection,
    entry_daily_rate,
    entry_supply,
)
from pet_food_tracker.domain.units import to_grams
from pet_food_tracker.services.projection import ceil_days

DEFAULT_LOW_STOCK_DAYS = 7


def feeding_status_label(status: FeedingStatus) -> str:
    """Return the display label for a feeding status."""
    match status:
        case FeedingStatus.OVERFEEDING:
            return "Overfeeding"
        case FeedingStatus.SLIGHTLY_OVER:
            return "Slightly Overfeeding"
        case FeedingStatus.NORMAL:
            return "Normal"
        case FeedingStatus.SLIGHTLY_UNDER:
            return "Slightly Underfeeding"
        case FeedingStatus.UNDERFEEDING:
            return "Underfeeding"
        case _:
            raise ValueError(f"Unknown feeding status: {status!r}")


def expected_days_to_deplete(entry: FoodEntry) -> int:
    """Return how many days the package should last at the declared rate."""
    supply, supply_unit = entry_supply(entry)
    daily_amount, daily_unit = entry_daily_rate(entry)
    return ceil_days(to_grams(supply, supply_unit), to_grams(daily_amount, daily_unit))


def format_feeding_status_message(
    entry: FoodEntry, summary: ConsumptionSummary
) -> str:
    """Describe how far the actual duration drifted from the expected one."""
    label = feeding_status_label(summary.feeding_status)
    days = abs(summary.actual_days_elapsed - expected_days_to_deplete(entry))
    plural = "" if days == 1 else "s"
    if summary.feeding_status in {
        FeedingStatus.OVERFEEDING,
        FeedingStatus.SLIGHTLY_OVER,
    }:
        return f"{label} by ~{days} day{plural}"
    if summary.feeding_status in {
        FeedingStatus.UNDERFEEDING,
        FeedingStatus.SLIGHTLY_UNDER,
    }:
        return f"{label} by {days} day{plural}"
    return label


def format_variance_percentage(variance: float) -> str:
    """Format a variance with an explicit sign and one decimal."""
    # Adding 0.0 turns a rounded -0.0 into 0.0.
    shown = round(variance, 1) + 0.0
    sign = "+" if shown > 0 else ""
    return f"{sign}{shown:.1f}%"


def format_finish_summary(entry: FoodEntry, summary: ConsumptionSummary) -> str:
    """Summarize a finished entry after it is marked finished or back-dated."""
    return (
        f"Finished! Consumed in {summary.actual_days_elapsed} days "
        f"(expected {expected_days_to_deplete(entry)} days). "
        f"Status: {feeding_status_label(summary.feeding_status)}"
    )


def is_low_stock(
    projection: SupplyProjection, threshold_days: int = DEFAULT_LOW_STOCK_DAYS
) -> bool:
    """Return True when an active entry runs out within the threshold."""
    return 0 < projection.remaining_days <= threshold_days
