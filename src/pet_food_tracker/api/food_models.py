"""Pydantic models for food entry request bodies.

Fields are loosely typed; the validation layer reports type and range
errors with its own messages.
"""

from pydantic import BaseModel, ConfigDict


class DryFoodPayload(BaseModel):
    """Dry food create payload."""

    model_config = ConfigDict(extra="ignore")

    brand_name: str | None = None
    product_name: str | None = None
    bag_weight: str | float | None = None
    bag_weight_unit: str | None = None
    daily_amount: str | float | None = None
    daily_amount_unit: str | None = None
    date_started: str | None = None


class WetFoodPayload(BaseModel):
    """Wet food create payload."""

    model_config = ConfigDict(extra="ignore")

    brand_name: str | None = None
    product_name: str | None = None
    number_of_units: int | str | None = None
    weight_per_unit: str | float | None = None
    weight_unit: str | None = None
    daily_amount: str | float | None = None
    daily_amount_unit: str | None = None
    date_started: str | None = None


class FoodEntryUpdate(BaseModel):
    """Partial update for an active entry of either food type."""

    model_config = ConfigDict(extra="ignore")

    brand_name: str | None = None
    product_name: str | None = None
    daily_amount: str | float | None = None
    daily_amount_unit: str | None = None
    date_started: str | None = None
    bag_weight: str | float | None = None
    bag_weight_unit: str | None = None
    number_of_units: int | str | None = None
    weight_per_unit: str | float | None = None
    weight_unit: str | None = None


class FinishRequest(BaseModel):
    """Optional finish date when marking an entry finished."""

    date_finished: str | None = None


class FinishDateUpdate(BaseModel):
    """Corrected finish date for a finished entry."""

    date_finished: str
