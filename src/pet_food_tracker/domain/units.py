"""Mass unit normalization."""

from enum import StrEnum


class MassUnit(StrEnum):
    """Supported mass units for food packages and daily doses."""

    KG = "kg"
    POUNDS = "pounds"
    GRAMS = "grams"
    OZ = "oz"


GRAMS_PER_UNIT: dict[MassUnit, float] = {
    MassUnit.KG: 1000.0,
    MassUnit.POUNDS: 453.592,
    MassUnit.GRAMS: 1.0,
    MassUnit.OZ: 28.3495,
}


def grams_per(unit: MassUnit | str) -> float:
    """Return how many grams one of ``unit`` weighs."""
    try:
        return GRAMS_PER_UNIT[MassUnit(unit)]
    except ValueError as exc:
        raise ValueError(f"Unsupported mass unit: {unit!r}") from exc


def to_grams(quantity: float, unit: MassUnit | str) -> float:
    """Convert a quantity in ``unit`` to grams without rounding."""
    return quantity * grams_per(unit)


def from_grams(grams: float, unit: MassUnit | str) -> float:
    """Convert grams back to ``unit`` without rounding."""
    return grams / grams_per(unit)
