"""Errors raised by the food tracking engine and services."""


class FoodEngineError(ValueError):
    """Base class for invalid inputs to a single engine calculation."""


class InvalidRateError(FoodEngineError):
    """Daily amount is zero, negative or not a finite number."""


class InvalidQuantityError(FoodEngineError):
    """Supply quantity is zero, negative or not a finite number."""


class InvalidDateRangeError(FoodEngineError):
    """Finish date precedes the start date, or is missing."""


class FoodServiceError(Exception):
    """Base class for food service failures."""


class FoodValidationError(FoodServiceError):
    """Input rejected before reaching the engine."""


class FoodEntryNotFoundError(FoodServiceError):
    """Pet or food entry does not exist."""
