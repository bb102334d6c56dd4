"""Food entry API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from pet_food_tracker.api.food_models import (
    DryFoodPayload,
    FinishDateUpdate,
    FinishRequest,
    FoodEntryUpdate,
    WetFoodPayload,
)
from pet_food_tracker.domain.food import DryFoodEntry, FoodEntryView, FoodType
from pet_food_tracker.services.presentation import (
    feeding_status_label,
    format_feeding_status_message,
    format_finish_summary,
    format_variance_percentage,
    is_low_stock,
)

if TYPE_CHECKING:
    from pet_food_tracker.containers import AppContainer
    from pet_food_tracker.services.food import FoodService

router = APIRouter(prefix="/pets", tags=["food"])


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def _service(request: Request) -> FoodService:
    container: AppContainer = request.app.state.container
    return container.food_service


@router.get("/{pet_id}/food", dependencies=[Depends(require_token)])
async def list_food(pet_id: UUID, request: Request) -> dict[str, object]:
    """Return all food entries for a pet."""
    service = _service(request)
    return _many(service, service.list_entries(pet_id))


@router.get("/{pet_id}/food/dry", dependencies=[Depends(require_token)])
async def list_dry_food(pet_id: UUID, request: Request) -> dict[str, object]:
    """Return dry food entries for a pet."""
    service = _service(request)
    return _many(service, service.list_entries(pet_id, FoodType.DRY))


@router.post(
    "/{pet_id}/food/dry",
    dependencies=[Depends(require_token)],
    status_code=status.HTTP_201_CREATED,
)
async def create_dry_food(
    pet_id: UUID, payload: DryFoodPayload, request: Request
) -> dict[str, object]:
    """Create an active dry food entry."""
    service = _service(request)
    view = service.create_dry_entry(pet_id, payload.model_dump(exclude_unset=True))
    return _one(service, view)


@router.get("/{pet_id}/food/wet", dependencies=[Depends(require_token)])
async def list_wet_food(pet_id: UUID, request: Request) -> dict[str, object]:
    """Return wet food entries for a pet."""
    service = _service(request)
    return _many(service, service.list_entries(pet_id, FoodType.WET))


@router.post(
    "/{pet_id}/food/wet",
    dependencies=[Depends(require_token)],
    status_code=status.HTTP_201_CREATED,
)
async def create_wet_food(
    pet_id: UUID, payload: WetFoodPayload, request: Request
) -> dict[str, object]:
    """Create an active wet food entry."""
    service = _service(request)
    view = service.create_wet_entry(pet_id, payload.model_dump(exclude_unset=True))
    return _one(service, view)


@router.get("/{pet_id}/food/finished", dependencies=[Depends(require_token)])
async def list_finished_food(
    pet_id: UUID,
    request: Request,
    food_type: FoodType | None = None,
    limit: int = 5,
) -> dict[str, object]:
    """Return the most recently finished entries."""
    service = _service(request)
    return _many(service, service.list_finished(pet_id, food_type, limit))


@router.get("/{pet_id}/food/{food_id}", dependencies=[Depends(require_token)])
async def get_food(pet_id: UUID, food_id: UUID, request: Request) -> dict[str, object]:
    """Return a single food entry."""
    service = _service(request)
    return _one(service, service.get_entry(pet_id, food_id))


@router.put("/{pet_id}/food/{food_id}", dependencies=[Depends(require_token)])
async def update_food(
    pet_id: UUID, food_id: UUID, payload: FoodEntryUpdate, request: Request
) -> dict[str, object]:
    """Update an active food entry."""
    service = _service(request)
    view = service.update_entry(
        pet_id, food_id, payload.model_dump(exclude_unset=True)
    )
    return _one(service, view)


@router.delete("/{pet_id}/food/{food_id}", dependencies=[Depends(require_token)])
async def delete_food(
    pet_id: UUID, food_id: UUID, request: Request
) -> dict[str, object]:
    """Delete a food entry."""
    _service(request).delete_entry(pet_id, food_id)
    return {"status": "ok"}


@router.post("/{pet_id}/food/{food_id}/finish", dependencies=[Depends(require_token)])
async def finish_food(
    pet_id: UUID,
    food_id: UUID,
    request: Request,
    payload: FinishRequest | None = None,
) -> dict[str, object]:
    """Mark an active entry finished, today unless a date is given."""
    service = _service(request)
    finished_on = None
    if payload is not None and payload.date_finished:
        finished_on = payload.date_finished
    view = service.mark_finished(pet_id, food_id, finished_on)
    return _one(service, view)


@router.put(
    "/{pet_id}/food/{food_id}/finish-date", dependencies=[Depends(require_token)]
)
async def update_finish_date(
    pet_id: UUID, food_id: UUID, payload: FinishDateUpdate, request: Request
) -> dict[str, object]:
    """Correct the finish date of a finished entry."""
    service = _service(request)
    view = service.update_finish_date(pet_id, food_id, payload.date_finished)
    return _one(service, view)


def _one(service: FoodService, view: FoodEntryView) -> dict[str, object]:
    return {"food_entry": serialize_view(view, service.low_stock_threshold_days)}


def _many(service: FoodService, views: list[FoodEntryView]) -> dict[str, object]:
    entries = [
        serialize_view(view, service.low_stock_threshold_days) for view in views
    ]
    return {"food_entries": entries, "total": len(entries)}


def serialize_view(view: FoodEntryView, low_stock_days: int) -> dict[str, object]:
    """Flatten an entry and its computed view into a JSON-ready dict."""
    entry = view.entry
    data: dict[str, object] = {
        "id": str(entry.id),
        "pet_id": str(entry.pet_id),
        "food_type": str(entry.food_type),
        "brand_name": entry.brand_name,
        "product_name": entry.product_name,
        "daily_amount": entry.daily_amount,
        "daily_amount_unit": str(entry.daily_amount_unit),
        "date_started": entry.date_started.isoformat(),
        "date_finished": (
            entry.date_finished.isoformat() if entry.date_finished else None
        ),
        "is_active": entry.is_active,
    }
    if isinstance(entry, DryFoodEntry):
        data["bag_weight"] = entry.bag_weight
        data["bag_weight_unit"] = str(entry.bag_weight_unit)
    else:
        data["number_of_units"] = entry.number_of_units
        data["weight_per_unit"] = entry.weight_per_unit
        data["weight_unit"] = str(entry.weight_unit)

    if view.projection is not None:
        projection = view.projection
        data.update(
            remaining_weight=projection.remaining_weight,
            remaining_weight_unit=str(projection.remaining_weight_unit),
            remaining_days=projection.remaining_days,
            depletion_date=projection.depletion_date.isoformat(),
            low_stock=is_low_stock(projection, low_stock_days),
        )
    if view.consumption is not None:
        summary = view.consumption
        data.update(
            actual_days_elapsed=summary.actual_days_elapsed,
            actual_daily_consumption=summary.actual_daily_consumption,
            expected_daily_consumption=summary.expected_daily_consumption,
            variance_percentage=summary.variance_percentage,
            variance_display=format_variance_percentage(summary.variance_percentage),
            feeding_status=str(summary.feeding_status),
            feeding_status_label=feeding_status_label(summary.feeding_status),
            feeding_status_message=format_feeding_status_message(entry, summary),
            finish_summary=format_finish_summary(entry, summary),
        )
    return data
