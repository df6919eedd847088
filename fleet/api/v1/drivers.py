"""
Driver management and car selection API endpoints.
"""

from fastapi import APIRouter, Depends, Query, Request, status
from typing import List, Optional
import logging

from fleet.api.deps import get_driver_service, get_selection_manager
from fleet.api.v1.schemas import (
    DriverCreate, DriverResponse, DriverLocationUpdate,
    SelectionResponse, SelectionPageResponse
)
from fleet.core.config import settings
from fleet.models.enums import OnlineStatus
from fleet.services.drivers import DriverService
from fleet.services.query_builder import SelectionFilter
from fleet.services.selection_manager import SelectionManager

logger = logging.getLogger(__name__)
router = APIRouter()

PAGINATION_PARAMS = {"page", "size"}

@router.get("/driver-or-car-attributes", response_model=SelectionPageResponse)
async def find_car_drivers(
    request: Request,
    page: int = Query(0, ge=0),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    selection_manager: SelectionManager = Depends(get_selection_manager)
):
    """
    Search driver/car selections by driver or car attributes.

    Recognised filters: username, onlineStatus, licensePlate, convertible,
    rating, engineType, manufacturer. Other parameters are ignored; a
    repeated filter is rejected.
    """
    filters = SelectionFilter.from_query_items(
        (key, value)
        for key, value in request.query_params.multi_items()
        if key not in PAGINATION_PARAMS
    )
    size = min(size, settings.MAX_PAGE_SIZE)
    
    result = await selection_manager.find_car_drivers(filters, page=page, size=size)
    return SelectionPageResponse(
        items=[SelectionResponse.model_validate(item) for item in result.items],
        page=result.page,
        size=result.size,
        total=result.total,
        total_pages=result.total_pages
    )

@router.post("/", response_model=DriverResponse, status_code=status.HTTP_201_CREATED)
async def create_driver(
    driver_data: DriverCreate,
    driver_service: DriverService = Depends(get_driver_service)
):
    """Register a new driver."""
    return await driver_service.create(driver_data)

@router.get("/", response_model=List[DriverResponse])
async def find_drivers(
    online_status: OnlineStatus,
    driver_service: DriverService = Depends(get_driver_service)
):
    """List drivers with the given online status."""
    return await driver_service.find_by_online_status(online_status)

@router.get("/{driver_id}", response_model=DriverResponse)
async def get_driver(
    driver_id: int,
    driver_service: DriverService = Depends(get_driver_service)
):
    """Get driver details by ID."""
    return await driver_service.find(driver_id)

@router.delete("/{driver_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_driver(
    driver_id: int,
    driver_service: DriverService = Depends(get_driver_service)
):
    """Soft-delete a driver."""
    await driver_service.delete(driver_id)

@router.put("/{driver_id}/location", response_model=DriverResponse)
async def update_driver_location(
    driver_id: int,
    location_update: DriverLocationUpdate,
    driver_service: DriverService = Depends(get_driver_service)
):
    """Update driver's last known coordinate."""
    return await driver_service.update_location(
        driver_id,
        location_update.longitude,
        location_update.latitude
    )

@router.put("/{driver_id}/online-status", response_model=DriverResponse)
async def update_driver_online_status(
    driver_id: int,
    online_status: OnlineStatus,
    driver_service: DriverService = Depends(get_driver_service)
):
    """Set driver ONLINE or OFFLINE."""
    return await driver_service.update_online_status(driver_id, online_status)

@router.put("/{driver_id}/selected-cars/{car_id}", response_model=SelectionResponse)
async def select_car_for_driver(
    driver_id: int,
    car_id: int,
    selection_manager: SelectionManager = Depends(get_selection_manager)
):
    """Select a car for the driver; 409 if another driver holds it."""
    return await selection_manager.select_car_for_driver(driver_id, car_id)

@router.put("/{driver_id}/deselected-cars/{car_id}", response_model=SelectionResponse)
async def deselect_car_for_driver(
    driver_id: int,
    car_id: int,
    selection_manager: SelectionManager = Depends(get_selection_manager)
):
    """Release the driver's selection of a car."""
    return await selection_manager.deselect_car_for_driver(driver_id, car_id)

@router.get("/{driver_id}/cars/{car_id}", response_model=Optional[SelectionResponse])
async def get_selection(
    driver_id: int,
    car_id: int,
    selection_manager: SelectionManager = Depends(get_selection_manager)
):
    """Get the driver/car selection, or null if the pair has none."""
    return await selection_manager.find(driver_id, car_id)
