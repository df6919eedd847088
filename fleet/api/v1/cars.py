"""
Car management API endpoints.
"""

from fastapi import APIRouter, Depends, status
from typing import List
import logging

from fleet.api.deps import get_car_service
from fleet.api.v1.schemas import CarCreate, CarResponse
from fleet.services.cars import CarService

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/", response_model=CarResponse, status_code=status.HTTP_201_CREATED)
async def create_car(
    car_data: CarCreate,
    car_service: CarService = Depends(get_car_service)
):
    """Register a new car."""
    return await car_service.create(car_data)

@router.get("/", response_model=List[CarResponse])
async def list_cars(car_service: CarService = Depends(get_car_service)):
    """List cars that are not deleted."""
    return await car_service.list_cars()

@router.get("/{car_id}", response_model=CarResponse)
async def get_car(
    car_id: int,
    car_service: CarService = Depends(get_car_service)
):
    """Get car details by ID."""
    return await car_service.find(car_id)

@router.put("/{car_id}", response_model=CarResponse)
async def update_car(
    car_id: int,
    car_data: CarCreate,
    car_service: CarService = Depends(get_car_service)
):
    """Replace all car fields."""
    return await car_service.update_car(car_id, car_data)

@router.delete("/{car_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_car(
    car_id: int,
    car_service: CarService = Depends(get_car_service)
):
    """Soft-delete a car."""
    await car_service.delete_car(car_id)
