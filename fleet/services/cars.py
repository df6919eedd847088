"""
Car management: create, read, full update and soft delete.
"""

from typing import List
import logging

from fleet.api.v1.schemas import CarCreate
from fleet.models.car import Car
from fleet.models.enums import EntityStatus
from fleet.services.store import SqlAlchemyEntityStore

logger = logging.getLogger(__name__)

class CarService:
    
    def __init__(self, store: SqlAlchemyEntityStore):
        self._store = store
    
    async def find(self, car_id: int) -> Car:
        """Car by id, soft-deleted cars included."""
        return await self._store.get_car(car_id, include_deleted=True)
    
    async def create(self, car_data: CarCreate) -> Car:
        car = Car(**car_data.model_dump(), status=EntityStatus.ACTIVE)
        car = await self._store.add_car(car)
        await self._store.commit()
        
        logger.info(f"Car created: {car.id} ({car.license_plate})")
        return car
    
    async def list_cars(self) -> List[Car]:
        return await self._store.list_cars()
    
    async def update_car(self, car_id: int, car_data: CarCreate) -> Car:
        """Replace every editable field of the car."""
        car = await self._store.get_car(car_id, include_deleted=True)
        
        for field, value in car_data.model_dump().items():
            setattr(car, field, value)
        
        car = await self._store.save_car(car)
        await self._store.commit()
        
        logger.info(f"Car updated: {car_id}")
        return car
    
    async def delete_car(self, car_id: int) -> None:
        car = await self._store.get_car(car_id, include_deleted=True)
        car.status = EntityStatus.DELETED
        await self._store.save_car(car)
        await self._store.commit()
        
        logger.info(f"Car soft-deleted: {car_id}")
