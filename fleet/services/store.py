"""
Entity store: persistence of drivers, cars and selections.

``EntityStore`` is the port the selection logic depends on;
``SqlAlchemyEntityStore`` implements it over an async SQLAlchemy session.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar
import logging

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from fleet.core.exceptions import EntityNotFoundError, ConstraintViolationError
from fleet.models.car import Car
from fleet.models.driver import Driver
from fleet.models.enums import EntityStatus, OnlineStatus
from fleet.models.selection import Selection

logger = logging.getLogger(__name__)

T = TypeVar("T")

@dataclass
class Page(Generic[T]):
    """One page of a listing. ``page`` is zero-based."""
    items: List[T] = field(default_factory=list)
    page: int = 0
    size: int = 20
    total: int = 0
    
    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return (self.total + self.size - 1) // self.size

class EntityStore(ABC):
    """Port interface for driver, car and selection persistence."""
    
    @abstractmethod
    async def get_driver(self, driver_id: int, include_deleted: bool = False) -> Driver:
        """Return the driver or raise EntityNotFoundError."""
    
    @abstractmethod
    async def get_car(self, car_id: int, include_deleted: bool = False, for_update: bool = False) -> Car:
        """
        Return the car or raise EntityNotFoundError.

        With ``for_update`` the car row stays locked until the unit of work ends.
        """
    
    @abstractmethod
    async def find_selection(self, driver_id: int, car_id: int) -> Optional[Selection]:
        """Return the selection row for the pair, if any."""
    
    @abstractmethod
    async def find_active_selections_for_car(self, car_id: int) -> List[Selection]:
        """Return every selection of the car with selected = true."""
    
    @abstractmethod
    async def save_selection(self, selection: Selection) -> Selection:
        """Insert or update a selection; raises ConstraintViolationError."""
    
    @abstractmethod
    async def list_selections(self, predicate: ColumnElement, page: int, size: int) -> Page[Selection]:
        """List selections whose joined driver/car rows satisfy the predicate."""
    
    @abstractmethod
    async def commit(self) -> None:
        """Commit the unit of work; raises ConstraintViolationError."""
    
    @abstractmethod
    async def rollback(self) -> None:
        """Discard the unit of work."""

class SqlAlchemyEntityStore(EntityStore):
    """EntityStore backed by an AsyncSession."""
    
    def __init__(self, db: AsyncSession):
        self._db = db
    
    # Drivers
    
    async def get_driver(self, driver_id: int, include_deleted: bool = False) -> Driver:
        query = select(Driver).where(Driver.id == driver_id)
        if not include_deleted:
            query = query.where(Driver.status == EntityStatus.ACTIVE)
        
        result = await self._db.execute(query)
        driver = result.scalar_one_or_none()
        
        if driver is None:
            raise EntityNotFoundError(f"Could not find driver entity with id: {driver_id}")
        
        return driver
    
    async def add_driver(self, driver: Driver) -> Driver:
        return await self._flush(driver, "driver")
    
    async def save_driver(self, driver: Driver) -> Driver:
        return await self._flush(driver, "driver")
    
    async def list_drivers(self, online_status: Optional[OnlineStatus] = None) -> List[Driver]:
        query = select(Driver).where(Driver.status == EntityStatus.ACTIVE)
        if online_status is not None:
            query = query.where(Driver.online_status == online_status)
        
        result = await self._db.execute(query.order_by(Driver.id))
        return list(result.scalars().all())
    
    # Cars
    
    async def get_car(self, car_id: int, include_deleted: bool = False, for_update: bool = False) -> Car:
        query = select(Car).where(Car.id == car_id)
        if not include_deleted:
            query = query.where(Car.status == EntityStatus.ACTIVE)
        if for_update:
            query = query.with_for_update()
        
        result = await self._db.execute(query)
        car = result.scalar_one_or_none()
        
        if car is None:
            raise EntityNotFoundError(f"Could not find car entity with id: {car_id}")
        
        return car
    
    async def add_car(self, car: Car) -> Car:
        return await self._flush(car, "car")
    
    async def save_car(self, car: Car) -> Car:
        return await self._flush(car, "car")
    
    async def list_cars(self, include_deleted: bool = False) -> List[Car]:
        query = select(Car)
        if not include_deleted:
            query = query.where(Car.status == EntityStatus.ACTIVE)
        
        result = await self._db.execute(query.order_by(Car.id))
        return list(result.scalars().all())
    
    # Selections
    
    async def find_selection(self, driver_id: int, car_id: int) -> Optional[Selection]:
        query = select(Selection).where(
            Selection.driver_id == driver_id,
            Selection.car_id == car_id
        )
        result = await self._db.execute(query)
        return result.scalar_one_or_none()
    
    async def find_active_selections_for_car(self, car_id: int) -> List[Selection]:
        query = select(Selection).where(
            Selection.car_id == car_id,
            Selection.selected.is_(True)
        ).order_by(Selection.id)
        result = await self._db.execute(query)
        return list(result.scalars().all())
    
    async def save_selection(self, selection: Selection) -> Selection:
        return await self._flush(selection, "selection")
    
    async def list_selections(self, predicate: ColumnElement, page: int, size: int) -> Page[Selection]:
        query = (
            select(Selection)
            .join(Driver, Selection.driver_id == Driver.id)
            .join(Car, Selection.car_id == Car.id)
            .where(
                predicate,
                Driver.status == EntityStatus.ACTIVE,
                Car.status == EntityStatus.ACTIVE
            )
        )
        
        total = await self._db.scalar(
            select(func.count()).select_from(query.order_by(None).subquery())
        )
        
        result = await self._db.execute(
            query.order_by(Selection.id).offset(page * size).limit(size)
        )
        
        return Page(
            items=list(result.scalars().all()),
            page=page,
            size=size,
            total=total or 0
        )
    
    # Unit of work
    
    async def commit(self) -> None:
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            logger.warning(f"Constraint violation on commit: {e.orig}")
            raise ConstraintViolationError(str(e.orig)) from e
    
    async def rollback(self) -> None:
        await self._db.rollback()
    
    async def _flush(self, instance, kind: str):
        self._db.add(instance)
        try:
            await self._db.flush()
        except IntegrityError as e:
            await self._db.rollback()
            logger.warning(f"Constraint violation while saving {kind}: {e.orig}")
            raise ConstraintViolationError(str(e.orig)) from e
        await self._db.refresh(instance)
        return instance
