"""
Selection manager: which driver currently has which car selected.

Invariant: for every car at most one selection row has selected = true.
Each select/deselect runs its read-decide-write sequence while holding the
car's lock from ``CarLockRegistry`` and the car row lock in the database, and
commits or rolls back as a single unit of work.
"""

from typing import Any, Mapping, Optional, Union
import logging

from fleet.core.config import settings
from fleet.core.exceptions import (
    CarAlreadyInUseError,
    EntityNotFoundError,
    InternalConsistencyError,
)
from fleet.models.selection import Selection
from fleet.services.locks import CarLockRegistry, car_locks
from fleet.services.query_builder import SelectionFilter, build_selection_predicate
from fleet.services.store import EntityStore, Page

logger = logging.getLogger(__name__)

class SelectionManager:
    """Select, deselect and search driver/car selections."""
    
    def __init__(self, store: EntityStore, locks: Optional[CarLockRegistry] = None):
        self._store = store
        self._locks = locks if locks is not None else car_locks
    
    async def select_car_for_driver(self, driver_id: int, car_id: int) -> Selection:
        """
        Mark the car as selected by the driver.

        Selecting a car the driver already holds is a no-op that returns the
        same active row.

        Raises:
            EntityNotFoundError: driver or car does not exist.
            CarAlreadyInUseError: another driver holds the car.
            ConstraintViolationError: the database rejected the write.
            InternalConsistencyError: the car has several active selections.
        """
        logger.debug(f"Selecting car {car_id} for driver {driver_id}")
        
        async with self._locks.hold(car_id):
            try:
                active = await self._get_active_selection(driver_id, car_id)
                
                if active is not None and active.driver_id != driver_id:
                    logger.warning(
                        f"Car {car_id} requested by driver {driver_id} is held by driver {active.driver_id}"
                    )
                    raise CarAlreadyInUseError(car_id)
                
                selection = active
                if selection is None:
                    selection = await self._store.find_selection(driver_id, car_id)
                if selection is None:
                    logger.debug(f"Car {car_id} selected for the first time by driver {driver_id}")
                    selection = Selection(driver_id=driver_id, car_id=car_id)
                
                selection.selected = True
                selection = await self._store.save_selection(selection)
                await self._store.commit()
            except Exception:
                await self._store.rollback()
                raise
        
        logger.info(f"Car {car_id} selected by driver {driver_id}")
        return selection
    
    async def deselect_car_for_driver(self, driver_id: int, car_id: int) -> Selection:
        """
        Release the driver's active selection of the car.

        The row is kept with selected = false. A soft-deleted driver or car
        can still be released.

        Raises:
            EntityNotFoundError: driver or car does not exist, or the car is
                not currently selected by this driver.
            ConstraintViolationError: the database rejected the write.
            InternalConsistencyError: the car has several active selections.
        """
        logger.debug(f"Deselecting car {car_id} for driver {driver_id}")
        
        async with self._locks.hold(car_id):
            try:
                active = await self._get_active_selection(driver_id, car_id, include_deleted=True)
                
                if active is None or active.driver_id != driver_id:
                    logger.warning(f"Driver {driver_id} tried to deselect car {car_id} it does not hold")
                    raise EntityNotFoundError("Car is not yet selected for this driver.")
                
                active.selected = False
                selection = await self._store.save_selection(active)
                await self._store.commit()
            except Exception:
                await self._store.rollback()
                raise
        
        logger.info(f"Car {car_id} deselected by driver {driver_id}")
        return selection
    
    async def find(self, driver_id: int, car_id: int) -> Optional[Selection]:
        """Selection row for the pair, or None if the pair never met."""
        return await self._store.find_selection(driver_id, car_id)
    
    async def find_car_drivers(
        self,
        filters: Union[SelectionFilter, Mapping[str, Any], None] = None,
        page: int = 0,
        size: Optional[int] = None
    ) -> Page[Selection]:
        """
        List selections whose driver and car match every given filter.

        Raises:
            InvalidFilterValueError: a filter key or value is not valid.
        """
        if filters is None:
            filters = SelectionFilter()
        elif not isinstance(filters, SelectionFilter):
            filters = SelectionFilter.from_params(filters)
        
        if size is None:
            size = settings.DEFAULT_PAGE_SIZE
        
        predicate = build_selection_predicate(filters)
        return await self._store.list_selections(predicate, page, size)
    
    async def _get_active_selection(
        self,
        driver_id: int,
        car_id: int,
        include_deleted: bool = False
    ) -> Optional[Selection]:
        await self._store.get_driver(driver_id, include_deleted=include_deleted)
        await self._store.get_car(car_id, include_deleted=include_deleted, for_update=True)
        
        active = await self._store.find_active_selections_for_car(car_id)
        
        if len(active) > 1:
            logger.error(
                f"Car {car_id} has {len(active)} active selections "
                f"(drivers {[s.driver_id for s in active]})"
            )
            raise InternalConsistencyError(f"Car {car_id} is selected by more than one driver.")
        
        return active[0] if active else None
