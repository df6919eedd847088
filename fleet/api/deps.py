"""
FastAPI dependencies wiring the services to a request-scoped session.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fleet.core.database import get_db
from fleet.services.cars import CarService
from fleet.services.drivers import DriverService
from fleet.services.locks import car_locks
from fleet.services.selection_manager import SelectionManager
from fleet.services.store import SqlAlchemyEntityStore

async def get_store(db: AsyncSession = Depends(get_db)) -> SqlAlchemyEntityStore:
    return SqlAlchemyEntityStore(db)

async def get_selection_manager(store: SqlAlchemyEntityStore = Depends(get_store)) -> SelectionManager:
    return SelectionManager(store, locks=car_locks)

async def get_car_service(store: SqlAlchemyEntityStore = Depends(get_store)) -> CarService:
    return CarService(store)

async def get_driver_service(store: SqlAlchemyEntityStore = Depends(get_store)) -> DriverService:
    return DriverService(store)
