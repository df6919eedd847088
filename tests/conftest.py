"""
Shared fixtures: in-memory database, seeded drivers and cars, HTTP client.
"""

import asyncio
import os
from typing import Dict, List, Optional

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest
from httpx import ASGITransport, AsyncClient

from fleet.core.database import Base, build_engine, build_session_factory, get_db
from fleet.core.exceptions import EntityNotFoundError
from fleet.main import create_app
from fleet.models.car import Car
from fleet.models.driver import Driver
from fleet.models.enums import OnlineStatus
from fleet.models.selection import Selection
from fleet.services.locks import CarLockRegistry
from fleet.services.selection_manager import SelectionManager
from fleet.services.store import EntityStore, SqlAlchemyEntityStore

TEST_DATABASE_URL = "sqlite+aiosqlite://"

SAMPLE_DRIVERS = [
    {"username": "driver_anna", "password": "secret-a", "online_status": OnlineStatus.ONLINE},
    {"username": "DRIVER_BEN", "password": "secret-b", "online_status": OnlineStatus.OFFLINE},
    {"username": "driver_cleo", "password": "secret-c", "online_status": OnlineStatus.ONLINE},
]

SAMPLE_CARS = [
    {"license_plate": "B-AU-1001", "manufacturer": "Audi", "convertible": True, "rating": 4.5, "engine_type": "ELECTRIC"},
    {"license_plate": "B-AU-2002", "manufacturer": "Audi AG", "convertible": False, "rating": 4.0, "engine_type": "DIESEL"},
    {"license_plate": "M-BM-3003", "manufacturer": "BMW", "convertible": True, "rating": 4.5, "engine_type": "GAS"},
    {"license_plate": "H-VW-4004", "manufacturer": "Volkswagen", "convertible": True, "rating": 3.5, "engine_type": "ELECTRIC"},
]

@pytest.fixture
async def engine():
    engine = build_engine(TEST_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()

@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)

@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session

@pytest.fixture
def store(db) -> SqlAlchemyEntityStore:
    return SqlAlchemyEntityStore(db)

@pytest.fixture
def manager(store) -> SelectionManager:
    return SelectionManager(store, locks=CarLockRegistry())

@pytest.fixture
async def driver_ids(store) -> Dict[str, int]:
    """Sample drivers keyed by username. Ids only: ORM rows expire on rollback."""
    ids = {}
    for data in SAMPLE_DRIVERS:
        driver = await store.add_driver(Driver(**data))
        ids[driver.username] = driver.id
    await store.commit()
    return ids

@pytest.fixture
async def car_ids(store) -> Dict[str, int]:
    """Sample cars keyed by license plate."""
    ids = {}
    for data in SAMPLE_CARS:
        car = await store.add_car(Car(**data))
        ids[car.license_plate] = car.id
    await store.commit()
    return ids

@pytest.fixture
async def client(session_factory):
    app = create_app()
    
    async def override_get_db():
        async with session_factory() as session:
            yield session
    
    app.dependency_overrides[get_db] = override_get_db
    
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

class InMemoryEntityStore(EntityStore):
    """
    Dict-backed store for exercising the manager without a database.

    Reads and writes yield to the event loop so concurrent calls interleave.
    """
    
    def __init__(self, driver_ids: List[int], car_ids: List[int]):
        self.driver_ids = set(driver_ids)
        self.car_ids = set(car_ids)
        self.rows: List[Selection] = []
        self.commits = 0
        self.rollbacks = 0
    
    async def get_driver(self, driver_id, include_deleted=False):
        if driver_id not in self.driver_ids:
            raise EntityNotFoundError(f"Could not find driver entity with id: {driver_id}")
        return Driver(id=driver_id, username=f"driver-{driver_id}", password="x")
    
    async def get_car(self, car_id, include_deleted=False, for_update=False):
        if car_id not in self.car_ids:
            raise EntityNotFoundError(f"Could not find car entity with id: {car_id}")
        return Car(id=car_id, license_plate=f"PLATE-{car_id}")
    
    async def find_selection(self, driver_id, car_id) -> Optional[Selection]:
        for row in self.rows:
            if row.driver_id == driver_id and row.car_id == car_id:
                return row
        return None
    
    async def find_active_selections_for_car(self, car_id):
        await asyncio.sleep(0)
        return [row for row in self.rows if row.car_id == car_id and row.selected]
    
    async def save_selection(self, selection):
        await asyncio.sleep(0)
        if all(row is not selection for row in self.rows):
            self.rows.append(selection)
        return selection
    
    async def list_selections(self, predicate, page, size):
        raise NotImplementedError
    
    async def commit(self):
        self.commits += 1
    
    async def rollback(self):
        self.rollbacks += 1
    
    def active_for_car(self, car_id: int) -> List[Selection]:
        return [row for row in self.rows if row.car_id == car_id and row.selected]

@pytest.fixture
def memory_store() -> InMemoryEntityStore:
    return InMemoryEntityStore(driver_ids=[1, 2, 3], car_ids=[10, 11])
