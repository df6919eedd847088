"""
Driver management: registration, lookup, location and status updates.
"""

from datetime import datetime, timezone
from typing import List
import logging

from fleet.api.v1.schemas import DriverCreate
from fleet.models.driver import Driver
from fleet.models.enums import EntityStatus, OnlineStatus
from fleet.services.store import SqlAlchemyEntityStore

logger = logging.getLogger(__name__)

class DriverService:
    
    def __init__(self, store: SqlAlchemyEntityStore):
        self._store = store
    
    async def find(self, driver_id: int) -> Driver:
        return await self._store.get_driver(driver_id)
    
    async def create(self, driver_data: DriverCreate) -> Driver:
        driver = Driver(
            username=driver_data.username,
            password=driver_data.password,
            online_status=OnlineStatus.OFFLINE,
            status=EntityStatus.ACTIVE
        )
        driver = await self._store.add_driver(driver)
        await self._store.commit()
        
        logger.info(f"Driver created: {driver.id} ({driver.username})")
        return driver
    
    async def delete(self, driver_id: int) -> None:
        driver = await self._store.get_driver(driver_id)
        driver.status = EntityStatus.DELETED
        await self._store.save_driver(driver)
        await self._store.commit()
        
        logger.info(f"Driver soft-deleted: {driver_id}")
    
    async def update_location(self, driver_id: int, longitude: float, latitude: float) -> Driver:
        driver = await self._store.get_driver(driver_id)
        driver.longitude = longitude
        driver.latitude = latitude
        driver.coordinate_updated_at = datetime.now(timezone.utc)
        driver = await self._store.save_driver(driver)
        await self._store.commit()
        
        logger.debug(f"Driver location updated: {driver_id}")
        return driver
    
    async def update_online_status(self, driver_id: int, online_status: OnlineStatus) -> Driver:
        driver = await self._store.get_driver(driver_id)
        driver.online_status = online_status
        driver = await self._store.save_driver(driver)
        await self._store.commit()
        
        logger.info(f"Driver online status updated: {driver_id} -> {online_status.value}")
        return driver
    
    async def find_by_online_status(self, online_status: OnlineStatus) -> List[Driver]:
        return await self._store.list_drivers(online_status)
