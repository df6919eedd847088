"""
Main API router for v1 endpoints.
"""

from fastapi import APIRouter

from fleet.api.v1 import cars, drivers

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(drivers.router, prefix="/drivers", tags=["drivers"])
api_router.include_router(cars.router, prefix="/cars", tags=["cars"])
