"""
Pydantic schemas for API request/response models.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from fleet.models.enums import OnlineStatus

# Driver schemas
class DriverCreate(BaseModel):
    username: str = Field(..., min_length=1, description="Driver username")
    password: str = Field(..., min_length=1, description="Driver password")

class DriverLocationUpdate(BaseModel):
    longitude: float = Field(..., ge=-180, le=180)
    latitude: float = Field(..., ge=-90, le=90)

class DriverResponse(BaseModel):
    id: int
    username: str
    longitude: Optional[float]
    latitude: Optional[float]
    coordinate_updated_at: Optional[datetime]
    online_status: OnlineStatus
    created_at: Optional[datetime]

    class Config:
        from_attributes = True

# Car schemas
class CarCreate(BaseModel):
    license_plate: str = Field(..., min_length=1, description="License plate, unique per car")
    convertible: Optional[bool] = None
    rating: Optional[float] = Field(None, ge=0.0, le=5.0)
    engine_type: Optional[str] = None
    manufacturer: Optional[str] = None

class CarResponse(BaseModel):
    id: int
    license_plate: str
    convertible: Optional[bool]
    rating: Optional[float]
    engine_type: Optional[str]
    manufacturer: Optional[str]
    deleted: bool
    created_at: Optional[datetime]

    class Config:
        from_attributes = True

# Selection schemas
class SelectionResponse(BaseModel):
    driver_id: int
    car_id: int
    selected: bool

    class Config:
        from_attributes = True

class SelectionPageResponse(BaseModel):
    items: List[SelectionResponse]
    page: int
    size: int
    total: int
    total_pages: int

    class Config:
        from_attributes = True

# Error schemas
class ErrorResponse(BaseModel):
    status: int
    message: str

# Health check schema
class HealthResponse(BaseModel):
    status: str
    service: str
    timestamp: datetime
    database_connected: bool
