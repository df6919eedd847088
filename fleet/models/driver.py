"""
Driver model.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from fleet.core.database import Base
from fleet.models.enums import OnlineStatus, EntityStatus

class Driver(Base):
    """Driver account with last known coordinate and online status."""
    
    __tablename__ = "drivers"
    
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    
    # Location data
    longitude = Column(Float, nullable=True)
    latitude = Column(Float, nullable=True)
    coordinate_updated_at = Column(DateTime(timezone=True), nullable=True)
    
    online_status = Column(Enum(OnlineStatus), nullable=False, default=OnlineStatus.OFFLINE)
    status = Column(Enum(EntityStatus), nullable=False, default=EntityStatus.ACTIVE)
    
    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    
    # Relationships
    selections = relationship("Selection", back_populates="driver")
    
    @property
    def deleted(self) -> bool:
        return self.status == EntityStatus.DELETED
    
    def __repr__(self):
        return f"<Driver(id={self.id}, username={self.username}, online_status={self.online_status})>"
