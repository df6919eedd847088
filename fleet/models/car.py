"""
Car model.
"""

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from fleet.core.database import Base
from fleet.models.enums import EntityStatus

class Car(Base):
    """A car that drivers can select."""
    
    __tablename__ = "cars"
    
    id = Column(Integer, primary_key=True, index=True)
    license_plate = Column(String, unique=True, index=True, nullable=False)
    convertible = Column(Boolean, nullable=True)
    rating = Column(Float, nullable=True)
    engine_type = Column(String, nullable=True)
    manufacturer = Column(String, nullable=True)
    
    # Soft delete marker
    status = Column(Enum(EntityStatus), nullable=False, default=EntityStatus.ACTIVE)
    
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    
    # Relationships
    selections = relationship("Selection", back_populates="car")
    
    @property
    def deleted(self) -> bool:
        return self.status == EntityStatus.DELETED
    
    def __repr__(self):
        return f"<Car(id={self.id}, license_plate={self.license_plate}, status={self.status})>"
