"""
Selection model: the link between a driver and a car.
"""

from sqlalchemy import Column, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint, Index, true
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from fleet.core.database import Base

class Selection(Base):
    """
    One row per (car, driver) pair.

    The row is reused across select/deselect cycles; ``selected`` flips.
    """
    
    __tablename__ = "selections"
    
    id = Column(Integer, primary_key=True, index=True)
    driver_id = Column(Integer, ForeignKey("drivers.id"), nullable=False, index=True)
    car_id = Column(Integer, ForeignKey("cars.id"), nullable=False, index=True)
    selected = Column(Boolean, nullable=False, default=False)
    
    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    
    # Relationships
    driver = relationship("Driver", back_populates="selections")
    car = relationship("Car", back_populates="selections")
    
    __table_args__ = (
        UniqueConstraint("car_id", "driver_id", name="uq_selections_car_driver"),
    )
    
    def __repr__(self):
        return f"<Selection(driver_id={self.driver_id}, car_id={self.car_id}, selected={self.selected})>"

# At most one active selection per car
Index(
    "uq_selections_active_car",
    Selection.car_id,
    unique=True,
    postgresql_where=Selection.selected == true(),
    sqlite_where=Selection.selected == true(),
)
