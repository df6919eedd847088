"""
Domain exceptions for driver/car selection.

Each carries the status code the HTTP layer reports it with.
"""

from typing import Any

class FleetError(Exception):
    """Base exception for all fleet domain errors."""
    
    status_code = 500
    
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

class EntityNotFoundError(FleetError):
    """A referenced driver, car or driver-car pair does not exist."""
    
    status_code = 400

class CarAlreadyInUseError(FleetError):
    """The car is actively selected by a different driver."""
    
    status_code = 409
    
    def __init__(self, car_id: int) -> None:
        self.car_id = car_id
        super().__init__(
            f"Sorry but the car with id: {car_id} is already selected by another online driver. "
            "Please select another car instead."
        )

class ConstraintViolationError(FleetError):
    """The database rejected a write (uniqueness or not-null constraint)."""
    
    status_code = 400

class InvalidFilterValueError(FleetError):
    """A search filter value cannot be interpreted or is given more than once."""
    
    status_code = 400
    
    def __init__(self, key: str, value: Any, reason: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid value {value!r} for filter '{key}': {reason}")

class InternalConsistencyError(FleetError):
    """More than one active selection was observed for a single car."""
    
    status_code = 500
