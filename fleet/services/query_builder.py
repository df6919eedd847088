"""
Search filters over driver/car selections.

``SelectionFilter`` is the typed set of recognised filters;
``build_selection_predicate`` turns it into an SQLAlchemy clause over the
Selection -> Driver / Selection -> Car join.
"""

from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from sqlalchemy import and_, true
from sqlalchemy.sql.elements import ColumnElement

from fleet.core.exceptions import InvalidFilterValueError
from fleet.models.car import Car
from fleet.models.driver import Driver
from fleet.models.enums import OnlineStatus

class SelectionFilter(BaseModel):
    """Filters for listing selections. Absent fields do not constrain; unknown keys are dropped."""
    
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)
    
    username: Optional[str] = Field(None, description="Substring of the driver username (case-sensitive)")
    online_status: Optional[OnlineStatus] = Field(None, alias="onlineStatus")
    license_plate: Optional[str] = Field(None, alias="licensePlate", description="Substring of the license plate")
    convertible: Optional[bool] = None
    rating: Optional[float] = None
    engine_type: Optional[str] = Field(None, alias="engineType")
    manufacturer: Optional[str] = Field(None, description="Substring of the manufacturer")
    
    @field_validator("online_status", mode="before")
    @classmethod
    def normalize_online_status(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v
    
    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "SelectionFilter":
        """
        Build a filter from raw request parameters.

        Raises:
            InvalidFilterValueError: a recognised key carries a value of the wrong type.
        """
        try:
            return cls.model_validate(dict(params))
        except ValidationError as e:
            error = e.errors()[0]
            key = str(error["loc"][0]) if error["loc"] else "?"
            raise InvalidFilterValueError(key, error.get("input"), error["msg"]) from e
    
    @classmethod
    def from_query_items(cls, items: Iterable[Tuple[str, str]]) -> "SelectionFilter":
        """
        Build a filter from query string pairs, repeats included.

        A recognised filter may appear once, under either of its names.
        """
        field_names = {}
        for name, field_info in cls.model_fields.items():
            field_names[name] = name
            if field_info.alias:
                field_names[field_info.alias] = name
        
        params: Dict[str, str] = {}
        seen: Dict[str, str] = {}
        for key, value in items:
            field_name = field_names.get(key)
            if field_name is not None:
                if field_name in seen:
                    raise InvalidFilterValueError(key, value, f"filter already given as '{seen[field_name]}'")
                seen[field_name] = key
            params[key] = value
        
        return cls.from_params(params)

def build_selection_predicate(filters: SelectionFilter) -> ColumnElement:
    """AND of one clause per present filter; ``true()`` when none are present."""
    
    clauses = []
    
    # Driver attributes
    if filters.username is not None:
        clauses.append(Driver.username.contains(filters.username, autoescape=True))
    if filters.online_status is not None:
        clauses.append(Driver.online_status == filters.online_status)
    
    # Car attributes
    if filters.license_plate is not None:
        clauses.append(Car.license_plate.contains(filters.license_plate, autoescape=True))
    if filters.convertible is not None:
        clauses.append(Car.convertible == filters.convertible)
    if filters.rating is not None:
        clauses.append(Car.rating == filters.rating)
    if filters.engine_type is not None:
        clauses.append(Car.engine_type == filters.engine_type)
    if filters.manufacturer is not None:
        clauses.append(Car.manufacturer.contains(filters.manufacturer, autoescape=True))
    
    if not clauses:
        return true()
    return and_(*clauses)
