"""
Enumerations shared by the driver and car models.
"""

import enum

class OnlineStatus(str, enum.Enum):
    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"

class EntityStatus(str, enum.Enum):
    """Lifecycle tag; DELETED marks a soft-deleted row."""
    ACTIVE = "ACTIVE"
    DELETED = "DELETED"
