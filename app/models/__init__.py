"""
Import all models here so that:
1. Base.metadata knows every table when init_db() runs create_all
2. Services can import from app.models directly
"""

from app.models.user import User
from app.models.vehicle import Vehicle
from app.models.booking import Booking

__all__ = [
    "User",
    "Vehicle",
    "Booking",
]
