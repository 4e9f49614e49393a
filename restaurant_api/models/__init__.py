"""Database models"""

from restaurant_api.models.reservation import Reservation, ReservationStatus
from restaurant_api.models.table import Table

__all__ = [
    "Reservation",
    "ReservationStatus",
    "Table",
]
