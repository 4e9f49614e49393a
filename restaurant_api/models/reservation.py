"""Reservation model"""

import enum
from datetime import datetime
from sqlalchemy import Column, String, Integer, Date, Time, DateTime

from restaurant_api.database import Base


class ReservationStatus(str, enum.Enum):
    """Reservation lifecycle states"""
    BOOKED = "booked"
    SEATED = "seated"
    FINISHED = "finished"
    CANCELLED = "cancelled"


class Reservation(Base):
    """A party booked for a date and time"""
    __tablename__ = "reservations"
    
    reservation_id = Column(Integer, primary_key=True, autoincrement=True)
    
    # Customer information
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    mobile_number = Column(String(50), nullable=False, index=True)
    
    # Reservation details
    reservation_date = Column(Date, nullable=False, index=True)
    reservation_time = Column(Time, nullable=False)
    people = Column(Integer, nullable=False)
    
    # Status
    status = Column(String(20), nullable=False, default=ReservationStatus.BOOKED.value)  # booked, seated, finished, cancelled
    
    # Metadata
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
