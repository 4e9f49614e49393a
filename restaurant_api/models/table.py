"""Dining table model"""

from datetime import datetime
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, CheckConstraint

from restaurant_api.database import Base


class Table(Base):
    """Physical table in the dining room"""
    __tablename__ = "tables"
    __table_args__ = (
        # occupied and reservation_id always move together
        CheckConstraint(
            "(occupied AND reservation_id IS NOT NULL) OR (NOT occupied AND reservation_id IS NULL)",
            name="ck_tables_occupied_reservation",
        ),
    )
    
    table_id = Column(Integer, primary_key=True, autoincrement=True)
    table_name = Column(String(255), nullable=False)
    capacity = Column(Integer, nullable=False)
    
    # Occupancy
    occupied = Column(Boolean, nullable=False, default=False)
    reservation_id = Column(Integer, ForeignKey("reservations.reservation_id"), nullable=True)
    
    # Metadata
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
