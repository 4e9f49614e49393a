"""Reservation schemas"""

from datetime import date, datetime, time
from typing import List, Optional
from pydantic import BaseModel, field_serializer


class ReservationResponse(BaseModel):
    """Reservation response"""
    reservation_id: int
    first_name: str
    last_name: str
    mobile_number: str
    reservation_date: date
    reservation_time: time
    people: int
    status: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @field_serializer("reservation_time")
    def serialize_time(self, value: time) -> str:
        return value.strftime("%H:%M")

    class Config:
        from_attributes = True


class ReservationEnvelope(BaseModel):
    data: ReservationResponse


class ReservationListEnvelope(BaseModel):
    data: List[ReservationResponse]


class StatusResponse(BaseModel):
    """New status after a transition"""
    status: str


class StatusEnvelope(BaseModel):
    data: StatusResponse
