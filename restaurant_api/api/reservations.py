"""Reservation API endpoints"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.database import get_db
from restaurant_api.errors import ValidationError
from restaurant_api.schemas.common import DataRequest, ErrorResponse
from restaurant_api.schemas.reservation import (
    ReservationEnvelope,
    ReservationListEnvelope,
    StatusEnvelope,
)
from restaurant_api.services import queries, reservations, seating

router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)


@router.get("", response_model=ReservationListEnvelope)
async def list_reservations(
    reservation_date: Optional[str] = Query(None, alias="date"),
    mobile_number: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """List reservations for a date, or search them by phone number"""
    if reservation_date:
        try:
            day = datetime.strptime(reservation_date, "%Y-%m-%d").date()
        except ValueError:
            raise ValidationError(f"date is invalid: {reservation_date}")
        return {"data": await queries.list_by_date(db, day)}

    if mobile_number:
        return {"data": await queries.search_by_phone(db, mobile_number)}

    return {"data": await queries.list_reservations(db)}


@router.post("", response_model=ReservationEnvelope, status_code=201)
async def create_reservation(
    body: DataRequest,
    db: AsyncSession = Depends(get_db),
):
    """Create a new reservation"""
    reservation = await reservations.create_reservation(db, body.data)
    return {"data": reservation}


@router.get("/{reservation_id}", response_model=ReservationEnvelope)
async def get_reservation(
    reservation_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get reservation details"""
    return {"data": await queries.get_reservation(db, reservation_id)}


@router.put("/{reservation_id}/status", response_model=StatusEnvelope)
async def update_reservation_status(
    reservation_id: int,
    body: DataRequest,
    db: AsyncSession = Depends(get_db),
):
    """Move a reservation to a new status"""
    reservation = await seating.apply_status(db, reservation_id, body.data)
    return {"data": {"status": reservation.status}}


@router.put("/{reservation_id}/edit", response_model=ReservationEnvelope)
async def edit_reservation(
    reservation_id: int,
    body: DataRequest,
    db: AsyncSession = Depends(get_db),
):
    """Update reservation details"""
    reservation = await reservations.update_reservation(db, reservation_id, body.data)
    return {"data": reservation}
