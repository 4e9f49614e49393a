"""Creating and editing reservations"""

from datetime import datetime
from functools import partial
from typing import Any, Mapping, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.errors import ConflictError
from restaurant_api.models.reservation import Reservation, ReservationStatus
from restaurant_api.models.table import Table
from restaurant_api.services.queries import get_reservation
from restaurant_api.services.validation import (
    parse_reservation_slot,
    run_checks,
    validate_data_present,
    validate_initial_status,
    validate_reservation_payload,
)

logger = structlog.get_logger()


def _reservation_fields(data: Mapping[str, Any]) -> dict:
    reservation_date, reservation_time = parse_reservation_slot(
        data["reservation_date"], data["reservation_time"]
    )
    return {
        "first_name": data["first_name"],
        "last_name": data["last_name"],
        "mobile_number": data["mobile_number"],
        "reservation_date": reservation_date,
        "reservation_time": reservation_time,
        "people": int(data["people"]),
    }


async def create_reservation(
    db: AsyncSession,
    data: Optional[Mapping[str, Any]],
    now: Optional[datetime] = None,
) -> Reservation:
    """Validate and store a new reservation"""
    run_checks(
        partial(validate_data_present, data),
        lambda: validate_reservation_payload(data, now),
        lambda: validate_initial_status(data.get("status")),
    )

    reservation = Reservation(
        **_reservation_fields(data),
        status=data.get("status") or ReservationStatus.BOOKED.value,
    )
    db.add(reservation)
    await db.commit()
    await db.refresh(reservation)

    logger.info(
        "Reservation created",
        reservation_id=reservation.reservation_id,
        reservation_date=str(reservation.reservation_date),
        people=reservation.people,
    )
    return reservation


async def update_reservation(
    db: AsyncSession,
    reservation_id: Any,
    data: Optional[Mapping[str, Any]],
    now: Optional[datetime] = None,
) -> Reservation:
    """Replace a reservation's details; status is only changed through transitions

    A seated party cannot grow past the capacity of its table.
    """
    reservation = await get_reservation(db, reservation_id)
    run_checks(
        partial(validate_data_present, data),
        lambda: validate_reservation_payload(data, now),
    )

    fields = _reservation_fields(data)
    if reservation.status == ReservationStatus.SEATED.value:
        result = await db.execute(
            select(Table).where(Table.reservation_id == reservation.reservation_id)
        )
        for table in result.scalars().all():
            if table.capacity < fields["people"]:
                raise ConflictError(f"The max capacity for {table.table_name} is {table.capacity}!")

    for field, value in fields.items():
        setattr(reservation, field, value)

    await db.commit()
    await db.refresh(reservation)

    logger.info("Reservation edited", reservation_id=reservation.reservation_id)
    return reservation
