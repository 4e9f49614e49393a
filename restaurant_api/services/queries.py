"""Read-side queries for reservations and tables"""

import re
from datetime import date
from typing import Any, List

from sqlalchemy import String, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.errors import NotFoundError
from restaurant_api.models.reservation import Reservation, ReservationStatus
from restaurant_api.models.table import Table

# Characters people type into phone numbers that carry no digits
PHONE_FORMATTING = ("(", ")", "-", " ", ".", "+")


def coerce_id(value: Any) -> int:
    """Turn a JSON or path identifier into an int, 404 when impossible"""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    raise NotFoundError(f"{value} does not exist")


def _normalized_phone(column):
    for char in PHONE_FORMATTING:
        column = func.replace(column, char, "", type_=String)
    return column


async def get_reservation(db: AsyncSession, reservation_id: Any, lock: bool = False) -> Reservation:
    """Load a reservation or raise NotFoundError, optionally row-locked"""
    try:
        key = coerce_id(reservation_id)
    except NotFoundError:
        key = None
    reservation = None
    if key is not None:
        reservation = await db.get(Reservation, key, with_for_update=lock or None)
    if reservation is None:
        raise NotFoundError(f"Reservation {reservation_id} cannot be found")
    return reservation


async def get_table(db: AsyncSession, table_id: Any, lock: bool = False) -> Table:
    """Load a table, optionally row-locked for a seating change"""
    try:
        key = coerce_id(table_id)
    except NotFoundError:
        raise NotFoundError(f"Table {table_id} cannot be found") from None
    query = select(Table).where(Table.table_id == key)
    if lock:
        query = query.with_for_update()
    result = await db.execute(query)
    table = result.scalar_one_or_none()
    if table is None:
        raise NotFoundError(f"Table {table_id} cannot be found")
    return table


async def list_by_date(db: AsyncSession, reservation_date: date) -> List[Reservation]:
    """Reservations on a date that are not yet finished, earliest first"""
    result = await db.execute(
        select(Reservation)
        .where(
            Reservation.reservation_date == reservation_date,
            Reservation.status != ReservationStatus.FINISHED.value,
        )
        .order_by(Reservation.reservation_time.asc(), Reservation.reservation_id.asc())
    )
    return list(result.scalars().all())


async def search_by_phone(db: AsyncSession, fragment: str) -> List[Reservation]:
    """Reservations whose mobile number contains the fragment, newest first

    Formatting characters are ignored on both sides, so ``555-0100``
    matches a search for ``5550100`` and vice versa.
    """
    digits = re.sub(r"\D", "", fragment)
    if digits:
        condition = _normalized_phone(Reservation.mobile_number).contains(digits, autoescape=True)
    else:
        condition = Reservation.mobile_number.contains(fragment, autoescape=True)

    result = await db.execute(
        select(Reservation)
        .where(condition)
        .order_by(Reservation.created_at.desc(), Reservation.reservation_id.desc())
    )
    return list(result.scalars().all())


async def list_reservations(db: AsyncSession) -> List[Reservation]:
    """Every reservation that is not finished, by date then time"""
    result = await db.execute(
        select(Reservation)
        .where(Reservation.status != ReservationStatus.FINISHED.value)
        .order_by(
            Reservation.reservation_date.asc(),
            Reservation.reservation_time.asc(),
            Reservation.reservation_id.asc(),
        )
    )
    return list(result.scalars().all())


async def list_tables(db: AsyncSession) -> List[Table]:
    result = await db.execute(select(Table).order_by(Table.table_name.asc(), Table.table_id.asc()))
    return list(result.scalars().all())
