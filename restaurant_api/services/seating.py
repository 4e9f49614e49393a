"""Table assignment: seating parties and releasing tables

A reservation and the table it occupies are always changed together.
Both mutations are staged on the same session and committed once; if
the commit fails the session is rolled back so neither write lands.
"""

from dataclasses import dataclass
from functools import partial
from typing import Any, Mapping, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.errors import APIError, ConflictError, ValidationError
from restaurant_api.models.reservation import Reservation, ReservationStatus
from restaurant_api.models.table import Table
from restaurant_api.services.queries import get_reservation, get_table
from restaurant_api.services.status import check_transition
from restaurant_api.services.validation import (
    run_checks,
    validate_data_present,
    validate_table_payload,
)

logger = structlog.get_logger()


@dataclass
class SeatingContext:
    """Entities loaded once and shared by every seating check"""
    table: Table
    reservation: Reservation


def check_seatable(context: SeatingContext) -> Optional[APIError]:
    """Party not yet seated, status allows seating, table big enough and free"""
    table, reservation = context.table, context.reservation

    if reservation.status == ReservationStatus.SEATED.value:
        return ConflictError("Party already seated")

    failure = check_transition(reservation.status, ReservationStatus.SEATED.value)
    if failure is not None:
        return failure

    if table.capacity < reservation.people:
        return ConflictError(f"The max capacity for {table.table_name} is {table.capacity}!")

    if table.occupied:
        return ConflictError(f"{table.table_name} is already occupied!")

    return None


def _require_reservation_id(data: Mapping[str, Any]) -> Optional[ValidationError]:
    if data.get("reservation_id") in (None, ""):
        return ValidationError("Missing reservation_id")
    return None


def check_direct_status(current: str, requested: Any) -> Optional[APIError]:
    """Statuses tied to a table only change through seat and release

    ``seated`` is reached by seating at a table, and ``finished`` only
    from ``seated`` so the table is released alongside it.
    """
    if requested == ReservationStatus.SEATED.value:
        return ValidationError("Reservations are seated through PUT /tables/{table_id}/seat")
    if requested == ReservationStatus.FINISHED.value and current != ReservationStatus.SEATED.value:
        return ValidationError("Only a seated reservation can be finished")
    return None


def _occupy(context: SeatingContext) -> None:
    context.table.occupied = True
    context.table.reservation_id = context.reservation.reservation_id
    context.reservation.status = ReservationStatus.SEATED.value


def _vacate(table: Table) -> None:
    table.occupied = False
    table.reservation_id = None


async def _commit(db: AsyncSession, action: str, **log_context) -> None:
    """Commit a table/reservation change as one unit"""
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        logger.error("Seating transaction rolled back", action=action, exc_info=True, **log_context)
        raise


async def load_seating_context(db: AsyncSession, table_id: Any, reservation_id: Any) -> SeatingContext:
    table = await get_table(db, table_id, lock=True)
    reservation = await get_reservation(db, reservation_id, lock=True)
    return SeatingContext(table=table, reservation=reservation)


async def seat_reservation(db: AsyncSession, table_id: Any, data: Optional[Mapping[str, Any]]) -> Table:
    """Seat the reservation named in ``data`` at a table"""
    run_checks(partial(validate_data_present, data))
    run_checks(partial(_require_reservation_id, data))

    context = await load_seating_context(db, table_id, data["reservation_id"])
    run_checks(partial(check_seatable, context))

    _occupy(context)
    await _commit(
        db,
        "seat",
        table_id=context.table.table_id,
        reservation_id=context.reservation.reservation_id,
    )

    logger.info(
        "Table seated",
        table_id=context.table.table_id,
        reservation_id=context.reservation.reservation_id,
        people=context.reservation.people,
    )
    return context.table


async def release_table(db: AsyncSession, table_id: Any) -> Table:
    """Free an occupied table and finish the reservation seated there"""
    table = await get_table(db, table_id, lock=True)
    if not table.occupied:
        raise ConflictError(f"{table.table_name} is not occupied")

    reservation_id = table.reservation_id
    reservation = await get_reservation(db, reservation_id, lock=True)

    _vacate(table)
    reservation.status = ReservationStatus.FINISHED.value
    await _commit(db, "release", table_id=table.table_id, reservation_id=reservation_id)

    logger.info("Table released", table_id=table.table_id, reservation_id=reservation_id)
    return table


async def apply_status(db: AsyncSession, reservation_id: Any, data: Optional[Mapping[str, Any]]) -> Reservation:
    """Move a reservation to a new status

    Leaving ``seated`` frees the table the party was sitting at in the
    same commit.
    """
    reservation = await get_reservation(db, reservation_id, lock=True)
    run_checks(partial(validate_data_present, data))

    requested = data.get("status")
    run_checks(
        partial(check_transition, reservation.status, requested),
        partial(check_direct_status, reservation.status, requested),
    )

    previous = reservation.status
    if previous == ReservationStatus.SEATED.value:
        result = await db.execute(
            select(Table)
            .where(Table.reservation_id == reservation.reservation_id)
            .with_for_update()
        )
        for table in result.scalars().all():
            _vacate(table)

    reservation.status = requested
    await _commit(db, "status", reservation_id=reservation.reservation_id, status=requested)

    logger.info(
        "Reservation status changed",
        reservation_id=reservation.reservation_id,
        previous=previous,
        status=requested,
    )
    return reservation


async def create_table(db: AsyncSession, data: Optional[Mapping[str, Any]]) -> Table:
    """Create a table, seating a reservation at it when one is named"""
    run_checks(
        partial(validate_data_present, data),
        lambda: validate_table_payload(data),
    )

    table = Table(
        table_name=data["table_name"],
        capacity=int(data["capacity"]),
        occupied=False,
    )

    reservation_id = data.get("reservation_id")
    if reservation_id not in (None, ""):
        reservation = await get_reservation(db, reservation_id, lock=True)
        context = SeatingContext(table=table, reservation=reservation)
        run_checks(partial(check_seatable, context))
        _occupy(context)

    db.add(table)
    await _commit(db, "create_table", table_name=table.table_name)

    logger.info(
        "Table created",
        table_id=table.table_id,
        table_name=table.table_name,
        capacity=table.capacity,
        reservation_id=table.reservation_id,
    )
    return table
