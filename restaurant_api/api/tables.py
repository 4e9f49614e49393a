"""Table API endpoints"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.database import get_db
from restaurant_api.schemas.common import DataRequest, ErrorResponse
from restaurant_api.schemas.table import TableEnvelope, TableListEnvelope
from restaurant_api.services import queries, seating

router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)


@router.get("", response_model=TableListEnvelope)
async def list_tables(db: AsyncSession = Depends(get_db)):
    """List tables by name"""
    return {"data": await queries.list_tables(db)}


@router.post("", response_model=TableEnvelope, status_code=201)
async def create_table(
    body: DataRequest,
    db: AsyncSession = Depends(get_db),
):
    """Create a table"""
    return {"data": await seating.create_table(db, body.data)}


@router.get("/{table_id}", response_model=TableEnvelope)
async def get_table(
    table_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get table details"""
    return {"data": await queries.get_table(db, table_id)}


@router.put("/{table_id}/seat", response_model=TableEnvelope)
async def seat_table(
    table_id: int,
    body: DataRequest,
    db: AsyncSession = Depends(get_db),
):
    """Seat a reservation at a table"""
    return {"data": await seating.seat_reservation(db, table_id, body.data)}


@router.delete("/{table_id}/seat", response_model=TableEnvelope)
async def finish_table(
    table_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Free a table and finish its reservation"""
    return {"data": await seating.release_table(db, table_id)}
