"""Pydantic schemas for request/response envelopes"""

from restaurant_api.schemas.common import DataRequest, ErrorResponse
from restaurant_api.schemas.reservation import (
    ReservationResponse,
    ReservationEnvelope,
    ReservationListEnvelope,
    StatusResponse,
    StatusEnvelope,
)
from restaurant_api.schemas.table import (
    TableResponse,
    TableEnvelope,
    TableListEnvelope,
)

__all__ = [
    "DataRequest",
    "ErrorResponse",
    "ReservationResponse",
    "ReservationEnvelope",
    "ReservationListEnvelope",
    "StatusResponse",
    "StatusEnvelope",
    "TableResponse",
    "TableEnvelope",
    "TableListEnvelope",
]
