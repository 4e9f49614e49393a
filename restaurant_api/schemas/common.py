"""Envelope schemas shared by every endpoint"""

from typing import Any, Dict, Optional
from pydantic import BaseModel


class DataRequest(BaseModel):
    """Request body wrapped as ``{"data": {...}}``

    The payload is left untyped so business rules, not the parser,
    decide which inputs are rejected and with what message.
    """
    data: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """Error body"""
    error: str
