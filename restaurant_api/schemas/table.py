"""Table schemas"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel


class TableResponse(BaseModel):
    """Table response"""
    table_id: int
    table_name: str
    capacity: int
    occupied: bool
    reservation_id: Optional[int]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class TableEnvelope(BaseModel):
    data: TableResponse


class TableListEnvelope(BaseModel):
    data: List[TableResponse]
