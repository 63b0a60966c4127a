"""
Seating-related Pydantic schemas
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from app.schemas.guest import RSVPStatus

class TableShape(str, Enum):
    ROUND = "round"
    RECTANGULAR = "rectangular"
    OVAL = "oval"

class TableCategory(str, Enum):
    VIP = "vip"
    FAMILY = "family"
    FRIENDS = "friends"
    GENERAL = "general"

class TableCreate(BaseModel):
    """Schema for creating a seating table"""
    name: str
    capacity: int = Field(..., gt=0)
    shape: TableShape = TableShape.ROUND
    category: TableCategory = TableCategory.GENERAL

class TableUpdate(BaseModel):
    """Schema for updating a seating table"""
    name: Optional[str] = None
    capacity: Optional[int] = Field(None, gt=0)
    shape: Optional[TableShape] = None
    category: Optional[TableCategory] = None

    @field_validator("name", "capacity")
    @classmethod
    def required_fields_cannot_be_cleared(cls, value):
        if value is None:
            raise ValueError("cannot be null")
        return value

class TableSnapshot(BaseModel):
    """Table as seen by the auto-assignment engine"""
    id: int
    name: str = ""
    capacity: int = Field(..., gt=0)
    category: TableCategory = TableCategory.GENERAL
    
    class Config:
        from_attributes = True

class SeatingGuest(BaseModel):
    """Guest as seen by the auto-assignment engine"""
    id: int
    family_group_name: Optional[str] = None
    is_vip: bool = False
    is_elderly: bool = False
    rsvp_status: RSVPStatus = RSVPStatus.PENDING
    table_id: Optional[int] = None
    seat_number: Optional[int] = None
    
    class Config:
        from_attributes = True

class Placement(BaseModel):
    """One guest seated by an auto-assignment run"""
    guest_id: int
    table_id: int
    seat_number: int

class AutoAssignResult(BaseModel):
    """Outcome of an auto-assignment run"""
    assigned_count: int = 0
    placements: List[Placement] = Field(default_factory=list)
    unplaced_families: List[str] = Field(default_factory=list)

class SeatAssignment(BaseModel):
    """Manual seat assignment request"""
    table_id: int
    seat_number: int = Field(..., gt=0)
