"""
Guest-related Pydantic schemas
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel

class RSVPStatus(str, Enum):
    ACCEPTED = "accepted"
    PENDING = "pending"
    DECLINED = "declined"

class GuestCreate(BaseModel):
    """Schema for creating a guest"""
    first_name: str
    last_name: str = ""
    family_group_name: Optional[str] = None
    family_side: str = "bride"
    is_vip: bool = False
    is_elderly: bool = False
    is_child: bool = False
    dietary: str = "none"
    rsvp_status: RSVPStatus = RSVPStatus.PENDING
    is_outstation: bool = False
    hotel_name: Optional[str] = None
    needs_pickup: bool = False
    pickup_assigned: bool = False

class GuestResponse(BaseModel):
    """Guest response schema with seating"""
    id: int
    full_name: str
    family_group_name: Optional[str] = None
    family_side: Optional[str] = None
    is_vip: bool
    is_elderly: bool
    is_child: bool
    dietary: Optional[str] = None
    rsvp_status: RSVPStatus
    table_id: Optional[int] = None
    seat_number: Optional[int] = None
    hotel_name: Optional[str] = None
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True

class RSVPRequest(BaseModel):
    """Guest RSVP response"""
    attending: bool
    dietary: Optional[str] = None
