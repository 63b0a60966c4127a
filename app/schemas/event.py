"""
Event-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

class EventCreate(BaseModel):
    """Schema for creating a wedding"""
    name: str
    date: datetime
    organizer_email: EmailStr
    venue_name: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=0)
    total_budget: int = Field(0, ge=0)  # paise
    rsvp_deadline: Optional[datetime] = None

class EventResponse(BaseModel):
    """Basic event response"""
    id: int
    name: str
    date: datetime
    organizer_email: str
    public_code: str
    venue_name: Optional[str] = None
    capacity: Optional[int] = None
    total_budget: int
    rsvp_deadline: Optional[datetime] = None
    created_at: datetime
    
    class Config:
        from_attributes = True

class EventDetail(EventResponse):
    """Detailed event response with counts"""
    total_guests: int
    total_tables: int
    total_sub_events: int
    seated_guests: int
