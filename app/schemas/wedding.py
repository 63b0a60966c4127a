"""
Wedding timeline schemas: sub-events, vendor assignments and status
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

class WeddingEventName(str, Enum):
    ENGAGEMENT = "engagement"
    MEHENDI = "mehendi"
    HALDI = "haldi"
    SANGEET = "sangeet"
    WEDDING = "wedding"
    RECEPTION = "reception"
    CUSTOM = "custom"

class AssignmentStatus(str, Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"
    DECLINED = "declined"

class EventStatus(str, Enum):
    READY = "ready"
    ATTENTION = "attention"
    CONFLICT = "conflict"

class BoundaryPolicy(str, Enum):
    """How two events sharing a boundary instant are compared"""
    HALF_OPEN = "half_open"  # back-to-back events do not overlap
    CLOSED = "closed"  # touching events overlap

class VendorAssignmentRef(BaseModel):
    """A vendor booked onto a sub-event"""
    vendor_id: int
    vendor_name: Optional[str] = None
    status: AssignmentStatus = AssignmentStatus.PENDING

class SubEventSnapshot(BaseModel):
    """Read-only view of a sub-event handed to the status engine"""
    id: int
    event_name: WeddingEventName
    custom_event_name: Optional[str] = None
    start_datetime: Optional[datetime] = None
    end_datetime: Optional[datetime] = None
    venue_name: Optional[str] = None
    expected_guest_count: Optional[int] = None
    guest_subset: Optional[str] = None
    vendor_assignments: List[VendorAssignmentRef] = Field(default_factory=list)
    transport_required: bool = False
    transport_assigned: bool = False
    budget_allocated: Optional[int] = None

class EventStatusDetails(BaseModel):
    """Outcome of classifying one sub-event"""
    status: EventStatus
    issues: List[str] = Field(default_factory=list)
    conflicts: List[str] = Field(default_factory=list)

class SubEventCreate(BaseModel):
    """Schema for adding a ceremony to a wedding"""
    event_name: WeddingEventName
    custom_event_name: Optional[str] = None
    description: Optional[str] = None
    start_datetime: datetime
    end_datetime: datetime
    venue_name: Optional[str] = None
    venue_address: Optional[str] = None
    expected_guest_count: Optional[int] = Field(None, ge=0)
    guest_subset: Optional[str] = None
    dress_code: Optional[str] = None
    transport_required: bool = False
    transport_assigned: bool = False
    budget_allocated: Optional[int] = Field(None, ge=0)
    sequence_order: Optional[int] = None

class SubEventUpdate(BaseModel):
    """Partial update of a ceremony"""
    custom_event_name: Optional[str] = None
    description: Optional[str] = None
    start_datetime: Optional[datetime] = None
    end_datetime: Optional[datetime] = None
    venue_name: Optional[str] = None
    venue_address: Optional[str] = None
    expected_guest_count: Optional[int] = Field(None, ge=0)
    guest_subset: Optional[str] = None
    dress_code: Optional[str] = None
    transport_required: Optional[bool] = None
    transport_assigned: Optional[bool] = None
    budget_allocated: Optional[int] = Field(None, ge=0)
    sequence_order: Optional[int] = None

    @field_validator("start_datetime", "end_datetime")
    @classmethod
    def times_cannot_be_cleared(cls, value):
        if value is None:
            raise ValueError("a ceremony must keep its start and end time")
        return value

class DefaultTimelineRequest(BaseModel):
    """Ceremonies to generate around the wedding date"""
    selected_events: List[WeddingEventName] = Field(
        default_factory=lambda: [
            WeddingEventName.ENGAGEMENT,
            WeddingEventName.MEHENDI,
            WeddingEventName.HALDI,
            WeddingEventName.SANGEET,
            WeddingEventName.WEDDING,
            WeddingEventName.RECEPTION,
        ]
    )
    custom_event_names: List[str] = Field(default_factory=list)

class VendorCreate(BaseModel):
    business_name: str
    category: str
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None

class VendorAssignmentCreate(BaseModel):
    vendor_id: int
    status: AssignmentStatus = AssignmentStatus.PENDING
    scope: Optional[str] = None

class VendorAssignmentUpdate(BaseModel):
    status: AssignmentStatus
