"""
Pydantic schemas package
"""

from .common import *
from .event import *
from .guest import *
from .wedding import *
from .seating import *
from .budget import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "ErrorCode",
    "EventCreate",
    "EventResponse",
    "EventDetail",
    "RSVPStatus",
    "GuestCreate",
    "GuestResponse",
    "RSVPRequest",
    "WeddingEventName",
    "AssignmentStatus",
    "EventStatus",
    "BoundaryPolicy",
    "VendorAssignmentRef",
    "SubEventSnapshot",
    "EventStatusDetails",
    "SubEventCreate",
    "SubEventUpdate",
    "DefaultTimelineRequest",
    "VendorCreate",
    "VendorAssignmentCreate",
    "VendorAssignmentUpdate",
    "TableShape",
    "TableCategory",
    "TableCreate",
    "TableUpdate",
    "TableSnapshot",
    "SeatingGuest",
    "Placement",
    "AutoAssignResult",
    "SeatAssignment",
    "BudgetHealth",
    "AlertSeverity",
    "BudgetCategoryInput",
    "CategoryBudget",
    "BudgetSummary",
    "CostDriver",
    "Alert",
    "ChangeImpact",
    "ChangeImpactRequest",
    "GuestStats",
    "OutstationStats",
    "VIPStats",
    "CostImpact",
    "ConfirmationRate",
    "HouseholdCompleteness",
    "BudgetOverview",
]
