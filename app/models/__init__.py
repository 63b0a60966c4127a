"""
Database models package
"""

from .event import Event
from .sub_event import WeddingSubEvent, VendorAssignment
from .vendor import Vendor
from .table import SeatingTable
from .guest import Guest
from .budget import BudgetCategory

__all__ = [
    "Event",
    "WeddingSubEvent",
    "VendorAssignment",
    "Vendor",
    "SeatingTable",
    "Guest",
    "BudgetCategory",
]
