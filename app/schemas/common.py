"""
Common Pydantic schemas: the JSON envelope every route answers with
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel

class ErrorCode(str, Enum):
    NO_TABLES_AVAILABLE = "NO_TABLES_AVAILABLE"
    INVALID_EVENT_DATA = "INVALID_EVENT_DATA"
    SEATING_VALIDATION = "SEATING_VALIDATION"
    CAPACITY_BELOW_OCCUPANCY = "CAPACITY_BELOW_OCCUPANCY"
    INVITATION_NOT_FOUND = "INVITATION_NOT_FOUND"

class StandardResponse(BaseModel):
    success: bool
    message: str
    data: Optional[Any] = None

class ErrorResponse(BaseModel):
    """Failed request; ``details`` carries per-field or per-rule messages"""
    success: bool = False
    message: str
    error_code: Optional[ErrorCode] = None
    details: Optional[Any] = None
