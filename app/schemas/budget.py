"""
Budget and guest-metrics schemas
"""

from enum import Enum
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

class BudgetHealth(str, Enum):
    ON_TRACK = "on-track"
    AT_RISK = "at-risk"
    OVER_BUDGET = "over-budget"

class AlertSeverity(str, Enum):
    RED = "red"
    AMBER = "amber"

class BudgetCategoryInput(BaseModel):
    """Planned/committed/paid amounts for one category, in paise"""
    category: str
    planned: int = Field(0, ge=0)
    committed: int = Field(0, ge=0)
    paid: int = Field(0, ge=0)

class CategoryBudget(BaseModel):
    category: str
    planned: int
    committed: int
    paid: int
    pending: int
    delta: int
    delta_percentage: float
    is_over_budget: bool

class BudgetSummary(BaseModel):
    total_budget: int
    planned: int
    committed: int
    paid: int
    pending: int
    overrun: int
    health: BudgetHealth

class CostDriver(BaseModel):
    name: str
    planned: int
    current: int
    delta: int

class Alert(BaseModel):
    """Dashboard alert, shared by budget and guest metrics"""
    id: str
    severity: AlertSeverity
    message: str
    link: str
    impact: Optional[str] = None

class ChangeImpact(BaseModel):
    total_impact: int
    affected_categories_count: int
    message: str

class GuestStats(BaseModel):
    total: int = 0
    confirmed: int = 0
    pending: int = 0
    declined: int = 0
    confirmation_rate: int = 0

class OutstationStats(BaseModel):
    total: int = 0
    rooms_assigned: int = 0
    pickup_needed: int = 0
    rooms_unassigned: int = 0
    pickup_unassigned: int = 0

class VIPStats(BaseModel):
    total: int = 0
    elderly: int = 0
    children: int = 0

class CostImpact(BaseModel):
    catering: int
    rooms: int
    transport: int
    total: int
    pending_impact: int = 0

class ConfirmationRate(BaseModel):
    rate: int
    color: str  # green, amber, red

class HouseholdCompleteness(BaseModel):
    percentage: int
    fully_responded: int
    partial_responses: int
    pending: int

class BudgetOverview(BaseModel):
    summary: BudgetSummary
    categories: List[CategoryBudget]
    cost_drivers: List[CostDriver]
    alerts: List[Alert]

class ChangeImpactRequest(BaseModel):
    """A proposed change to preview against the budget; value in rupees"""
    change_type: Literal["add-guests", "add-vendor", "change-scope"]
    change_value: int = Field(..., ge=0)
    affected_categories: List[str] = Field(default_factory=list)
