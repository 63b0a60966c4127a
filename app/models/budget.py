"""
Budget category model
"""

from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.db import Base

class BudgetCategory(Base):
    __tablename__ = "budget_categories"
    
    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    category = Column(String(100), nullable=False)  # catering, venue, decor, ...
    planned = Column(Integer, default=0)  # all amounts in paise
    committed = Column(Integer, default=0)
    paid = Column(Integer, default=0)
    
    # Relationships
    event = relationship("Event", back_populates="budget_categories")
    
    __table_args__ = (
        UniqueConstraint("event_id", "category", name="uq_budget_categories_event_category"),
    )
