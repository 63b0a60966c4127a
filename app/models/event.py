"""
Event model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from app.core.db import Base

class Event(Base):
    """A wedding (the parent of its ceremonies, tables and guests)"""
    __tablename__ = "events"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    date = Column(DateTime, nullable=False)
    organizer_email = Column(String(255), nullable=False)
    public_code = Column(String(50), unique=True, nullable=False, index=True)
    venue_name = Column(String(255), nullable=True)
    capacity = Column(Integer, nullable=True)
    total_budget = Column(Integer, default=0)  # paise
    rsvp_deadline = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    sub_events = relationship(
        "WeddingSubEvent",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="WeddingSubEvent.start_datetime",
    )
    tables = relationship("SeatingTable", back_populates="event", cascade="all, delete-orphan")
    guests = relationship("Guest", back_populates="event", cascade="all, delete-orphan")
    budget_categories = relationship("BudgetCategory", back_populates="event", cascade="all, delete-orphan")
