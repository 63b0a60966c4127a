"""
Seating table model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from app.core.db import Base

class SeatingTable(Base):
    __tablename__ = "seating_tables"
    
    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    capacity = Column(Integer, nullable=False)
    shape = Column(String(20), default="round")  # round, rectangular, oval
    category = Column(String(20), default="general")  # vip, family, friends, general
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    event = relationship("Event", back_populates="tables")
    guests = relationship("Guest", back_populates="table")
    
    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_seating_tables_capacity_positive"),
    )
