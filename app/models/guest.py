"""
Guest model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base

class Guest(Base):
    __tablename__ = "guests"
    
    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), default="")
    family_group_name = Column(String(255), nullable=True)
    family_side = Column(String(20), default="bride")  # bride, groom
    is_vip = Column(Boolean, default=False)
    is_elderly = Column(Boolean, default=False)
    is_child = Column(Boolean, default=False)
    dietary = Column(String(255), default="none")
    
    # RSVP
    rsvp_status = Column(String(20), default="pending")  # accepted, pending, declined
    rsvp_token = Column(String(64), unique=True, nullable=False, index=True)
    rsvp_responded_at = Column(DateTime, nullable=True)
    
    # Seating
    table_id = Column(Integer, ForeignKey("seating_tables.id"), nullable=True, index=True)
    seat_number = Column(Integer, nullable=True)
    
    # Logistics
    is_outstation = Column(Boolean, default=False)
    hotel_name = Column(String(255), nullable=True)
    needs_pickup = Column(Boolean, default=False)
    pickup_assigned = Column(Boolean, default=False)
    
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    event = relationship("Event", back_populates="guests")
    table = relationship("SeatingTable", back_populates="guests")
    
    @property
    def full_name(self) -> str:
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or "Unknown"
