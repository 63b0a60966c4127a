"""
Wedding sub-event (ceremony) and vendor assignment models
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from app.core.db import Base

class WeddingSubEvent(Base):
    __tablename__ = "wedding_sub_events"
    
    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    event_name = Column(String(50), nullable=False)  # engagement, mehendi, haldi, sangeet, wedding, reception, custom
    custom_event_name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    start_datetime = Column(DateTime, nullable=True)
    end_datetime = Column(DateTime, nullable=True)
    venue_name = Column(String(255), nullable=True)
    venue_address = Column(String(500), nullable=True)
    expected_guest_count = Column(Integer, nullable=True)
    guest_subset = Column(String(255), nullable=True)
    dress_code = Column(String(255), nullable=True)
    transport_required = Column(Boolean, default=False)
    transport_assigned = Column(Boolean, default=False)
    budget_allocated = Column(Integer, nullable=True)  # paise
    sequence_order = Column(Integer, default=0)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    event = relationship("Event", back_populates="sub_events")
    vendor_assignments = relationship(
        "VendorAssignment",
        back_populates="sub_event",
        cascade="all, delete-orphan",
        order_by="VendorAssignment.id",
    )

class VendorAssignment(Base):
    __tablename__ = "vendor_assignments"
    
    id = Column(Integer, primary_key=True, index=True)
    sub_event_id = Column(Integer, ForeignKey("wedding_sub_events.id"), nullable=False, index=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False)
    status = Column(String(20), default="pending")  # confirmed, pending, declined
    scope = Column(String(255), nullable=True)
    
    # Relationships
    sub_event = relationship("WeddingSubEvent", back_populates="vendor_assignments")
    vendor = relationship("Vendor")
