"""
Vendor model
"""

from sqlalchemy import Column, Integer, String

from app.core.db import Base

class Vendor(Base):
    __tablename__ = "vendors"
    
    id = Column(Integer, primary_key=True, index=True)
    business_name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)  # catering, decor, photography, ...
    contact_phone = Column(String(50), nullable=True)
    contact_email = Column(String(255), nullable=True)
