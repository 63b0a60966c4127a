"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

from app.schemas.wedding import BoundaryPolicy

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./wedding_planner.db")

    # Security
    ADMIN_TOKEN: str = os.getenv("ADMIN_TOKEN", "admin_token_123")

    # Application
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:8000",
    ]

    # Rate limiting
    RATE_LIMIT_PER_MINUTE: int = 30

    # Timeline status
    VENDOR_BUFFER_MINUTES: int = 120
    EVENT_BOUNDARY_POLICY: BoundaryPolicy = BoundaryPolicy.HALF_OPEN

    # Accommodation
    DEFAULT_HOTELS: List[str] = [
        "Taj Palace",
        "The Oberoi",
        "ITC Maurya",
        "The Leela Palace",
    ]

    # Guest-driven costs, in rupees
    CATERING_PER_HEAD: int = 1500
    ROOM_COST_PER_NIGHT: int = 4000
    TRANSPORT_COST_PER_SEAT: int = 500

    class Config:
        env_file = ".env"

settings = Settings()
