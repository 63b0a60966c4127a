"""
Public API routes - no authentication required
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.schemas.common import ErrorCode
from app.services.qr_service import QRService
from app.services.repositories import EventRepo
from app.services.timeline_service import TimelineService
from app.services.wedding_status import InvalidEventData
from app.utils.security import rate_limit_check, get_client_ip
from app.utils.responses import success_response, error_response, not_found_error, rate_limit_error

router = APIRouter()

PUBLIC_TIMELINE_FIELDS = ("display_name", "start_datetime", "end_datetime", "venue_name", "status", "status_label")

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.get("/events/{public_code}/timeline")
async def get_public_timeline(
    public_code: str,
    request: Request,
    db: Session = Depends(get_db)
):
    """Ceremony schedule for guests, without planning details"""
    if not rate_limit_check(get_client_ip(request)):
        raise rate_limit_error()

    event = EventRepo.get_by_public_code(db, public_code)
    if not event:
        raise not_found_error("Event")

    try:
        timeline = TimelineService.get_timeline_status(event.id, db, include_vendors=False)
    except InvalidEventData as e:
        return error_response(message=str(e), error_code=ErrorCode.INVALID_EVENT_DATA, status_code=422)

    return success_response(
        message="Timeline retrieved",
        data={
            "event_name": event.name,
            "event_date": event.date,
            "ceremonies": [
                {field: item[field] for field in PUBLIC_TIMELINE_FIELDS}
                for item in timeline
            ],
        }
    )

@router.get("/events/{public_code}/qr.png")
async def get_qr_code(
    public_code: str,
    db: Session = Depends(get_db)
):
    """QR code linking to the wedding's public timeline"""
    if not EventRepo.get_by_public_code(db, public_code):
        raise not_found_error("Event")

    qr_bytes = QRService.generate_event_qr(public_code)

    return Response(
        content=qr_bytes,
        media_type="image/png",
        headers={"Content-Disposition": f"inline; filename=qr_{public_code}.png"}
    )
