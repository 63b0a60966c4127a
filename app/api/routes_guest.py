"""
Guest-facing RSVP routes, addressed by the guest's invitation token
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.schemas.common import ErrorCode
from app.schemas.guest import RSVPRequest, RSVPStatus
from app.services.broadcast_service import BroadcastService
from app.services.repositories import GuestRepo, SubEventRepo
from app.services.wedding_status import get_event_display_name
from app.api.ws import websocket_manager
from app.utils.security import rate_limit_check, get_client_ip
from app.utils.responses import success_response, error_response, rate_limit_error

router = APIRouter()

broadcast_service = BroadcastService(websocket_manager)

INVITATION_NOT_FOUND = "Invitation not found. Please check your link or contact the organizer."

@router.get("/rsvp/{token}")
async def get_invitation(
    token: str,
    request: Request,
    db: Session = Depends(get_db)
):
    """Look up the invitation behind an RSVP link"""
    if not rate_limit_check(get_client_ip(request)):
        raise rate_limit_error()

    guest = GuestRepo.get_by_rsvp_token(db, token)
    if not guest:
        return error_response(message=INVITATION_NOT_FOUND, error_code=ErrorCode.INVITATION_NOT_FOUND, status_code=404)

    event = guest.event
    return success_response(
        message="Invitation found",
        data={
            "guest_name": guest.full_name,
            "event_name": event.name,
            "event_date": event.date,
            "rsvp_status": guest.rsvp_status,
            "rsvp_deadline": event.rsvp_deadline,
            "ceremonies": [
                {
                    "name": get_event_display_name(SubEventRepo.to_snapshot(se)),
                    "start_datetime": se.start_datetime,
                    "venue_name": se.venue_name,
                }
                for se in event.sub_events
            ],
        }
    )

@router.post("/rsvp/{token}")
async def respond_to_invitation(
    token: str,
    rsvp: RSVPRequest,
    request: Request,
    db: Session = Depends(get_db)
):
    """Accept or decline an invitation"""
    if not rate_limit_check(get_client_ip(request)):
        raise rate_limit_error()

    guest = GuestRepo.get_by_rsvp_token(db, token)
    if not guest:
        return error_response(message=INVITATION_NOT_FOUND, error_code=ErrorCode.INVITATION_NOT_FOUND, status_code=404)

    status = RSVPStatus.ACCEPTED if rsvp.attending else RSVPStatus.DECLINED
    GuestRepo.set_rsvp(db, guest, status.value, rsvp.dietary)

    await broadcast_service.broadcast_rsvp_update(guest.event.public_code, guest.full_name, status.value)

    message = "Thank you, see you there!" if rsvp.attending else "Thank you for letting us know."
    return success_response(
        message=message,
        data={"guest_name": guest.full_name, "rsvp_status": status.value}
    )
