"""
Admin API routes - requires authentication
"""

import logging
from typing import List
from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import get_db
from app.models import Event, Guest, SeatingTable, Vendor
from app.schemas.budget import BudgetCategoryInput, ChangeImpactRequest
from app.schemas.common import ErrorCode
from app.schemas.event import EventCreate, EventDetail, EventResponse
from app.schemas.guest import GuestCreate, GuestResponse
from app.schemas.seating import SeatAssignment, TableCreate, TableUpdate
from app.schemas.wedding import (
    DefaultTimelineRequest,
    SubEventCreate,
    SubEventUpdate,
    VendorAssignmentCreate,
    VendorAssignmentUpdate,
    VendorCreate,
)
from app.services.broadcast_service import BroadcastService
from app.services.excel_service import ExcelService
from app.services.planning_service import PlanningService
from app.services.qr_service import QRService
from app.services.repositories import (
    BudgetRepo,
    EventRepo,
    GuestRepo,
    SeatingRepo,
    SubEventRepo,
    VendorRepo,
)
from app.services.seating_service import NoTablesAvailable, SeatingService, SeatingValidationError
from app.services.timeline_service import TimelineService
from app.services.wedding_status import InvalidEventData
from app.api.ws import websocket_manager
from app.utils.security import verify_admin_token
from app.utils.responses import success_response, error_response, not_found_error

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(verify_admin_token)])

broadcast_service = BroadcastService(websocket_manager)

def _get_event(db: Session, event_id: int) -> Event:
    event = EventRepo.get_by_id(db, event_id)
    if not event:
        raise not_found_error("Event")
    return event

def _table_data(table: SeatingTable) -> dict:
    return {
        "id": table.id,
        "name": table.name,
        "capacity": table.capacity,
        "shape": table.shape,
        "category": table.category,
    }

# -------- Events --------

@router.post("/events")
async def create_event(
    event_data: EventCreate,
    db: Session = Depends(get_db)
):
    """Create a new wedding"""
    event = EventRepo.create(db, **event_data.model_dump())
    logger.info(f"Created event {event.id} ({event.public_code})")

    return success_response(
        message="Event created successfully",
        data=EventResponse.model_validate(event),
        status_code=201
    )

@router.get("/events/{event_id}")
async def get_event_details(
    event_id: int,
    db: Session = Depends(get_db)
):
    """Get detailed event information"""
    event = _get_event(db, event_id)

    total_guests = db.query(Guest).filter(Guest.event_id == event_id).count()
    seated_guests = db.query(Guest).filter(
        Guest.event_id == event_id,
        Guest.table_id.isnot(None)
    ).count()

    data = EventDetail(
        **EventResponse.model_validate(event).model_dump(),
        total_guests=total_guests,
        total_tables=len(event.tables),
        total_sub_events=len(event.sub_events),
        seated_guests=seated_guests,
    )

    return success_response(message="Event details retrieved", data=data)

@router.delete("/events/{event_id}")
async def delete_event(
    event_id: int,
    db: Session = Depends(get_db)
):
    """Delete a wedding and everything planned under it"""
    event = _get_event(db, event_id)

    db.delete(event)
    db.commit()

    return success_response(
        message="Event deleted successfully",
        data={"deleted_event_id": event_id}
    )

# -------- Wedding timeline --------

@router.get("/events/{event_id}/timeline")
async def get_timeline(
    event_id: int,
    db: Session = Depends(get_db)
):
    """Every ceremony with its ready / attention / conflict status"""
    _get_event(db, event_id)

    try:
        timeline = TimelineService.get_timeline_status(event_id, db)
    except InvalidEventData as e:
        return error_response(
            message=str(e),
            error_code=ErrorCode.INVALID_EVENT_DATA,
            details={"sub_event_id": e.event_id},
            status_code=422
        )

    return success_response(message="Timeline retrieved", data=timeline)

@router.post("/events/{event_id}/sub-events")
async def create_sub_event(
    event_id: int,
    sub_event_data: SubEventCreate,
    db: Session = Depends(get_db)
):
    """Add a ceremony to the wedding"""
    event = _get_event(db, event_id)

    if sub_event_data.end_datetime < sub_event_data.start_datetime:
        return error_response(
            message="End time must not be before start time",
            error_code=ErrorCode.INVALID_EVENT_DATA,
            status_code=422
        )

    sub_event = TimelineService.create_sub_event(event, sub_event_data, db)
    await broadcast_service.broadcast_timeline_update(event.public_code, sub_event.id)

    return success_response(
        message="Ceremony created successfully",
        data={"id": sub_event.id, "event_name": sub_event.event_name},
        status_code=201
    )

@router.post("/events/{event_id}/sub-events/defaults")
async def create_default_sub_events(
    event_id: int,
    request: DefaultTimelineRequest,
    db: Session = Depends(get_db)
):
    """Generate the standard ceremonies around the wedding date"""
    event = _get_event(db, event_id)

    sub_events = TimelineService.create_default_sub_events(event, request, db)
    await broadcast_service.broadcast_timeline_update(event.public_code)

    return success_response(
        message=f"{len(sub_events)} ceremonies created",
        data=[{"id": se.id, "event_name": se.event_name, "custom_event_name": se.custom_event_name} for se in sub_events],
        status_code=201
    )

@router.patch("/sub-events/{sub_event_id}")
async def update_sub_event(
    sub_event_id: int,
    sub_event_update: SubEventUpdate,
    db: Session = Depends(get_db)
):
    """Update a ceremony"""
    sub_event = SubEventRepo.get_by_id(db, sub_event_id)
    if not sub_event:
        raise not_found_error("Ceremony")

    start = sub_event_update.start_datetime or sub_event.start_datetime
    end = sub_event_update.end_datetime or sub_event.end_datetime
    if start and end and end < start:
        return error_response(
            message="End time must not be before start time",
            error_code=ErrorCode.INVALID_EVENT_DATA,
            status_code=422
        )

    sub_event = TimelineService.update_sub_event(sub_event, sub_event_update, db)
    await broadcast_service.broadcast_timeline_update(sub_event.event.public_code, sub_event.id)

    return success_response(message="Ceremony updated successfully", data={"id": sub_event.id})

@router.delete("/sub-events/{sub_event_id}")
async def delete_sub_event(
    sub_event_id: int,
    db: Session = Depends(get_db)
):
    """Remove a ceremony and its vendor bookings"""
    sub_event = SubEventRepo.get_by_id(db, sub_event_id)
    if not sub_event:
        raise not_found_error("Ceremony")

    public_code = sub_event.event.public_code
    db.delete(sub_event)
    db.commit()
    await broadcast_service.broadcast_timeline_update(public_code, sub_event_id)

    return success_response(message="Ceremony deleted successfully", data={"deleted_sub_event_id": sub_event_id})

# -------- Vendors --------

@router.post("/vendors")
async def create_vendor(
    vendor_data: VendorCreate,
    db: Session = Depends(get_db)
):
    vendor = Vendor(**vendor_data.model_dump())
    db.add(vendor)
    db.commit()
    db.refresh(vendor)

    return success_response(
        message="Vendor created successfully",
        data={"id": vendor.id, "business_name": vendor.business_name, "category": vendor.category},
        status_code=201
    )

@router.post("/sub-events/{sub_event_id}/vendors")
async def assign_vendor(
    sub_event_id: int,
    assignment_data: VendorAssignmentCreate,
    db: Session = Depends(get_db)
):
    """Book a vendor onto a ceremony"""
    sub_event = SubEventRepo.get_by_id(db, sub_event_id)
    if not sub_event:
        raise not_found_error("Ceremony")
    if not VendorRepo.get_by_id(db, assignment_data.vendor_id):
        raise not_found_error("Vendor")

    assignment = TimelineService.assign_vendor(
        sub_event,
        assignment_data.vendor_id,
        assignment_data.status.value,
        assignment_data.scope,
        db
    )
    await broadcast_service.broadcast_timeline_update(sub_event.event.public_code, sub_event.id)

    return success_response(
        message="Vendor assigned successfully",
        data={"id": assignment.id, "vendor_id": assignment.vendor_id, "status": assignment.status},
        status_code=201
    )

@router.patch("/vendor-assignments/{assignment_id}")
async def update_vendor_assignment(
    assignment_id: int,
    assignment_update: VendorAssignmentUpdate,
    db: Session = Depends(get_db)
):
    """Confirm or decline a vendor booking"""
    assignment = VendorRepo.get_assignment(db, assignment_id)
    if not assignment:
        raise not_found_error("Vendor assignment")

    assignment.status = assignment_update.status.value
    db.commit()
    await broadcast_service.broadcast_timeline_update(
        assignment.sub_event.event.public_code, assignment.sub_event_id
    )

    return success_response(
        message="Vendor assignment updated",
        data={"id": assignment.id, "status": assignment.status}
    )

# -------- Seating tables --------

@router.post("/events/{event_id}/tables")
async def create_table(
    event_id: int,
    table_data: TableCreate,
    db: Session = Depends(get_db)
):
    _get_event(db, event_id)

    fields = table_data.model_dump(mode="json")
    table = SeatingTable(event_id=event_id, **fields)
    db.add(table)
    db.commit()
    db.refresh(table)

    return success_response(message="Table created successfully", data=_table_data(table), status_code=201)

@router.get("/events/{event_id}/tables")
async def get_seating_summary(
    event_id: int,
    db: Session = Depends(get_db)
):
    """Per-table occupancy"""
    _get_event(db, event_id)
    return success_response(
        message="Seating summary retrieved successfully",
        data=SeatingService.get_seating_summary(event_id, db)
    )

@router.get("/tables/{table_id}/guests")
async def get_table_guests(
    table_id: int,
    db: Session = Depends(get_db)
):
    if not SeatingRepo.get_table(db, table_id):
        raise not_found_error("Table")
    return success_response(
        message="Table guests retrieved",
        data=SeatingService.get_table_guests(table_id, db)
    )

@router.patch("/tables/{table_id}")
async def update_table(
    table_id: int,
    table_update: TableUpdate,
    db: Session = Depends(get_db)
):
    table = SeatingRepo.get_table(db, table_id)
    if not table:
        raise not_found_error("Table")

    updates = table_update.model_dump(mode="json", exclude_unset=True)
    if "capacity" in updates:
        seated = SeatingRepo.count_seated(db, table.id)
        if updates["capacity"] < seated:
            return error_response(
                message=f"Table '{table.name}' already seats {seated} guests",
                error_code=ErrorCode.CAPACITY_BELOW_OCCUPANCY,
                status_code=422
            )
        highest = SeatingRepo.highest_seat(db, table.id)
        if updates["capacity"] < highest:
            return error_response(
                message=f"Seat {highest} at table '{table.name}' is occupied",
                error_code=ErrorCode.CAPACITY_BELOW_OCCUPANCY,
                status_code=422
            )

    for field, value in updates.items():
        setattr(table, field, value)
    db.commit()
    db.refresh(table)

    return success_response(message="Table updated successfully", data=_table_data(table))

@router.delete("/tables/{table_id}")
async def delete_table(
    table_id: int,
    db: Session = Depends(get_db)
):
    """Delete a table after unseating its guests"""
    table = SeatingRepo.get_table(db, table_id)
    if not table:
        raise not_found_error("Table")

    public_code = table.event.public_code
    unseated = SeatingService.delete_table(table, db)
    await broadcast_service.broadcast_seating_update(public_code)

    return success_response(
        message="Table deleted successfully",
        data={"deleted_table_id": table_id, "unseated_guests": unseated}
    )

# -------- Guests and seating --------

@router.post("/events/{event_id}/guests")
async def create_guest(
    event_id: int,
    guest_data: GuestCreate,
    db: Session = Depends(get_db)
):
    _get_event(db, event_id)

    guest = GuestRepo.create(db, event_id, **guest_data.model_dump(mode="json"))

    data = GuestResponse.model_validate(guest).model_dump()
    data["rsvp_token"] = guest.rsvp_token
    data["rsvp_url"] = QRService.get_rsvp_url(guest.rsvp_token)
    return success_response(message="Guest created successfully", data=data, status_code=201)

@router.get("/events/{event_id}/guests")
async def list_guests(
    event_id: int,
    db: Session = Depends(get_db)
):
    """Guests who are attending or have not answered, with their seats"""
    _get_event(db, event_id)

    guests = GuestRepo.list_for_event(db, event_id, ["accepted", "pending"])
    return success_response(
        message="Guests retrieved successfully",
        data=[GuestResponse.model_validate(g) for g in guests]
    )

@router.get("/events/{event_id}/guests/stats")
async def get_guest_stats(
    event_id: int,
    db: Session = Depends(get_db)
):
    event = _get_event(db, event_id)
    return success_response(
        message="Guest statistics retrieved",
        data=PlanningService.get_guest_overview(event, db)
    )

@router.put("/guests/{guest_id}/seat")
async def assign_seat(
    guest_id: int,
    seat: SeatAssignment,
    db: Session = Depends(get_db)
):
    """Seat a guest manually"""
    guest = GuestRepo.get_by_id(db, guest_id)
    if not guest:
        raise not_found_error("Guest")
    table = SeatingRepo.get_table(db, seat.table_id)
    if not table:
        raise not_found_error("Table")

    try:
        guest = SeatingService.assign_guest_to_table(guest, table, seat.seat_number, db)
    except SeatingValidationError as e:
        return error_response(
            message="Validation failed",
            error_code=ErrorCode.SEATING_VALIDATION,
            details=e.errors,
            status_code=422
        )

    await broadcast_service.broadcast_seating_update(guest.event.public_code, assigned_count=1)
    return success_response(message="Guest seated successfully", data=GuestResponse.model_validate(guest))

@router.delete("/guests/{guest_id}/seat")
async def remove_seat(
    guest_id: int,
    db: Session = Depends(get_db)
):
    guest = GuestRepo.get_by_id(db, guest_id)
    if not guest:
        raise not_found_error("Guest")

    guest = SeatingService.remove_guest_from_table(guest, db)
    await broadcast_service.broadcast_seating_update(guest.event.public_code)
    return success_response(message="Guest removed from table", data=GuestResponse.model_validate(guest))

@router.post("/events/{event_id}/seating/auto-assign")
async def auto_assign_seating(
    event_id: int,
    db: Session = Depends(get_db)
):
    """Seat unassigned families at tables with room for all of them"""
    event = _get_event(db, event_id)

    try:
        result = SeatingService.auto_assign_event(event_id, db)
    except NoTablesAvailable as e:
        return error_response(message=e.message, error_code=ErrorCode.NO_TABLES_AVAILABLE, status_code=400)

    if result.assigned_count:
        await broadcast_service.broadcast_seating_update(event.public_code, assigned_count=result.assigned_count)

    message = f"{result.assigned_count} guests assigned"
    if result.unplaced_families:
        message += f"; {len(result.unplaced_families)} families could not be seated"
    return success_response(message=message, data=result)

@router.get("/events/{event_id}/seating/export.xlsx")
async def export_seating_chart(
    event_id: int,
    db: Session = Depends(get_db)
):
    """Download the seating chart as an Excel workbook"""
    event = _get_event(db, event_id)

    excel_content = ExcelService.export_seating_chart(event_id, db)

    return Response(
        content=excel_content,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename=seating_chart_{event.public_code}.xlsx"}
    )

# -------- Budget --------

@router.put("/events/{event_id}/budget/categories")
async def set_budget_categories(
    event_id: int,
    categories: List[BudgetCategoryInput],
    db: Session = Depends(get_db)
):
    """Create or replace planned/committed/paid amounts per category"""
    _get_event(db, event_id)

    rows = BudgetRepo.upsert_categories(db, event_id, [c.model_dump() for c in categories])
    return success_response(
        message="Budget categories saved",
        data=[BudgetCategoryInput.model_validate(r, from_attributes=True) for r in rows]
    )

@router.get("/events/{event_id}/budget")
async def get_budget_overview(
    event_id: int,
    db: Session = Depends(get_db)
):
    """Budget summary, cost drivers and alerts"""
    event = _get_event(db, event_id)
    return success_response(
        message="Budget overview retrieved",
        data=PlanningService.get_budget_overview(event, db)
    )

@router.post("/events/{event_id}/budget/impact")
async def preview_budget_change(
    event_id: int,
    change: ChangeImpactRequest,
    db: Session = Depends(get_db)
):
    """Preview what adding guests, a vendor or scope does to the budget"""
    event = _get_event(db, event_id)
    return success_response(
        message="Budget impact calculated",
        data=PlanningService.preview_change(event, change, db)
    )

# -------- Configuration --------

@router.get("/config/hotels")
async def get_default_hotels():
    """Hotels offered when assigning accommodation"""
    return success_response(message="Default hotels", data=settings.DEFAULT_HOTELS)
