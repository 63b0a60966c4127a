"""
Wedding timeline service: ceremony templates, CRUD and status roll-up
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, List

from sqlalchemy.orm import Session

from app.core.config import settings
from app.models import Event, VendorAssignment, WeddingSubEvent
from app.schemas.wedding import (
    DefaultTimelineRequest,
    SubEventCreate,
    SubEventUpdate,
    WeddingEventName,
)
from app.services.repositories import SubEventRepo
from app.services.wedding_status import (
    classify_timeline,
    get_event_display_name,
    get_status_color,
    get_status_icon,
    get_status_label,
)

logger = logging.getLogger(__name__)

# Offset from the wedding date and duration, in hours
EVENT_TEMPLATES: Dict[WeddingEventName, Dict[str, int]] = {
    WeddingEventName.ENGAGEMENT: {"hours_from_start": -720, "duration": 3},  # 30 days before
    WeddingEventName.MEHENDI: {"hours_from_start": -48, "duration": 4},
    WeddingEventName.HALDI: {"hours_from_start": -24, "duration": 3},
    WeddingEventName.SANGEET: {"hours_from_start": -12, "duration": 5},  # evening before
    WeddingEventName.WEDDING: {"hours_from_start": 0, "duration": 4},
    WeddingEventName.RECEPTION: {"hours_from_start": 6, "duration": 4},
}
CUSTOM_EVENT_OFFSET_HOURS = -36
CUSTOM_EVENT_DURATION_HOURS = 3


class TimelineService:
    """Service for wedding sub-event operations"""

    @staticmethod
    def build_default_sub_events(event: Event, request: DefaultTimelineRequest) -> List[WeddingSubEvent]:
        """Lay out the selected ceremonies around the wedding date"""
        sub_events = []
        order = 1

        for name in request.selected_events:
            template = EVENT_TEMPLATES.get(name)
            if not template:
                continue
            start = event.date + timedelta(hours=template["hours_from_start"])
            sub_events.append(WeddingSubEvent(
                event_id=event.id,
                event_name=name.value,
                description=f"{name.value.capitalize()} ceremony",
                start_datetime=start,
                end_datetime=start + timedelta(hours=template["duration"]),
                venue_name=event.venue_name,
                expected_guest_count=event.capacity,
                sequence_order=order,
            ))
            order += 1

        for raw_name in request.custom_event_names:
            name = raw_name.strip()
            if not name:
                continue
            start = event.date + timedelta(hours=CUSTOM_EVENT_OFFSET_HOURS)
            sub_events.append(WeddingSubEvent(
                event_id=event.id,
                event_name=WeddingEventName.CUSTOM.value,
                custom_event_name=name,
                description=f"{name} ceremony",
                start_datetime=start,
                end_datetime=start + timedelta(hours=CUSTOM_EVENT_DURATION_HOURS),
                venue_name=event.venue_name,
                expected_guest_count=event.capacity,
                sequence_order=order,
            ))
            order += 1

        return sub_events

    @staticmethod
    def create_default_sub_events(event: Event, request: DefaultTimelineRequest, db: Session) -> List[WeddingSubEvent]:
        sub_events = TimelineService.build_default_sub_events(event, request)
        db.add_all(sub_events)
        db.commit()
        logger.info(f"Created {len(sub_events)} default ceremonies for event {event.id}")
        return sub_events

    @staticmethod
    def create_sub_event(event: Event, data: SubEventCreate, db: Session) -> WeddingSubEvent:
        fields = data.model_dump()
        fields["event_name"] = data.event_name.value
        if fields["sequence_order"] is None:
            fields["sequence_order"] = SubEventRepo.next_sequence_order(db, event.id)

        sub_event = WeddingSubEvent(event_id=event.id, **fields)
        db.add(sub_event)
        db.commit()
        db.refresh(sub_event)
        return sub_event

    @staticmethod
    def update_sub_event(sub_event: WeddingSubEvent, data: SubEventUpdate, db: Session) -> WeddingSubEvent:
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(sub_event, field, value)
        sub_event.updated_at = datetime.utcnow()
        db.commit()
        db.refresh(sub_event)
        return sub_event

    @staticmethod
    def assign_vendor(sub_event: WeddingSubEvent, vendor_id: int, status: str, scope, db: Session) -> VendorAssignment:
        assignment = VendorAssignment(
            sub_event_id=sub_event.id,
            vendor_id=vendor_id,
            status=status,
            scope=scope,
        )
        db.add(assignment)
        db.commit()
        db.refresh(assignment)
        return assignment

    @staticmethod
    def get_timeline_status(event_id: int, db: Session, include_vendors: bool = True) -> List[Dict]:
        """Every ceremony of a wedding with its ready/attention/conflict status"""
        sub_events = SubEventRepo.list_for_event(db, event_id)
        snapshots = [SubEventRepo.to_snapshot(se) for se in sub_events]

        results = classify_timeline(
            snapshots,
            buffer_minutes=settings.VENDOR_BUFFER_MINUTES,
            boundary_policy=settings.EVENT_BOUNDARY_POLICY,
        )

        timeline = []
        for snapshot, details in results:
            item = {
                "id": snapshot.id,
                "event_name": snapshot.event_name.value,
                "display_name": get_event_display_name(snapshot),
                "start_datetime": snapshot.start_datetime,
                "end_datetime": snapshot.end_datetime,
                "venue_name": snapshot.venue_name,
                "status": details.status.value,
                "status_label": get_status_label(details.status),
                "status_color": get_status_color(details.status),
                "status_icon": get_status_icon(details.status),
                "issues": details.issues,
                "conflicts": details.conflicts,
            }
            if include_vendors:
                item["vendors"] = [va.model_dump(mode="json") for va in snapshot.vendor_assignments]
            timeline.append(item)

        return timeline
