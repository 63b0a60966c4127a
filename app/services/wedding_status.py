"""
Wedding sub-event status engine

Classifies every ceremony of a wedding:
- ready: nothing missing, no clashes
- attention: a planning item (guests, vendors, transport, budget, venue) is missing
- conflict: the ceremony overlaps a sibling, or shares a vendor with one
  without enough buffer time in between

Conflicts take priority: when any are found, issues are not evaluated.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Tuple

from app.schemas.wedding import (
    AssignmentStatus,
    BoundaryPolicy,
    EventStatus,
    EventStatusDetails,
    SubEventSnapshot,
    WeddingEventName,
)

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_MINUTES = 120

DISPLAY_NAMES = {
    WeddingEventName.ENGAGEMENT: "Engagement",
    WeddingEventName.MEHENDI: "Mehendi",
    WeddingEventName.HALDI: "Haldi",
    WeddingEventName.SANGEET: "Sangeet",
    WeddingEventName.WEDDING: "Wedding",
    WeddingEventName.RECEPTION: "Reception",
    WeddingEventName.CUSTOM: "Custom",
}

STATUS_LABELS = {
    EventStatus.READY: "Ready",
    EventStatus.ATTENTION: "Attention Needed",
    EventStatus.CONFLICT: "Conflict",
}

STATUS_COLORS = {
    EventStatus.READY: "green",
    EventStatus.ATTENTION: "amber",
    EventStatus.CONFLICT: "red",
}

STATUS_ICONS = {
    EventStatus.READY: "✅",
    EventStatus.ATTENTION: "⚠️",
    EventStatus.CONFLICT: "🔴",
}


class InvalidEventData(ValueError):
    """Raised when a sub-event cannot be placed on the timeline"""

    def __init__(self, event_id: int, reason: str):
        self.event_id = event_id
        self.reason = reason
        super().__init__(f"Sub-event {event_id}: {reason}")


def get_event_display_name(event: SubEventSnapshot) -> str:
    """Custom name when present, otherwise the ceremony's display name"""
    if event.custom_event_name:
        return event.custom_event_name
    return DISPLAY_NAMES.get(event.event_name, event.event_name.value)


def get_status_label(status: EventStatus) -> str:
    return STATUS_LABELS[status]


def get_status_color(status: EventStatus) -> str:
    return STATUS_COLORS[status]


def get_status_icon(status: EventStatus) -> str:
    return STATUS_ICONS[status]


def _interval(event: SubEventSnapshot) -> Tuple[datetime, datetime]:
    if event.start_datetime is None:
        raise InvalidEventData(event.id, "start time is missing")
    if event.end_datetime is None:
        raise InvalidEventData(event.id, "end time is missing")
    return event.start_datetime, event.end_datetime


def intervals_overlap(
    a: Tuple[datetime, datetime],
    b: Tuple[datetime, datetime],
    policy: BoundaryPolicy = BoundaryPolicy.HALF_OPEN,
) -> bool:
    """Check whether two (start, end) intervals overlap.

    Under the half-open policy an interval ending exactly when the other
    starts does not overlap it, and an interval whose end is not after its
    start is empty. Under the closed policy shared boundary instants count.
    """
    a_start, a_end = a
    b_start, b_end = b
    if policy == BoundaryPolicy.CLOSED:
        return a_start <= b_end and b_start <= a_end
    if a_end <= a_start or b_end <= b_start:
        return False
    return a_start < b_end and b_start < a_end


def gap_between(a: Tuple[datetime, datetime], b: Tuple[datetime, datetime]) -> timedelta:
    """Idle time from the end of the earlier interval to the start of the later one.

    Negative when the intervals overlap.
    """
    first, second = sorted([a, b])
    return second[0] - first[1]


def _shared_vendor_names(event: SubEventSnapshot, other: SubEventSnapshot) -> List[str]:
    other_ids = {va.vendor_id for va in other.vendor_assignments}
    names: List[str] = []
    seen = set()
    for va in event.vendor_assignments:
        if va.vendor_id in other_ids and va.vendor_id not in seen:
            seen.add(va.vendor_id)
            names.append(va.vendor_name or "Unknown Vendor")
    return names


def detect_conflicts(
    event: SubEventSnapshot,
    all_events: Iterable[SubEventSnapshot],
    buffer_minutes: int = DEFAULT_BUFFER_MINUTES,
    boundary_policy: BoundaryPolicy = BoundaryPolicy.HALF_OPEN,
) -> List[str]:
    """Collect time and vendor clashes between an event and its siblings"""
    conflicts: List[str] = []
    interval = _interval(event)
    buffer = timedelta(minutes=buffer_minutes)

    for other in all_events:
        if other.id == event.id:
            continue

        other_interval = _interval(other)
        other_name = get_event_display_name(other)

        if intervals_overlap(interval, other_interval, boundary_policy):
            conflicts.append(f"Overlaps with {other_name}")

        vendor_names = _shared_vendor_names(event, other)
        if vendor_names and gap_between(interval, other_interval) < buffer:
            conflicts.append(
                f"Vendor conflict with {other_name}: {', '.join(vendor_names)} - insufficient buffer time"
            )

    return conflicts


def detect_issues(event: SubEventSnapshot) -> List[str]:
    """Collect missing planning items for an event"""
    issues: List[str] = []

    if not event.guest_subset or not event.expected_guest_count:
        issues.append("Guest subset not defined")

    if not event.vendor_assignments:
        issues.append("No vendors assigned")
    else:
        unconfirmed = sum(
            1 for va in event.vendor_assignments if va.status != AssignmentStatus.CONFIRMED
        )
        if unconfirmed:
            issues.append(f"{unconfirmed} vendor(s) not confirmed")

    if event.transport_required and not event.transport_assigned:
        issues.append("Transport not assigned")

    if not event.budget_allocated:
        issues.append("Budget not set")

    if not event.venue_name:
        issues.append("Venue not specified")

    return issues


def classify(
    event: SubEventSnapshot,
    all_events: Iterable[SubEventSnapshot],
    buffer_minutes: int = DEFAULT_BUFFER_MINUTES,
    boundary_policy: BoundaryPolicy = BoundaryPolicy.HALF_OPEN,
) -> EventStatusDetails:
    """Calculate the status of one ceremony against all ceremonies of its wedding.

    ``all_events`` may include ``event`` itself; it is skipped by id.
    Raises InvalidEventData when a start or end time is missing.
    """
    conflicts = detect_conflicts(event, all_events, buffer_minutes, boundary_policy)
    if conflicts:
        return EventStatusDetails(status=EventStatus.CONFLICT, issues=[], conflicts=conflicts)

    issues = detect_issues(event)
    if issues:
        return EventStatusDetails(status=EventStatus.ATTENTION, issues=issues, conflicts=[])

    return EventStatusDetails(status=EventStatus.READY)


def classify_timeline(
    events: List[SubEventSnapshot],
    buffer_minutes: int = DEFAULT_BUFFER_MINUTES,
    boundary_policy: Optional[BoundaryPolicy] = None,
) -> List[Tuple[SubEventSnapshot, EventStatusDetails]]:
    """Classify every ceremony of a wedding, in chronological order"""
    policy = boundary_policy or BoundaryPolicy.HALF_OPEN
    ordered = sorted(events, key=lambda e: (_interval(e)[0], e.id))
    results = [
        (event, classify(event, events, buffer_minutes, policy))
        for event in ordered
    ]

    conflicted = sum(1 for _, details in results if details.status == EventStatus.CONFLICT)
    if conflicted:
        logger.info(f"Timeline has {conflicted} of {len(results)} ceremonies in conflict")
    return results
