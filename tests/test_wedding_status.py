"""
Tests for the wedding sub-event status engine
"""

import pytest
from datetime import datetime, timedelta

from app.schemas.wedding import (
    AssignmentStatus,
    BoundaryPolicy,
    EventStatus,
    SubEventSnapshot,
    VendorAssignmentRef,
    WeddingEventName,
)
from app.services.wedding_status import (
    InvalidEventData,
    classify,
    classify_timeline,
    gap_between,
    get_event_display_name,
    get_status_label,
    intervals_overlap,
)

DAY = datetime(2024, 12, 10)

def at(hour: int, minute: int = 0) -> datetime:
    return DAY + timedelta(hours=hour, minutes=minute)

def vendor(vendor_id: int, status: AssignmentStatus = AssignmentStatus.CONFIRMED) -> VendorAssignmentRef:
    return VendorAssignmentRef(vendor_id=vendor_id, vendor_name=f"Vendor {vendor_id}", status=status)

def make_event(event_id, start, end, name=WeddingEventName.HALDI, vendors=None, **overrides):
    """A fully planned ceremony unless overridden"""
    fields = dict(
        id=event_id,
        event_name=name,
        start_datetime=start,
        end_datetime=end,
        venue_name="Lakeside Lawn",
        expected_guest_count=120,
        guest_subset="family",
        vendor_assignments=vendors if vendors is not None else [vendor(100 + event_id)],
        budget_allocated=5000000,
    )
    fields.update(overrides)
    return SubEventSnapshot(**fields)

def test_single_event_is_never_in_conflict():
    """An event compared only with itself has no conflicts"""
    event = make_event(1, at(10), at(12))
    assert classify(event, [event]).status == EventStatus.READY

    bare = make_event(2, at(10), at(12), venue_name=None, vendors=[])
    result = classify(bare, [bare])
    assert result.status == EventStatus.ATTENTION
    assert result.conflicts == []

def test_zero_siblings_is_conflict_free():
    event = make_event(1, at(10), at(12))
    assert classify(event, []).status == EventStatus.READY

def test_overlap_is_symmetric():
    """If A overlaps B then B overlaps A"""
    a = make_event(1, at(10), at(12), name=WeddingEventName.MEHENDI)
    b = make_event(2, at(11), at(13), name=WeddingEventName.SANGEET)

    result_a = classify(a, [a, b])
    result_b = classify(b, [a, b])

    assert result_a.status == EventStatus.CONFLICT
    assert result_b.status == EventStatus.CONFLICT
    assert result_a.conflicts == ["Overlaps with Sangeet"]
    assert result_b.conflicts == ["Overlaps with Mehendi"]

def test_conflict_uses_custom_name():
    a = make_event(1, at(10), at(12))
    b = make_event(2, at(11), at(13), name=WeddingEventName.CUSTOM, custom_event_name="Pool Party")

    assert classify(a, [a, b]).conflicts == ["Overlaps with Pool Party"]

def test_vendor_buffer_119_minutes_is_conflict():
    """A ends 10:00, B starts 11:59 with a shared vendor"""
    shared = vendor(7)
    a = make_event(1, at(8), at(10), vendors=[shared])
    b = make_event(2, at(11, 59), at(14), name=WeddingEventName.SANGEET, vendors=[shared])

    result = classify(b, [a, b])

    assert result.status == EventStatus.CONFLICT
    assert result.conflicts == ["Vendor conflict with Haldi: Vendor 7 - insufficient buffer time"]
    assert classify(a, [a, b]).status == EventStatus.CONFLICT

def test_vendor_buffer_120_minutes_is_not_conflict():
    """A ends 10:00, B starts 12:00 with a shared vendor"""
    shared = vendor(7)
    a = make_event(1, at(8), at(10), vendors=[shared])
    b = make_event(2, at(12), at(14), vendors=[shared])

    assert classify(b, [a, b]).status == EventStatus.READY
    assert classify(a, [a, b]).status == EventStatus.READY

def test_buffer_is_configurable():
    shared = vendor(7)
    a = make_event(1, at(8), at(10), vendors=[shared])
    b = make_event(2, at(12), at(14), vendors=[shared])

    assert classify(b, [a, b], buffer_minutes=180).status == EventStatus.CONFLICT
    assert classify(b, [a, b], buffer_minutes=60).status == EventStatus.READY

def test_different_vendors_need_no_buffer():
    a = make_event(1, at(8), at(10), vendors=[vendor(1)])
    b = make_event(2, at(10, 30), at(14), vendors=[vendor(2)])

    assert classify(b, [a, b]).status == EventStatus.READY

def test_overlap_and_vendor_conflicts_accumulate():
    """Both rules are evaluated for the same sibling"""
    shared = vendor(3)
    a = make_event(1, at(10), at(12), vendors=[shared])
    b = make_event(2, at(11), at(13), name=WeddingEventName.RECEPTION, vendors=[shared])

    result = classify(a, [a, b])

    assert result.conflicts == [
        "Overlaps with Reception",
        "Vendor conflict with Reception: Vendor 3 - insufficient buffer time",
    ]

def test_conflicts_across_all_siblings():
    a = make_event(1, at(10), at(14))
    b = make_event(2, at(11), at(12), name=WeddingEventName.MEHENDI)
    c = make_event(3, at(13), at(15), name=WeddingEventName.SANGEET)
    d = make_event(4, at(20), at(22), name=WeddingEventName.RECEPTION)

    result = classify(a, [a, b, c, d])

    assert result.conflicts == ["Overlaps with Mehendi", "Overlaps with Sangeet"]

def test_conflict_short_circuits_issues():
    """Missing venue plus an overlap reports conflict with no issues"""
    a = make_event(1, at(10), at(12), venue_name=None)
    b = make_event(2, at(11), at(13))

    result = classify(a, [a, b])

    assert result.status == EventStatus.CONFLICT
    assert result.issues == []
    assert len(result.conflicts) == 1

def test_issues_for_unplanned_event():
    event = make_event(
        1, at(10), at(12),
        venue_name=None,
        vendors=[],
        guest_subset=None,
        budget_allocated=None,
        transport_required=True,
        transport_assigned=False,
    )

    result = classify(event, [event])

    assert result.status == EventStatus.ATTENTION
    assert result.issues == [
        "Guest subset not defined",
        "No vendors assigned",
        "Transport not assigned",
        "Budget not set",
        "Venue not specified",
    ]

def test_unconfirmed_vendors_are_counted():
    event = make_event(1, at(10), at(12), vendors=[
        vendor(1),
        vendor(2, AssignmentStatus.PENDING),
        vendor(3, AssignmentStatus.DECLINED),
    ])

    result = classify(event, [event])

    assert result.status == EventStatus.ATTENTION
    assert result.issues == ["2 vendor(s) not confirmed"]

def test_zero_guest_count_means_subset_undefined():
    event = make_event(1, at(10), at(12), expected_guest_count=0)
    assert classify(event, [event]).issues == ["Guest subset not defined"]

def test_zero_budget_is_not_set():
    event = make_event(1, at(10), at(12), budget_allocated=0)
    assert classify(event, [event]).issues == ["Budget not set"]

def test_transport_assigned_is_ready():
    event = make_event(1, at(10), at(12), transport_required=True, transport_assigned=True)
    assert classify(event, [event]).status == EventStatus.READY

def test_back_to_back_events_do_not_overlap_by_default():
    a = make_event(1, at(10), at(12))
    b = make_event(2, at(12), at(14))

    assert classify(a, [a, b]).status == EventStatus.READY
    assert classify(b, [a, b]).status == EventStatus.READY

def test_closed_boundary_policy_counts_touching_events():
    a = make_event(1, at(10), at(12))
    b = make_event(2, at(12), at(14), name=WeddingEventName.WEDDING)

    result = classify(a, [a, b], boundary_policy=BoundaryPolicy.CLOSED)

    assert result.status == EventStatus.CONFLICT
    assert result.conflicts == ["Overlaps with Wedding"]

def test_zero_length_events_overlap_nothing():
    point = make_event(1, at(11), at(11))
    around = make_event(2, at(10), at(12))
    same_point = make_event(3, at(11), at(11))

    assert classify(point, [point, around, same_point]).status == EventStatus.READY
    assert classify(around, [point, around]).status == EventStatus.READY

def test_end_before_start_is_treated_as_empty():
    assert not intervals_overlap((at(12), at(10)), (at(9), at(13)))

def test_gap_between_is_order_independent():
    first = (at(8), at(10))
    second = (at(12), at(13))

    assert gap_between(first, second) == timedelta(hours=2)
    assert gap_between(second, first) == timedelta(hours=2)
    assert gap_between((at(8), at(12)), (at(11), at(13))) < timedelta(0)

def test_missing_start_raises_invalid_event_data():
    event = make_event(1, None, at(12))

    with pytest.raises(InvalidEventData) as exc_info:
        classify(event, [event])

    assert exc_info.value.event_id == 1

def test_missing_sibling_end_raises_invalid_event_data():
    event = make_event(1, at(10), at(12))
    broken = make_event(2, at(13), None)

    with pytest.raises(InvalidEventData):
        classify(event, [event, broken])

def test_classify_is_deterministic():
    a = make_event(1, at(10), at(12), venue_name=None)
    b = make_event(2, at(11), at(13))

    assert classify(a, [a, b]) == classify(a, [a, b])

def test_classify_timeline_orders_chronologically():
    reception = make_event(3, at(20), at(23), name=WeddingEventName.RECEPTION)
    haldi = make_event(1, at(8), at(10), name=WeddingEventName.HALDI)
    wedding = make_event(2, at(12), at(16), name=WeddingEventName.WEDDING)

    results = classify_timeline([reception, haldi, wedding])

    assert [event.id for event, _ in results] == [1, 2, 3]
    assert all(details.status == EventStatus.READY for _, details in results)

def test_display_names_and_labels():
    assert get_event_display_name(make_event(1, at(1), at(2), name=WeddingEventName.SANGEET)) == "Sangeet"
    assert get_event_display_name(
        make_event(1, at(1), at(2), name=WeddingEventName.CUSTOM, custom_event_name="Cocktails")
    ) == "Cocktails"
    assert get_status_label(EventStatus.ATTENTION) == "Attention Needed"
