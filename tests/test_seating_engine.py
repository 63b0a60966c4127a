"""
Tests for the family-aware seating auto-assignment engine
"""

import pytest
from collections import defaultdict

from app.schemas.guest import RSVPStatus
from app.schemas.seating import SeatingGuest, TableCategory, TableSnapshot
from app.services.seating_service import (
    NoTablesAvailable,
    UNKNOWN_FAMILY,
    auto_assign,
    free_seats,
    group_families,
    table_preference,
)

def table(table_id, capacity, category=TableCategory.GENERAL):
    return TableSnapshot(id=table_id, name=f"T{table_id}", capacity=capacity, category=category)

def family(name, size, start_id, **flags):
    """Build ``size`` guests of one family with consecutive ids"""
    return [
        SeatingGuest(id=start_id + i, family_group_name=name, rsvp_status=RSVPStatus.ACCEPTED, **flags)
        for i in range(size)
    ]

def seats_by_table(result):
    seats = defaultdict(list)
    for placement in result.placements:
        seats[placement.table_id].append(placement.seat_number)
    return seats

def test_vip_family_then_regular_family():
    """VIP family fills the VIP table, next family falls through to T2"""
    tables = [table(1, 4, TableCategory.VIP), table(2, 2)]
    sharma = family("Sharma", 3, 1)
    sharma[0].is_vip = True
    patel = family("Patel", 2, 10)

    result = auto_assign(tables, sharma + patel)

    assert result.assigned_count == 5
    assert result.unplaced_families == []
    placed = {p.guest_id: (p.table_id, p.seat_number) for p in result.placements}
    assert placed == {1: (1, 1), 2: (1, 2), 3: (1, 3), 10: (2, 1), 11: (2, 2)}

def test_no_tables_raises():
    with pytest.raises(NoTablesAvailable):
        auto_assign([], family("Sharma", 2, 1))

    with pytest.raises(NoTablesAvailable):
        auto_assign([], [])

def test_no_guests_assigns_nothing():
    result = auto_assign([table(1, 8)], [])

    assert result.assigned_count == 0
    assert result.placements == []

def test_families_are_never_split():
    """A family of 4 does not fit a table with 3 seats left"""
    tables = [table(1, 3), table(2, 3)]

    result = auto_assign(tables, family("Gupta", 4, 1))

    assert result.assigned_count == 0
    assert result.unplaced_families == ["Gupta"]

def test_capacity_and_family_invariants_hold():
    tables = [table(1, 6, TableCategory.VIP), table(2, 8, TableCategory.FAMILY), table(3, 5), table(4, 10)]
    guests = []
    next_id = 1
    for index, size in enumerate([3, 5, 2, 4, 6, 1, 3, 2]):
        guests += family(f"Family {index}", size, next_id, is_elderly=index % 3 == 0, is_vip=index == 4)
        next_id += size

    result = auto_assign(tables, guests)

    per_table = seats_by_table(result)
    capacity = {t.id: t.capacity for t in tables}
    for table_id, seats in per_table.items():
        assert len(seats) <= capacity[table_id]
        assert sorted(seats) == list(range(1, len(seats) + 1))

    family_of = {g.id: g.family_group_name for g in guests}
    tables_per_family = defaultdict(set)
    for placement in result.placements:
        tables_per_family[family_of[placement.guest_id]].add(placement.table_id)
    assert all(len(ids) == 1 for ids in tables_per_family.values())
    assert result.assigned_count == len(result.placements)

def test_existing_guests_count_against_capacity():
    tables = [table(1, 4)]
    seated = [
        SeatingGuest(id=i, family_group_name="Early", rsvp_status=RSVPStatus.ACCEPTED, table_id=1, seat_number=i)
        for i in range(1, 4)
    ]

    too_big = auto_assign(tables, seated + family("Late", 2, 10))
    assert too_big.assigned_count == 0
    assert too_big.unplaced_families == ["Late"]

    just_fits = auto_assign(tables, seated + family("Late", 1, 10))
    assert just_fits.assigned_count == 1
    assert just_fits.placements[0].seat_number == 4

def test_seated_guests_are_not_moved():
    tables = [table(1, 4), table(2, 4)]
    seated = SeatingGuest(id=1, family_group_name="Rao", rsvp_status=RSVPStatus.ACCEPTED, table_id=2, seat_number=1)

    result = auto_assign(tables, [seated] + family("Rao", 2, 2))

    assert all(p.guest_id != 1 for p in result.placements)

def test_declined_guests_are_skipped():
    guests = family("Iyer", 2, 1)
    guests.append(SeatingGuest(id=3, family_group_name="Iyer", rsvp_status=RSVPStatus.DECLINED))
    guests.append(SeatingGuest(id=4, family_group_name="Nair", rsvp_status=RSVPStatus.PENDING))

    result = auto_assign([table(1, 10)], guests)

    assert result.assigned_count == 3
    assert {p.guest_id for p in result.placements} == {1, 2, 4}

def test_blank_family_names_share_unknown_group():
    guests = [
        SeatingGuest(id=1, family_group_name=None, rsvp_status=RSVPStatus.ACCEPTED),
        SeatingGuest(id=2, family_group_name="", rsvp_status=RSVPStatus.ACCEPTED),
        SeatingGuest(id=3, family_group_name="   ", rsvp_status=RSVPStatus.ACCEPTED),
    ]

    families = group_families(guests)

    assert list(families) == [UNKNOWN_FAMILY]
    assert len(families[UNKNOWN_FAMILY]) == 3

    result = auto_assign([table(1, 2)], guests)
    assert result.unplaced_families == [UNKNOWN_FAMILY]

def test_elderly_family_prefers_family_tables():
    tables = [table(1, 10), table(2, 10, TableCategory.FAMILY)]

    result = auto_assign(tables, family("Menon", 2, 1, is_elderly=True))

    assert {p.table_id for p in result.placements} == {2}

def test_vip_elderly_family_preference_order():
    tables = [table(1, 10), table(2, 10, TableCategory.FAMILY), table(3, 10, TableCategory.VIP)]

    ordered = table_preference(tables, has_vip=True, has_elderly=True)

    assert [t.id for t in ordered] == [3, 2, 1]

def test_vip_table_used_by_regular_family_as_fallback():
    tables = [table(1, 10, TableCategory.VIP), table(2, 10)]

    assert [t.id for t in table_preference(tables, False, False)] == [1, 2]

def test_first_fit_not_best_fit():
    tables = [table(1, 10), table(2, 3)]

    result = auto_assign(tables, family("Bose", 3, 1))

    assert {p.table_id for p in result.placements} == {1}

def test_placement_follows_family_appearance_order():
    tables = [table(1, 2), table(2, 2)]
    guests = [
        SeatingGuest(id=1, family_group_name="A", rsvp_status=RSVPStatus.ACCEPTED),
        SeatingGuest(id=2, family_group_name="B", rsvp_status=RSVPStatus.ACCEPTED),
        SeatingGuest(id=3, family_group_name="A", rsvp_status=RSVPStatus.ACCEPTED),
    ]

    result = auto_assign(tables, guests)

    placed = {p.guest_id: p.table_id for p in result.placements}
    assert placed == {1: 1, 3: 1, 2: 2}

def seated(guest_id, table_id, seat_number, family="Early"):
    return SeatingGuest(
        id=guest_id,
        family_group_name=family,
        rsvp_status=RSVPStatus.ACCEPTED,
        table_id=table_id,
        seat_number=seat_number,
    )

def test_free_seats_fill_gaps_first():
    assert free_seats(6, {2, 3, 5}, 2) == [1, 4]
    assert free_seats(4, {1, 2}, 3) == [3, 4]
    assert free_seats(3, set(), 0) == []

def test_family_takes_free_seats_around_a_seated_guest():
    """Guest at seat 2 of a 4-seat table leaves seats 1, 3 and 4"""
    result = auto_assign([table(1, 4)], [seated(1, 1, 2)] + family("Sharma", 3, 10))

    assert result.assigned_count == 3
    assert sorted(p.seat_number for p in result.placements) == [1, 3, 4]

def test_seat_left_by_unseated_guest_is_reused_once():
    """Seat 1 freed, seat 2 still occupied; two families fill 1, 3 and 4"""
    guests = [seated(2, 1, 2, family="Beta")]
    guests += family("Alpha", 1, 1)
    guests += family("Gamma", 2, 3)

    result = auto_assign([table(1, 4)], guests)

    seats = [2] + [p.seat_number for p in result.placements]
    assert sorted(seats) == [1, 2, 3, 4]
    placed = {p.guest_id: p.seat_number for p in result.placements}
    assert placed == {1: 1, 3: 3, 4: 4}

def test_seats_stay_unique_and_within_capacity_with_gaps():
    tables = [table(1, 5, TableCategory.VIP), table(2, 6), table(3, 4, TableCategory.FAMILY)]
    guests = [seated(101, 1, 3), seated(102, 1, 5), seated(103, 2, 1), seated(104, 2, 4), seated(105, 3, 2)]
    next_id = 1
    for index, size in enumerate([2, 1, 3, 2, 1]):
        guests += family(f"Family {index}", size, next_id, is_elderly=index == 2, is_vip=index == 0)
        next_id += size

    result = auto_assign(tables, guests)

    capacity = {t.id: t.capacity for t in tables}
    seats = defaultdict(list)
    for guest in guests:
        if guest.table_id is not None:
            seats[guest.table_id].append(guest.seat_number)
    for placement in result.placements:
        seats[placement.table_id].append(placement.seat_number)

    for table_id, numbers in seats.items():
        assert len(numbers) == len(set(numbers))
        assert all(1 <= n <= capacity[table_id] for n in numbers)
    assert result.assigned_count == 9
