"""
Seating arrangement, auto-assignment and validation service
"""

import logging
from typing import Dict, List, Optional, Sequence, Set

from sqlalchemy.orm import Session

from app.models import Guest, SeatingTable
from app.schemas.guest import RSVPStatus
from app.schemas.seating import (
    AutoAssignResult,
    Placement,
    SeatingGuest,
    TableCategory,
    TableSnapshot,
)
from app.services.repositories import GuestRepo, SeatingRepo

logger = logging.getLogger(__name__)

SEATABLE_RSVP = (RSVPStatus.ACCEPTED, RSVPStatus.PENDING)
UNKNOWN_FAMILY = "Unknown"


class NoTablesAvailable(Exception):
    """Raised when auto-assignment runs for an event without tables"""

    def __init__(self, message: str = "No tables available. Create at least one table before auto-assigning."):
        self.message = message
        super().__init__(message)


class SeatingValidationError(Exception):
    """Raised when a manual seat assignment breaks a table constraint"""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def group_families(guests: Sequence[SeatingGuest]) -> Dict[str, List[SeatingGuest]]:
    """Group unseated, RSVP'd guests by family, in order of first appearance"""
    families: Dict[str, List[SeatingGuest]] = {}
    for guest in guests:
        if guest.table_id is not None or guest.rsvp_status not in SEATABLE_RSVP:
            continue
        key = (guest.family_group_name or "").strip() or UNKNOWN_FAMILY
        families.setdefault(key, []).append(guest)
    return families


def table_preference(
    tables: Sequence[TableSnapshot],
    has_vip: bool,
    has_elderly: bool,
) -> List[TableSnapshot]:
    """Order tables for a family: VIP tables, then family tables, then the rest.

    Each bucket keeps the input order of its tables.
    """
    vip_bucket: List[TableSnapshot] = []
    family_bucket: List[TableSnapshot] = []
    remainder: List[TableSnapshot] = []
    for table in tables:
        if has_vip and table.category == TableCategory.VIP:
            vip_bucket.append(table)
        elif has_elderly and table.category == TableCategory.FAMILY:
            family_bucket.append(table)
        else:
            remainder.append(table)
    return vip_bucket + family_bucket + remainder


def free_seats(capacity: int, taken: Set[int], count: int) -> List[int]:
    """The lowest ``count`` seat numbers in 1..capacity not in ``taken``"""
    return [n for n in range(1, capacity + 1) if n not in taken][:count]


def auto_assign(
    tables: Sequence[TableSnapshot],
    guests: Sequence[SeatingGuest],
) -> AutoAssignResult:
    """Seat whole families at the first table with room for all of them.

    ``guests`` may contain already-seated guests: they count against their
    table's capacity and are never moved. Each placed guest gets the lowest
    seat number still free at the table. Families that fit nowhere are
    left unseated and reported in ``unplaced_families``.
    """
    if not tables:
        raise NoTablesAvailable()

    occupancy: Dict[int, int] = {table.id: 0 for table in tables}
    taken: Dict[int, Set[int]] = {table.id: set() for table in tables}
    for guest in guests:
        if guest.table_id is not None:
            occupancy[guest.table_id] = occupancy.get(guest.table_id, 0) + 1
            if guest.seat_number is not None:
                taken.setdefault(guest.table_id, set()).add(guest.seat_number)

    result = AutoAssignResult()

    for family_name, members in group_families(guests).items():
        has_vip = any(m.is_vip for m in members)
        has_elderly = any(m.is_elderly for m in members)

        for table in table_preference(tables, has_vip, has_elderly):
            current = occupancy[table.id]
            seats = free_seats(table.capacity, taken[table.id], len(members))
            if table.capacity - current >= len(members) and len(seats) == len(members):
                for member, seat_number in zip(members, seats):
                    result.placements.append(
                        Placement(guest_id=member.id, table_id=table.id, seat_number=seat_number)
                    )
                taken[table.id].update(seats)
                occupancy[table.id] = current + len(members)
                result.assigned_count += len(members)
                break
        else:
            result.unplaced_families.append(family_name)

    return result


class SeatingService:
    """Service for seating arrangement operations"""

    @staticmethod
    def auto_assign_event(event_id: int, db: Session) -> AutoAssignResult:
        """Run auto-assignment for an event and persist the placements.

        Tables are read with a row lock and all placements are committed
        together, so concurrent runs for the same event cannot double-book.
        """
        try:
            tables = SeatingRepo.list_tables(db, event_id, lock=True)
            guests = GuestRepo.list_for_event(db, event_id)

            result = auto_assign(
                [TableSnapshot.model_validate(t) for t in tables],
                [SeatingGuest.model_validate(g) for g in guests],
            )

            if result.placements:
                SeatingRepo.apply_placements(db, result.placements)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(
            f"Auto-assigned {result.assigned_count} guests for event {event_id}"
            f" ({len(result.unplaced_families)} families unplaced)"
        )
        if result.unplaced_families:
            logger.warning(
                f"Families without a table for event {event_id}: {', '.join(result.unplaced_families)}"
            )
        return result

    @staticmethod
    def validate_table_capacity(
        table: SeatingTable,
        exclude_guest_id: Optional[int],
        db: Session
    ) -> bool:
        """Validate that a table has room for one more guest"""
        return SeatingRepo.count_seated(db, table.id, exclude_guest_id) < table.capacity

    @staticmethod
    def validate_seat_uniqueness(
        table: SeatingTable,
        seat_number: int,
        exclude_guest_id: Optional[int],
        db: Session
    ) -> bool:
        """Validate that seat number is unique within table"""
        return not SeatingRepo.seat_taken(db, table.id, seat_number, exclude_guest_id)

    @staticmethod
    def assign_guest_to_table(
        guest: Guest,
        table: SeatingTable,
        seat_number: int,
        db: Session
    ) -> Guest:
        """Seat a guest manually, enforcing capacity and seat uniqueness"""
        errors = []

        if table.event_id != guest.event_id:
            errors.append(f"Table '{table.name}' belongs to another event")
        else:
            if seat_number > table.capacity:
                errors.append(f"Seat {seat_number} exceeds capacity of table '{table.name}' ({table.capacity})")
            if guest.table_id != table.id and not SeatingService.validate_table_capacity(table, guest.id, db):
                errors.append(f"Table '{table.name}' is full ({table.capacity} seats)")
            if not SeatingService.validate_seat_uniqueness(table, seat_number, guest.id, db):
                errors.append(f"Seat {seat_number} is already taken in table '{table.name}'")

        if errors:
            raise SeatingValidationError(errors)

        guest.table_id = table.id
        guest.seat_number = seat_number
        db.commit()
        db.refresh(guest)
        return guest

    @staticmethod
    def remove_guest_from_table(guest: Guest, db: Session) -> Guest:
        guest.table_id = None
        guest.seat_number = None
        db.commit()
        db.refresh(guest)
        return guest

    @staticmethod
    def delete_table(table: SeatingTable, db: Session) -> int:
        """Unseat the table's guests, then delete it. Returns guests unseated."""
        unseated = SeatingRepo.unseat_table(db, table.id)
        db.delete(table)
        db.commit()
        logger.info(f"Deleted table {table.id}, unseated {unseated} guests")
        return unseated

    @staticmethod
    def get_table_guests(table_id: int, db: Session) -> List[Dict]:
        """Get all guests for a specific table"""

        guests = db.query(Guest).filter(
            Guest.table_id == table_id
        ).order_by(Guest.seat_number).all()

        return [
            {
                "id": guest.id,
                "name": guest.full_name,
                "family": guest.family_group_name or UNKNOWN_FAMILY,
                "seat_number": guest.seat_number,
                "dietary": guest.dietary,
            }
            for guest in guests
        ]

    @staticmethod
    def get_seating_summary(event_id: int, db: Session) -> Dict:
        """Per-table occupancy for an event"""
        tables = SeatingRepo.list_tables(db, event_id)
        guests = GuestRepo.list_for_event(db, event_id, [s.value for s in SEATABLE_RSVP])

        seated: Dict[int, int] = {}
        for guest in guests:
            if guest.table_id is not None:
                seated[guest.table_id] = seated.get(guest.table_id, 0) + 1

        table_info = [
            {
                "id": table.id,
                "name": table.name,
                "category": table.category,
                "shape": table.shape,
                "capacity": table.capacity,
                "seated": seated.get(table.id, 0),
                "available_seats": table.capacity - seated.get(table.id, 0),
            }
            for table in tables
        ]

        return {
            "total_tables": len(tables),
            "total_capacity": sum(t.capacity for t in tables),
            "seated_guests": sum(seated.values()),
            "unseated_guests": sum(1 for g in guests if g.table_id is None),
            "tables": table_info,
        }
