"""
Repository layer: the SQLAlchemy queries behind the services.
"""

from __future__ import annotations

import secrets
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from app.models import (
    BudgetCategory,
    Event,
    Guest,
    SeatingTable,
    Vendor,
    VendorAssignment,
    WeddingSubEvent,
)
from app.schemas.seating import Placement
from app.schemas.wedding import SubEventSnapshot, VendorAssignmentRef


def generate_code(db: Session, model, column, nbytes: int = 8) -> str:
    """Generate a URL-safe token that is unique for ``column``"""
    code = secrets.token_urlsafe(nbytes)
    while db.query(model).filter(column == code).first():
        code = secrets.token_urlsafe(nbytes)
    return code


# -------- Event repository --------

class EventRepo:
    @staticmethod
    def get_by_id(db: Session, event_id: int) -> Optional[Event]:
        return db.query(Event).filter(Event.id == event_id).first()

    @staticmethod
    def get_by_public_code(db: Session, public_code: str) -> Optional[Event]:
        return db.query(Event).filter(Event.public_code == public_code).first()

    @staticmethod
    def create(db: Session, **fields) -> Event:
        event = Event(public_code=generate_code(db, Event, Event.public_code), **fields)
        db.add(event)
        db.commit()
        db.refresh(event)
        return event


# -------- Sub-event repository --------

class SubEventRepo:
    @staticmethod
    def get_by_id(db: Session, sub_event_id: int) -> Optional[WeddingSubEvent]:
        return db.query(WeddingSubEvent).filter(WeddingSubEvent.id == sub_event_id).first()

    @staticmethod
    def list_for_event(db: Session, event_id: int) -> List[WeddingSubEvent]:
        """All ceremonies of one wedding, with vendors, in one query"""
        return (
            db.query(WeddingSubEvent)
            .options(selectinload(WeddingSubEvent.vendor_assignments).selectinload(VendorAssignment.vendor))
            .filter(WeddingSubEvent.event_id == event_id)
            .order_by(WeddingSubEvent.start_datetime, WeddingSubEvent.id)
            .all()
        )

    @staticmethod
    def next_sequence_order(db: Session, event_id: int) -> int:
        current = db.query(func.max(WeddingSubEvent.sequence_order)).filter(
            WeddingSubEvent.event_id == event_id
        ).scalar()
        return (current or 0) + 1

    @staticmethod
    def to_snapshot(sub_event: WeddingSubEvent) -> SubEventSnapshot:
        return SubEventSnapshot(
            id=sub_event.id,
            event_name=sub_event.event_name,
            custom_event_name=sub_event.custom_event_name,
            start_datetime=sub_event.start_datetime,
            end_datetime=sub_event.end_datetime,
            venue_name=sub_event.venue_name,
            expected_guest_count=sub_event.expected_guest_count,
            guest_subset=sub_event.guest_subset,
            vendor_assignments=[
                VendorAssignmentRef(
                    vendor_id=va.vendor_id,
                    vendor_name=va.vendor.business_name if va.vendor else None,
                    status=va.status,
                )
                for va in sub_event.vendor_assignments
            ],
            transport_required=bool(sub_event.transport_required),
            transport_assigned=bool(sub_event.transport_assigned),
            budget_allocated=sub_event.budget_allocated,
        )


class VendorRepo:
    @staticmethod
    def get_by_id(db: Session, vendor_id: int) -> Optional[Vendor]:
        return db.query(Vendor).filter(Vendor.id == vendor_id).first()

    @staticmethod
    def get_assignment(db: Session, assignment_id: int) -> Optional[VendorAssignment]:
        return db.query(VendorAssignment).filter(VendorAssignment.id == assignment_id).first()


# -------- Seating repository --------

class SeatingRepo:
    @staticmethod
    def get_table(db: Session, table_id: int) -> Optional[SeatingTable]:
        return db.query(SeatingTable).filter(SeatingTable.id == table_id).first()

    @staticmethod
    def list_tables(db: Session, event_id: int, lock: bool = False) -> List[SeatingTable]:
        query = db.query(SeatingTable).filter(SeatingTable.event_id == event_id)
        if lock:
            # Ignored by SQLite; row locks on PostgreSQL/MySQL
            query = query.with_for_update()
        return query.order_by(SeatingTable.created_at, SeatingTable.id).all()

    @staticmethod
    def count_seated(db: Session, table_id: int, exclude_guest_id: Optional[int] = None) -> int:
        query = db.query(func.count(Guest.id)).filter(Guest.table_id == table_id)
        if exclude_guest_id:
            query = query.filter(Guest.id != exclude_guest_id)
        return query.scalar()

    @staticmethod
    def highest_seat(db: Session, table_id: int) -> int:
        return db.query(func.max(Guest.seat_number)).filter(Guest.table_id == table_id).scalar() or 0

    @staticmethod
    def seat_taken(
        db: Session,
        table_id: int,
        seat_number: int,
        exclude_guest_id: Optional[int] = None,
    ) -> bool:
        query = db.query(Guest).filter(
            Guest.table_id == table_id,
            Guest.seat_number == seat_number,
        )
        if exclude_guest_id:
            query = query.filter(Guest.id != exclude_guest_id)
        return query.first() is not None

    @staticmethod
    def unseat_table(db: Session, table_id: int) -> int:
        return db.query(Guest).filter(Guest.table_id == table_id).update(
            {Guest.table_id: None, Guest.seat_number: None, Guest.updated_at: datetime.utcnow()},
            synchronize_session=False,
        )

    @staticmethod
    def apply_placements(db: Session, placements: Iterable[Placement]) -> None:
        """Write all placements in one flush; the caller commits"""
        now = datetime.utcnow()
        db.bulk_update_mappings(
            Guest,
            [
                {"id": p.guest_id, "table_id": p.table_id, "seat_number": p.seat_number, "updated_at": now}
                for p in placements
            ],
        )


# -------- Guest repository --------

class GuestRepo:
    @staticmethod
    def get_by_id(db: Session, guest_id: int) -> Optional[Guest]:
        return db.query(Guest).filter(Guest.id == guest_id).first()

    @staticmethod
    def get_by_rsvp_token(db: Session, token: str) -> Optional[Guest]:
        return db.query(Guest).filter(Guest.rsvp_token == token).first()

    @staticmethod
    def list_for_event(db: Session, event_id: int, rsvp_statuses: Optional[List[str]] = None) -> List[Guest]:
        query = db.query(Guest).filter(Guest.event_id == event_id)
        if rsvp_statuses:
            query = query.filter(Guest.rsvp_status.in_(rsvp_statuses))
        return query.order_by(Guest.id).all()

    @staticmethod
    def create(db: Session, event_id: int, **fields) -> Guest:
        guest = Guest(
            event_id=event_id,
            rsvp_token=generate_code(db, Guest, Guest.rsvp_token, nbytes=16),
            **fields,
        )
        db.add(guest)
        db.commit()
        db.refresh(guest)
        return guest

    @staticmethod
    def set_rsvp(db: Session, guest: Guest, status: str, dietary: Optional[str] = None) -> None:
        guest.rsvp_status = status
        guest.rsvp_responded_at = datetime.utcnow()
        if dietary:
            guest.dietary = dietary
        if status == "declined":
            guest.table_id = None
            guest.seat_number = None
        guest.updated_at = datetime.utcnow()
        db.commit()


# -------- Budget repository --------

class BudgetRepo:
    @staticmethod
    def list_categories(db: Session, event_id: int) -> List[BudgetCategory]:
        return (
            db.query(BudgetCategory)
            .filter(BudgetCategory.event_id == event_id)
            .order_by(BudgetCategory.category)
            .all()
        )

    @staticmethod
    def upsert_categories(db: Session, event_id: int, rows: Iterable[Dict]) -> List[BudgetCategory]:
        existing = {c.category: c for c in BudgetRepo.list_categories(db, event_id)}
        for row in rows:
            category = existing.get(row["category"])
            if category is None:
                category = BudgetCategory(event_id=event_id, category=row["category"])
                db.add(category)
            category.planned = row.get("planned", 0)
            category.committed = row.get("committed", 0)
            category.paid = row.get("paid", 0)
        db.commit()
        return BudgetRepo.list_categories(db, event_id)
