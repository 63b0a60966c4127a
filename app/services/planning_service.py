"""
Budget and guest overviews assembled from stored data
"""

from datetime import datetime
from typing import Dict

from sqlalchemy.orm import Session

from app.core.config import settings
from app.models import Event
from app.schemas.budget import BudgetCategoryInput, BudgetOverview, ChangeImpact, ChangeImpactRequest
from app.services.budget_calculations import (
    aggregate_budget_summary,
    build_category_budget,
    calculate_change_impact,
    calculate_guest_cost_per_unit,
    calculate_top_cost_drivers,
    generate_budget_alerts,
)
from app.services.guest_calculations import (
    calculate_guest_costs,
    collect_guest_stats,
    count_household_responses,
    generate_guest_alerts,
)
from app.services.repositories import BudgetRepo, GuestRepo


def _late_confirmations(event: Event, guests) -> int:
    if not event.rsvp_deadline:
        return 0
    return sum(
        1 for g in guests
        if g.rsvp_status == "accepted"
        and g.rsvp_responded_at is not None
        and g.rsvp_responded_at > event.rsvp_deadline
    )


GUEST_DRIVEN_CATEGORIES = ("catering", "accommodation", "transport")


class PlanningService:
    """Dashboard roll-ups for one wedding"""

    @staticmethod
    def get_budget_overview(event: Event, db: Session, now: datetime = None) -> BudgetOverview:
        now = now or datetime.utcnow()
        categories = [
            build_category_budget(BudgetCategoryInput(
                category=row.category,
                planned=row.planned or 0,
                committed=row.committed or 0,
                paid=row.paid or 0,
            ))
            for row in BudgetRepo.list_categories(db, event.id)
        ]
        summary = aggregate_budget_summary(categories, event.total_budget or 0)

        guests = GuestRepo.list_for_event(db, event.id)
        late_count = _late_confirmations(event, guests)
        unpaid = [c for c in categories if c.pending > 0]

        alerts = generate_budget_alerts(
            summary,
            categories,
            late_rsvp_count=late_count,
            late_rsvp_cost=late_count * settings.CATERING_PER_HEAD * 100,
            unpaid_vendors_count=len(unpaid),
            unpaid_amount=sum(c.pending for c in unpaid),
            days_to_event=(event.date - now).days,
        )

        return BudgetOverview(
            summary=summary,
            categories=categories,
            cost_drivers=calculate_top_cost_drivers(categories),
            alerts=alerts,
        )

    @staticmethod
    def get_guest_overview(event: Event, db: Session, now: datetime = None) -> Dict:
        now = now or datetime.utcnow()
        guests = GuestRepo.list_for_event(db, event.id)
        stats, outstation, vip = collect_guest_stats(guests)

        cutoff_passed = event.rsvp_deadline is not None and now > event.rsvp_deadline
        alerts = generate_guest_alerts(
            stats,
            outstation,
            vip,
            rsvp_cutoff_passed=cutoff_passed,
            late_confirmations=_late_confirmations(event, guests),
        )
        costs = calculate_guest_costs(
            stats.confirmed + stats.pending,
            rooms_needed=outstation.total,
            transport_seats=outstation.pickup_needed,
        )

        return {
            "stats": stats,
            "outstation": outstation,
            "vip": vip,
            "households": count_household_responses(guests),
            "costs": costs,
            "alerts": alerts,
        }

    @staticmethod
    def get_cost_per_guest(event: Event, db: Session) -> int:
        """Planned guest-driven spend per expected guest, in rupees"""
        planned = {row.category: (row.planned or 0) // 100 for row in BudgetRepo.list_categories(db, event.id)}
        expected = len(GuestRepo.list_for_event(db, event.id, ["accepted", "pending"]))
        per_ten = calculate_guest_cost_per_unit(
            *(planned.get(name, 0) for name in GUEST_DRIVEN_CATEGORIES),
            total_guests=expected,
        )
        return round(per_ten / 10)

    @staticmethod
    def preview_change(event: Event, change: ChangeImpactRequest, db: Session) -> ChangeImpact:
        cost_per_guest = None
        if change.change_type == "add-guests":
            cost_per_guest = PlanningService.get_cost_per_guest(event, db) or None
        return calculate_change_impact(
            change.change_type,
            change.change_value,
            change.affected_categories,
            cost_per_guest=cost_per_guest,
        )
