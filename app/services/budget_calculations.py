"""
Budget calculations

Planned vs committed vs paid roll-ups, health classification and alerts.
All amounts are integers in paise.
"""

from typing import Iterable, List

from app.schemas.budget import (
    Alert,
    AlertSeverity,
    BudgetCategoryInput,
    BudgetHealth,
    BudgetSummary,
    CategoryBudget,
    ChangeImpact,
    CostDriver,
)

MAX_ALERTS = 3
DEFAULT_COST_PER_GUEST = 2840  # rupees


def group_indian(value: float) -> str:
    """Format a number with Indian digit grouping (12,34,567.5)"""
    negative = value < 0
    text = f"{abs(value):.2f}".rstrip("0").rstrip(".")
    whole, _, fraction = text.partition(".")
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])
    result = f"{whole}.{fraction}" if fraction else whole
    return f"-{result}" if negative else result


def format_inr(amount_in_paise: int) -> str:
    """Compact rupee amount: ₹1.25Cr, ₹3.40L, ₹12.5K"""
    rupees = amount_in_paise / 100
    if rupees >= 10_000_000:
        return f"₹{rupees / 10_000_000:.2f}Cr"
    if rupees >= 100_000:
        return f"₹{rupees / 100_000:.2f}L"
    if rupees >= 1000:
        return f"₹{rupees / 1000:.1f}K"
    return f"₹{group_indian(rupees)}"


def format_full_inr(amount_in_paise: int) -> str:
    return f"₹{group_indian(amount_in_paise / 100)}"


def calculate_budget_health(total_budget: int, committed: int, pending: int) -> BudgetHealth:
    """Classify spend against the total budget.

    Over budget once commitments exceed the total; at risk when pending
    payments exceed half the remaining buffer or utilization passes 90%.
    """
    if committed > total_budget:
        return BudgetHealth.OVER_BUDGET

    utilization = committed / total_budget if total_budget else 0
    remaining_buffer = total_budget - committed

    if pending > remaining_buffer * 0.5 or utilization > 0.9:
        return BudgetHealth.AT_RISK

    return BudgetHealth.ON_TRACK


def build_category_budget(row: BudgetCategoryInput) -> CategoryBudget:
    delta = row.committed - row.planned
    return CategoryBudget(
        category=row.category,
        planned=row.planned,
        committed=row.committed,
        paid=row.paid,
        pending=row.committed - row.paid,
        delta=delta,
        delta_percentage=round(delta / row.planned * 100, 1) if row.planned else 0.0,
        is_over_budget=row.committed > row.planned,
    )


def aggregate_budget_summary(categories: Iterable[CategoryBudget], total_budget: int) -> BudgetSummary:
    categories = list(categories)
    planned = sum(c.planned for c in categories)
    committed = sum(c.committed for c in categories)
    paid = sum(c.paid for c in categories)
    pending = committed - paid

    return BudgetSummary(
        total_budget=total_budget,
        planned=planned,
        committed=committed,
        paid=paid,
        pending=pending,
        overrun=max(0, committed - total_budget),
        health=calculate_budget_health(total_budget, committed, pending),
    )


def calculate_top_cost_drivers(categories: Iterable[CategoryBudget], limit: int = 4) -> List[CostDriver]:
    drivers = [
        CostDriver(name=c.category, planned=c.planned, current=c.committed, delta=c.delta)
        for c in categories
    ]
    drivers.sort(key=lambda d: d.current, reverse=True)
    return drivers[:limit]


def _humanize(category: str) -> str:
    return category[:1].upper() + category[1:].replace("_", " ")


def sort_alerts(alerts: List[Alert]) -> List[Alert]:
    """Red alerts first, then the rest, capped at MAX_ALERTS"""
    ordered = sorted(alerts, key=lambda a: 0 if a.severity == AlertSeverity.RED else 1)
    return ordered[:MAX_ALERTS]


def generate_budget_alerts(
    summary: BudgetSummary,
    categories: Iterable[CategoryBudget],
    late_rsvp_count: int,
    late_rsvp_cost: int,
    unpaid_vendors_count: int,
    unpaid_amount: int,
    days_to_event: int,
) -> List[Alert]:
    alerts: List[Alert] = []

    if late_rsvp_count > 0 and late_rsvp_cost > 0:
        alerts.append(Alert(
            id="late-rsvp-cost",
            severity=AlertSeverity.RED,
            message=f"{late_rsvp_count} late RSVPs increased catering cost by {format_full_inr(late_rsvp_cost)}",
            link="/guests?filter=late",
            impact=f"+{format_full_inr(late_rsvp_cost)}",
        ))

    over_budget = [c for c in categories if c.is_over_budget]
    if over_budget:
        worst = max(over_budget, key=lambda c: c.delta)
        alerts.append(Alert(
            id="category-overbudget",
            severity=AlertSeverity.AMBER,
            message=f"{_humanize(worst.category)} exceeds budget by {format_full_inr(worst.delta)}",
            link="/budget",
            impact=f"+{format_full_inr(worst.delta)}",
        ))

    if unpaid_vendors_count > 0 and days_to_event <= 7:
        alerts.append(Alert(
            id="unpaid-vendors",
            severity=AlertSeverity.RED,
            message=f"{unpaid_vendors_count} vendors unpaid within {days_to_event} days of event",
            link="/budget?view=pending-payments",
            impact=f"{format_full_inr(unpaid_amount)} pending",
        ))

    if summary.health == BudgetHealth.OVER_BUDGET:
        alerts.append(Alert(
            id="overall-overbudget",
            severity=AlertSeverity.RED,
            message=f"Total committed exceeds budget by {format_full_inr(summary.overrun)}",
            link="/budget",
            impact=f"+{format_full_inr(summary.overrun)}",
        ))

    return sort_alerts(alerts)


def calculate_guest_cost_per_unit(
    catering_budget: int,
    accommodation_budget: int,
    transport_budget: int,
    total_guests: int,
) -> int:
    """Guest-driven cost per 10 guests"""
    if total_guests == 0:
        return 0
    total = catering_budget + accommodation_budget + transport_budget
    return round(total / total_guests * 10)


def calculate_change_impact(
    change_type: str,
    change_value: int,
    affected_categories: List[str],
    cost_per_guest: int = None,
) -> ChangeImpact:
    """Preview what adding guests, a vendor or scope does to the budget.

    ``change_value`` is in rupees; the returned total is in paise.
    """
    if change_type == "add-guests":
        impact = change_value * (cost_per_guest or DEFAULT_COST_PER_GUEST)
    elif change_type in ("add-vendor", "change-scope"):
        impact = change_value
    else:
        raise ValueError(f"Unknown change type: {change_type}")

    count = len(affected_categories)
    noun = "category" if count == 1 else "categories"
    return ChangeImpact(
        total_impact=impact * 100,
        affected_categories_count=count,
        message=f"This change will increase total budget by ₹{group_indian(impact)} and affect {count} {noun}.",
    )
