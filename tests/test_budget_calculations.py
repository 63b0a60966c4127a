"""
Tests for budget roll-ups, health classification and alerts
"""

import pytest

from app.schemas.budget import AlertSeverity, BudgetCategoryInput, BudgetHealth
from app.services.budget_calculations import (
    aggregate_budget_summary,
    build_category_budget,
    calculate_budget_health,
    calculate_change_impact,
    calculate_guest_cost_per_unit,
    calculate_top_cost_drivers,
    format_full_inr,
    format_inr,
    generate_budget_alerts,
    group_indian,
)

def category(name, planned, committed, paid=0):
    return build_category_budget(
        BudgetCategoryInput(category=name, planned=planned, committed=committed, paid=paid)
    )

def test_indian_digit_grouping():
    assert group_indian(1234567) == "12,34,567"
    assert group_indian(100000) == "1,00,000"
    assert group_indian(999) == "999"
    assert group_indian(1234.5) == "1,234.5"
    assert group_indian(-25000) == "-25,000"

def test_compact_rupee_format():
    assert format_inr(1_000_000_000) == "₹1.00Cr"
    assert format_inr(150_000_000) == "₹15.00L"
    assert format_inr(250_000) == "₹2.5K"
    assert format_inr(50_050) == "₹500.5"

def test_full_rupee_format():
    assert format_full_inr(123_456_700) == "₹12,34,567"

def test_budget_health():
    assert calculate_budget_health(1000, 1100, 0) == BudgetHealth.OVER_BUDGET
    assert calculate_budget_health(1000, 950, 0) == BudgetHealth.AT_RISK
    assert calculate_budget_health(1000, 500, 300) == BudgetHealth.AT_RISK
    assert calculate_budget_health(1000, 500, 100) == BudgetHealth.ON_TRACK

def test_budget_health_without_total():
    assert calculate_budget_health(0, 0, 0) == BudgetHealth.ON_TRACK
    assert calculate_budget_health(0, 100, 0) == BudgetHealth.OVER_BUDGET

def test_category_budget():
    catering = category("catering", planned=200_000, committed=250_000, paid=100_000)

    assert catering.pending == 150_000
    assert catering.delta == 50_000
    assert catering.delta_percentage == 25.0
    assert catering.is_over_budget is True

    unplanned = category("decor", planned=0, committed=10_000)
    assert unplanned.delta_percentage == 0.0

def test_aggregate_summary():
    categories = [
        category("catering", 500, 600, 200),
        category("venue", 400, 300, 300),
    ]

    summary = aggregate_budget_summary(categories, total_budget=800)

    assert summary.planned == 900
    assert summary.committed == 900
    assert summary.paid == 500
    assert summary.pending == 400
    assert summary.overrun == 100
    assert summary.health == BudgetHealth.OVER_BUDGET

def test_top_cost_drivers():
    categories = [category(name, 100, committed) for name, committed in
                  [("decor", 50), ("catering", 900), ("venue", 700), ("music", 10), ("photo", 300)]]

    drivers = calculate_top_cost_drivers(categories)

    assert [d.name for d in drivers] == ["catering", "venue", "photo", "decor"]
    assert drivers[0].delta == 800

def test_alerts_red_first_and_capped():
    categories = [category("catering_services", 100, 150)]
    summary = aggregate_budget_summary(categories, total_budget=120)

    alerts = generate_budget_alerts(
        summary,
        categories,
        late_rsvp_count=4,
        late_rsvp_cost=600_000,
        unpaid_vendors_count=2,
        unpaid_amount=50_000,
        days_to_event=3,
    )

    assert [a.id for a in alerts] == ["late-rsvp-cost", "unpaid-vendors", "overall-overbudget"]
    assert all(a.severity == AlertSeverity.RED for a in alerts)
    assert alerts[0].message == "4 late RSVPs increased catering cost by ₹6,000"

def test_category_overbudget_alert():
    categories = [category("catering_services", 100_000, 150_000), category("venue", 100_000, 120_000)]
    summary = aggregate_budget_summary(categories, total_budget=1_000_000)

    alerts = generate_budget_alerts(summary, categories, 0, 0, 0, 0, days_to_event=30)

    assert len(alerts) == 1
    assert alerts[0].severity == AlertSeverity.AMBER
    assert alerts[0].message == "Catering services exceeds budget by ₹500"

def test_unpaid_vendors_only_alert_close_to_event():
    summary = aggregate_budget_summary([], total_budget=1000)

    assert generate_budget_alerts(summary, [], 0, 0, 3, 900, days_to_event=10) == []

def test_guest_cost_per_unit():
    assert calculate_guest_cost_per_unit(100, 200, 300, 60) == 100
    assert calculate_guest_cost_per_unit(100, 200, 300, 0) == 0

def test_change_impact_for_guests():
    impact = calculate_change_impact("add-guests", 10, ["catering", "venue"])

    assert impact.total_impact == 2_840_000
    assert impact.affected_categories_count == 2
    assert impact.message == "This change will increase total budget by ₹28,400 and affect 2 categories."

def test_change_impact_for_vendor():
    impact = calculate_change_impact("add-vendor", 150000, ["decor"])

    assert impact.total_impact == 15_000_000
    assert impact.message.endswith("₹1,50,000 and affect 1 category.")

def test_change_impact_rejects_unknown_type():
    with pytest.raises(ValueError):
        calculate_change_impact("remove-guests", 5, [])
