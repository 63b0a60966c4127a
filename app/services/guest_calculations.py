"""
Guest metrics: RSVP roll-ups, guest-driven costs and logistics alerts
"""

from typing import Iterable, List, Tuple

from app.core.config import settings
from app.models import Guest
from app.schemas.budget import (
    Alert,
    AlertSeverity,
    ConfirmationRate,
    CostImpact,
    GuestStats,
    HouseholdCompleteness,
    OutstationStats,
    VIPStats,
)
from app.services.budget_calculations import group_indian, sort_alerts


def calculate_confirmation_rate(confirmed: int, total: int) -> ConfirmationRate:
    if total == 0:
        return ConfirmationRate(rate=0, color="amber")

    rate = round(confirmed / total * 100)
    if rate >= 85:
        color = "green"
    elif rate >= 60:
        color = "amber"
    else:
        color = "red"
    return ConfirmationRate(rate=rate, color=color)


def calculate_guest_costs(
    guest_count: int,
    catering_per_head: int = None,
    rooms_needed: int = 0,
    room_cost_per_night: int = None,
    transport_seats: int = 0,
    transport_cost_per_seat: int = None,
) -> CostImpact:
    """Guest-driven costs in rupees; unit costs default to the configured rates"""
    if catering_per_head is None:
        catering_per_head = settings.CATERING_PER_HEAD
    if room_cost_per_night is None:
        room_cost_per_night = settings.ROOM_COST_PER_NIGHT
    if transport_cost_per_seat is None:
        transport_cost_per_seat = settings.TRANSPORT_COST_PER_SEAT

    catering = guest_count * catering_per_head
    rooms = rooms_needed * room_cost_per_night
    transport = transport_seats * transport_cost_per_seat
    return CostImpact(
        catering=catering,
        rooms=rooms,
        transport=transport,
        total=catering + rooms + transport,
    )


def collect_guest_stats(guests: Iterable[Guest]) -> Tuple[GuestStats, OutstationStats, VIPStats]:
    """Count RSVP, outstation and VIP figures for a guest list"""
    stats = GuestStats()
    outstation = OutstationStats()
    vip = VIPStats()

    for guest in guests:
        stats.total += 1
        if guest.rsvp_status == "accepted":
            stats.confirmed += 1
        elif guest.rsvp_status == "declined":
            stats.declined += 1
        else:
            stats.pending += 1

        if guest.is_vip:
            vip.total += 1
        if guest.is_elderly:
            vip.elderly += 1
        if guest.is_child:
            vip.children += 1

        if guest.is_outstation and guest.rsvp_status != "declined":
            outstation.total += 1
            if guest.hotel_name:
                outstation.rooms_assigned += 1
            else:
                outstation.rooms_unassigned += 1
            if guest.needs_pickup:
                outstation.pickup_needed += 1
                if not guest.pickup_assigned:
                    outstation.pickup_unassigned += 1

    stats.confirmation_rate = calculate_confirmation_rate(stats.confirmed, stats.total).rate
    return stats, outstation, vip


def generate_guest_alerts(
    stats: GuestStats,
    outstation: OutstationStats,
    vip: VIPStats,
    rsvp_cutoff_passed: bool,
    late_confirmations: int = 0,
    catering_per_head: int = None,
) -> List[Alert]:
    if catering_per_head is None:
        catering_per_head = settings.CATERING_PER_HEAD
    alerts: List[Alert] = []

    if rsvp_cutoff_passed and late_confirmations > 0:
        cost = late_confirmations * catering_per_head
        alerts.append(Alert(
            id="late-confirmations",
            severity=AlertSeverity.RED,
            message=f"{late_confirmations} guests confirmed after RSVP cutoff",
            link="/guests?filter=late-confirmations",
            impact=f"+₹{group_indian(cost)}",
        ))

    if outstation.rooms_unassigned > 0:
        alerts.append(Alert(
            id="no-hotel",
            severity=AlertSeverity.AMBER,
            message=f"{outstation.rooms_unassigned} outstation guests have no hotel assigned",
            link="/guests?view=logistics&filter=no-hotel",
        ))

    if outstation.pickup_unassigned > 0:
        alerts.append(Alert(
            id="no-pickup",
            severity=AlertSeverity.AMBER,
            message=f"{outstation.pickup_unassigned} guests need pickup assignment",
            link="/guests?view=logistics&filter=no-pickup",
        ))

    return sort_alerts(alerts)


def calculate_household_completeness(
    total_families: int,
    fully_responded: int,
    partial_responses: int,
) -> HouseholdCompleteness:
    """Share of families whose members have all answered"""
    percentage = round(fully_responded / total_families * 100) if total_families > 0 else 0
    return HouseholdCompleteness(
        percentage=percentage,
        fully_responded=fully_responded,
        partial_responses=partial_responses,
        pending=total_families - fully_responded - partial_responses,
    )


def count_household_responses(guests: Iterable[Guest]) -> HouseholdCompleteness:
    """Group guests by family and measure how many families have fully responded"""
    families = {}
    for guest in guests:
        key = (guest.family_group_name or "").strip() or f"guest-{guest.id}"
        families.setdefault(key, []).append(guest.rsvp_status != "pending")

    fully = sum(1 for answered in families.values() if all(answered))
    partial = sum(1 for answered in families.values() if any(answered) and not all(answered))
    return calculate_household_completeness(len(families), fully, partial)
