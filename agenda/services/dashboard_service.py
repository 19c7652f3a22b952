"""Dashboard counters for the manager panel"""
import calendar
import math
from datetime import date, timedelta

from agenda.schemas.appointment import AppointmentStatus
from agenda.schemas.dashboard import DashboardStatsResponse
from agenda.storage import Storage


def week_bounds(today: date):
    """Sunday..Saturday week containing ``today``."""
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def month_bounds(today: date):
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def occupancy_rate(booked: int, total_slots: int) -> int:
    """Percentage rounded half up; 0 when nothing is booked or offered."""
    if booked == 0 or total_slots == 0:
        return 0
    return math.floor(booked / total_slots * 100 + 0.5)


async def get_dashboard_stats(storage: Storage, today: date) -> DashboardStatsResponse:
    """Counts of non-cancelled appointments for today, this week and this month."""
    week_start, week_end = week_bounds(today)
    month_start, month_end = month_bounds(today)

    appointments = await storage.list_appointments(
        start_date=min(week_start, month_start).isoformat(),
        end_date=max(week_end, month_end).isoformat(),
    )
    active = [a for a in appointments if a.status != AppointmentStatus.CANCELLED]

    today_str = today.isoformat()
    today_count = sum(1 for a in active if a.date == today_str)
    week_count = sum(1 for a in active if week_start.isoformat() <= a.date <= week_end.isoformat())
    month_count = sum(1 for a in active if month_start.isoformat() <= a.date <= month_end.isoformat())

    total_slots = len(await storage.list_time_slots(active_only=True))

    return DashboardStatsResponse(
        today_bookings=today_count,
        week_bookings=week_count,
        month_bookings=month_count,
        occupancy_rate=occupancy_rate(today_count, total_slots),
    )
