from .base import CamelModel


class DashboardStatsResponse(CamelModel):
    today_bookings: int
    week_bookings: int
    month_bookings: int
    occupancy_rate: int
