from .base import CamelModel

class DashboardStats(CamelModel):
    today_appointments: int
    admitted_patients: int
    available_doctors: int
    today_revenue: float
    occupancy_rate: float
    on_leave_count: int
    week_change: float
