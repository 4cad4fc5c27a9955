"""
Dashboard statistics.

Only the number of appointments booked for today is derived from stored
data. The remaining figures are fixed placeholders until the rules for
computing them are defined.
"""

from datetime import date
from typing import TYPE_CHECKING, Optional

from ..models.dashboard import DashboardStats

if TYPE_CHECKING:
    from .repository import HospitalRepository

PLACEHOLDER_STATS = {
    "admitted_patients": 137,
    "available_doctors": 8,
    "today_revenue": 9834,
    "occupancy_rate": 85,
    "on_leave_count": 2,
    "week_change": 8.2,
}

def compute_dashboard_stats(
    repository: "HospitalRepository", today: Optional[date] = None
) -> DashboardStats:
    """Build a snapshot of the dashboard figures for the given local date."""
    today = today or date.today()
    today_appointments = len(repository.get_appointments_by_date(today.isoformat()))

    return DashboardStats(today_appointments=today_appointments, **PLACEHOLDER_STATS)
