"""
Role-gated dashboards. The identity's role picks exactly one of them.
"""

from railbook.schemas.user import Role
from railbook.views.admin import AdminDashboard
from railbook.views.passenger import PassengerDashboard

DASHBOARDS = {
    Role.ADMIN: AdminDashboard,
    Role.PASSENGER: PassengerDashboard,
}


def dashboard_for(role: Role):
    return DASHBOARDS[role]


__all__ = ["AdminDashboard", "PassengerDashboard", "DASHBOARDS", "dashboard_for"]
