"""
Route table and the access decisions it encodes.
"""

from railbook.core.exceptions import ENTRY_POINT
from railbook.schemas.user import Role

ADMIN_ROUTE = "/admin"
PASSENGER_ROUTE = "/passenger"

ROUTES = {
    ADMIN_ROUTE: Role.ADMIN,
    PASSENGER_ROUTE: Role.PASSENGER,
}


def landing_route(role: Role) -> str:
    """Where a freshly signed-in identity is sent."""
    return ADMIN_ROUTE if role == Role.ADMIN else PASSENGER_ROUTE


def required_role(path: str):
    """Role needed for `path`; None for the entry point."""
    return ROUTES.get(path)


def resolve(path: str) -> str:
    """Unknown paths fall back to the entry point."""
    return path if path in ROUTES else ENTRY_POINT
