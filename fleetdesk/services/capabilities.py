"""Authorization checks: per-resource view flags, admin role, and self-delete protection."""

from enum import Enum

from fleetdesk.core.errors import AccessDenied
from fleetdesk.core.results import Err, Ok, Result
from fleetdesk.schemas.auth import Principal
from fleetdesk.schemas.pages import NavigationItem


class Resource(str, Enum):
    """Protected resource classes, one view flag each."""

    EXPENSES = "expenses"
    EXTERNAL_EXPENSES = "external_expenses"
    VEHICLES = "vehicles"
    USERS = "users"


# Resource -> Principal attribute holding its view flag.
CAPABILITY_FLAGS: dict[Resource, str] = {
    Resource.EXPENSES: "can_view_expenses",
    Resource.EXTERNAL_EXPENSES: "can_view_external_expenses",
    Resource.VEHICLES: "can_view_vehicles",
    Resource.USERS: "can_view_users",
}

# Dashboard sidebar, in display order.
NAVIGATION: tuple[NavigationItem, ...] = (
    NavigationItem(name="Dashboard", href="/"),
    NavigationItem(name="Vehicles", href="/vehicles", resource=Resource.VEHICLES.value),
    NavigationItem(name="Expenses", href="/expenses", resource=Resource.EXPENSES.value),
    NavigationItem(
        name="External Expenses",
        href="/external-expenses",
        resource=Resource.EXTERNAL_EXPENSES.value,
    ),
    NavigationItem(name="Users", href="/users", resource=Resource.USERS.value),
)


def can_view(principal: Principal, resource: Resource) -> bool:
    """True only when the principal's stored flag for resource is exactly True."""
    return getattr(principal, CAPABILITY_FLAGS[resource]) is True


def check_capability(principal: Principal, resource: Resource) -> Result[Principal, AccessDenied]:
    """Resource-view check. Role is not consulted: admins need the flag too."""
    if can_view(principal, resource):
        return Ok(principal)
    return Err(AccessDenied.MISSING_CAPABILITY)


def check_admin(principal: Principal) -> Result[Principal, AccessDenied]:
    """Administration check: role alone gates user management."""
    if principal.is_admin:
        return Ok(principal)
    return Err(AccessDenied.INSUFFICIENT_ROLE)


def check_can_delete_user(principal: Principal, target_id: int) -> Result[int, AccessDenied]:
    """
    Self-protection rule for user deletion.

    Callers run check_admin first; this only rejects deleting one's own row.
    """
    if principal.id == target_id:
        return Err(AccessDenied.SELF_DELETE_FORBIDDEN)
    return Ok(target_id)


def visible_navigation(principal: Principal) -> list[NavigationItem]:
    """Navigation entries the principal may see; entries without a resource are always shown."""
    return [
        item
        for item in NAVIGATION
        if item.resource is None or can_view(principal, Resource(item.resource))
    ]
