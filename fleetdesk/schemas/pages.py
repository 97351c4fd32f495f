"""Schemas for dashboard page state."""

from pydantic import BaseModel

from fleetdesk.schemas.auth import Principal


class NavigationItem(BaseModel):
    """Sidebar entry; resource is None for entries every principal sees."""

    name: str
    href: str
    resource: str | None = None


class PageState(BaseModel):
    """
    What a dashboard page renders for the current principal.

    permitted=False is the "no permission" state, not an error.
    """

    page: str
    permitted: bool
    principal: Principal
    navigation: list[NavigationItem]


class LoginPage(BaseModel):
    """Login page payload: where to post credentials."""

    page: str = "login"
    login_url: str
