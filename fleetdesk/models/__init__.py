"""SQLAlchemy ORM models."""

from fleetdesk.models.base import Base
from fleetdesk.models.expense import Expense, ExternalExpense
from fleetdesk.models.user import User
from fleetdesk.models.vehicle import Vehicle

__all__ = ["Base", "Expense", "ExternalExpense", "User", "Vehicle"]
