"""ORM models for internal (per-vehicle) and external expenses."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from fleetdesk.models.base import Base


class ExpenseFieldsMixin:
    """Columns shared by internal and external expenses."""

    id = Column(Integer, primary_key=True, autoincrement=True)
    folio = Column(String(255), nullable=True, index=True)
    date = Column(DateTime(timezone=True), nullable=True)
    company_name = Column(String(255), nullable=True)
    bank = Column(String(255), nullable=True)
    card = Column(String(255), nullable=True)
    supplier = Column(String(255), nullable=True)
    concept = Column(Text, nullable=False)
    reference = Column(String(255), nullable=True)
    document = Column(String(255), nullable=True)
    project = Column(String(255), nullable=True)
    responsible = Column(String(255), nullable=True)
    transfer = Column(String(255), nullable=True)
    expense_type = Column(String(255), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class Expense(ExpenseFieldsMixin, Base):
    """Internal expense charged to one vehicle, linked by its plates."""

    __tablename__ = "expenses"

    plate = Column(
        String(64),
        ForeignKey("vehicles.plates", onupdate="CASCADE", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    vehicle = relationship("Vehicle", lazy="joined")


class ExternalExpense(ExpenseFieldsMixin, Base):
    """Expense not tied to a fleet vehicle."""

    __tablename__ = "external_expenses"
