"""ORM model for application users (auth, role and per-resource view flags)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, false, func, true

from fleetdesk.models.base import Base


class User(Base):
    """
    Staff account used for login and authorization.

    role: 'admin' or 'user'. Role gates user administration only; viewing each
    resource class is gated by its own can_view_* flag, independent of role.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user", server_default="user")
    can_view_expenses = Column(Boolean, nullable=False, default=True, server_default=true())
    can_view_external_expenses = Column(
        Boolean, nullable=False, default=True, server_default=true()
    )
    can_view_vehicles = Column(Boolean, nullable=False, default=True, server_default=true())
    can_view_users = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
