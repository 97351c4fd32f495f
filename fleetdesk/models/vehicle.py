"""ORM model for fleet vehicles."""

from sqlalchemy import Column, DateTime, Integer, String, func

from fleetdesk.models.base import Base


class Vehicle(Base):
    """Registered vehicle. Plates and serial number are unique across the fleet."""

    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    brand = Column(String(255), nullable=False)
    vehicle_type = Column(String(255), nullable=True)
    color = Column(String(255), nullable=True)
    model = Column(String(255), nullable=True)
    plates = Column(String(64), nullable=False, unique=True, index=True)
    location = Column(String(255), nullable=True)
    engine = Column(String(255), nullable=True)
    serial_number = Column(String(255), nullable=False, unique=True, index=True)
    eco = Column(String(255), nullable=True)
    contract = Column(String(255), nullable=True)
    status = Column(String(255), nullable=True)
    agency = Column(String(255), nullable=True)
    project = Column(String(255), nullable=True)
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
