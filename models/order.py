import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Numeric, Text, Enum
from sqlalchemy.orm import relationship
from database.base import Base
import enum

class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    IN_TRANSIT = "in-transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

class PackageType(str, enum.Enum):
    DOCUMENT = "document"
    PACKAGE = "package"
    PARCEL = "parcel"
    CARGO = "cargo"

class ServiceType(str, enum.Enum):
    EXPRESS = "express"
    REGULAR = "regular"
    ECONOMY = "economy"

class Region(str, enum.Enum):
    NCR = "NCR"
    NORTH_LUZON = "NORTH LUZON"
    SOUTH_LUZON = "SOUTH LUZON"
    VISAYAS = "VISAYAS"
    MINDANAO = "MINDANAO"

class Order(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    order_number = Column(String(32), unique=True, index=True, nullable=False)

    # Sender
    sender_name = Column(String, nullable=False, index=True)
    sender_phone = Column(String, nullable=True)
    sender_email = Column(String, nullable=True)
    sender_address = Column(Text, nullable=False)

    # Recipient
    recipient_name = Column(String, nullable=False, index=True)
    recipient_phone = Column(String, nullable=True)
    recipient_email = Column(String, nullable=True)
    recipient_address = Column(Text, nullable=False)

    # Package
    package_type = Column(Enum(PackageType), nullable=False)
    weight = Column(Numeric(10, 2), nullable=True)
    declared_value = Column(Numeric(12, 2), nullable=True)
    description = Column(Text, nullable=True)

    # Service
    service_type = Column(Enum(ServiceType), nullable=False)
    from_region = Column(Enum(Region), nullable=False)
    to_region = Column(Enum(Region), nullable=False)

    # Payment and service options
    is_cod = Column(Boolean, default=False)
    cod_amount = Column(Numeric(12, 2), nullable=True)
    has_insurance = Column(Boolean, default=False)
    has_sms_notification = Column(Boolean, default=False)

    # Pricing
    shipping_rate = Column(Numeric(10, 2), nullable=True)
    total_amount = Column(Numeric(12, 2), nullable=True)

    status = Column(Enum(OrderStatus), nullable=False, default=OrderStatus.PENDING, index=True)
    # No cascade: removing an agent only clears the assignment
    assigned_agent_id = Column(String, ForeignKey("delivery_agents.id", ondelete="SET NULL"), nullable=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    estimated_delivery = Column(DateTime, nullable=True)
    actual_delivery = Column(DateTime, nullable=True)

    # Relationships
    assigned_agent = relationship("DeliveryAgent", back_populates="assigned_orders")
    tracking_history = relationship(
        "OrderTracking",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by=lambda: [OrderTracking.timestamp.desc(), OrderTracking.id.desc()]
    )

class OrderTracking(Base):
    """Append-only status/location record for an order."""
    __tablename__ = "order_tracking"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    order_id = Column(String, ForeignKey("orders.id"), nullable=False, index=True)
    status = Column(String, nullable=False)
    location = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    timestamp = Column(DateTime, default=datetime.utcnow, index=True)
    updated_by = Column(String, nullable=True)

    # Relationships
    order = relationship("Order", back_populates="tracking_history")
