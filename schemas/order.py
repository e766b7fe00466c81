from pydantic import Field, EmailStr, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from models.order import OrderStatus, PackageType, ServiceType, Region
from schemas.base import CamelModel, blank_to_none
from schemas.agent import DeliveryAgentResponse

OPTIONAL_TEXT_FIELDS = (
    'sender_phone', 'sender_email', 'recipient_phone', 'recipient_email',
    'description', 'assigned_agent_id',
)

class OrderBase(CamelModel):
    # Sender
    sender_name: str = Field(..., min_length=1, max_length=100)
    sender_phone: Optional[str] = Field(None, max_length=20)
    sender_email: Optional[EmailStr] = None
    sender_address: str = Field(..., min_length=1, max_length=500)

    # Recipient
    recipient_name: str = Field(..., min_length=1, max_length=100)
    recipient_phone: Optional[str] = Field(None, max_length=20)
    recipient_email: Optional[EmailStr] = None
    recipient_address: str = Field(..., min_length=1, max_length=500)

    # Package
    package_type: PackageType
    weight: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    declared_value: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    description: Optional[str] = Field(None, max_length=2000)

    # Service
    service_type: ServiceType
    from_region: Region
    to_region: Region

    # Payment and service options
    is_cod: bool = False
    cod_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    has_insurance: bool = False
    has_sms_notification: bool = False

    # Pricing
    shipping_rate: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    total_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)

    assigned_agent_id: Optional[str] = None
    estimated_delivery: Optional[datetime] = None
    actual_delivery: Optional[datetime] = None

    @field_validator(*OPTIONAL_TEXT_FIELDS, mode='before')
    @classmethod
    def empty_as_none(cls, v):
        return blank_to_none(v)

    @field_validator('sender_name', 'sender_address', 'recipient_name', 'recipient_address')
    @classmethod
    def strip_required(cls, v):
        if not v.strip():
            raise ValueError('Value cannot be empty')
        return v.strip()

class OrderCreate(OrderBase):
    status: OrderStatus = OrderStatus.PENDING

class OrderUpdate(CamelModel):
    """Partial update; the order number is not accepted here."""
    sender_name: Optional[str] = Field(None, min_length=1, max_length=100)
    sender_phone: Optional[str] = Field(None, max_length=20)
    sender_email: Optional[EmailStr] = None
    sender_address: Optional[str] = Field(None, min_length=1, max_length=500)

    recipient_name: Optional[str] = Field(None, min_length=1, max_length=100)
    recipient_phone: Optional[str] = Field(None, max_length=20)
    recipient_email: Optional[EmailStr] = None
    recipient_address: Optional[str] = Field(None, min_length=1, max_length=500)

    package_type: Optional[PackageType] = None
    weight: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    declared_value: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    description: Optional[str] = Field(None, max_length=2000)

    service_type: Optional[ServiceType] = None
    from_region: Optional[Region] = None
    to_region: Optional[Region] = None

    is_cod: Optional[bool] = None
    cod_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    has_insurance: Optional[bool] = None
    has_sms_notification: Optional[bool] = None

    shipping_rate: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    total_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)

    status: Optional[OrderStatus] = None
    assigned_agent_id: Optional[str] = None
    estimated_delivery: Optional[datetime] = None
    actual_delivery: Optional[datetime] = None

    @field_validator(*OPTIONAL_TEXT_FIELDS, mode='before')
    @classmethod
    def empty_as_none(cls, v):
        return blank_to_none(v)

    @field_validator('sender_name', 'sender_address', 'recipient_name', 'recipient_address')
    @classmethod
    def strip_required(cls, v):
        # None is rejected by the service as removing a required field
        if v is None:
            return v
        if not v.strip():
            raise ValueError('Value cannot be empty')
        return v.strip()

class OrderResponse(CamelModel):
    id: str
    order_number: str

    sender_name: str
    sender_phone: Optional[str] = None
    sender_email: Optional[str] = None
    sender_address: str

    recipient_name: str
    recipient_phone: Optional[str] = None
    recipient_email: Optional[str] = None
    recipient_address: str

    package_type: PackageType
    weight: Optional[float] = None
    declared_value: Optional[float] = None
    description: Optional[str] = None

    service_type: ServiceType
    from_region: Region
    to_region: Region

    is_cod: Optional[bool] = False
    cod_amount: Optional[float] = None
    has_insurance: Optional[bool] = False
    has_sms_notification: Optional[bool] = False

    shipping_rate: Optional[float] = None
    total_amount: Optional[float] = None

    status: OrderStatus
    assigned_agent_id: Optional[str] = None

    created_at: datetime
    updated_at: datetime
    estimated_delivery: Optional[datetime] = None
    actual_delivery: Optional[datetime] = None

# Tracking Schemas
class TrackingCreate(CamelModel):
    status: str = Field(..., min_length=1, max_length=50)
    location: Optional[str] = Field(None, max_length=200)
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        if not v.strip():
            raise ValueError('Status cannot be empty')
        return v.strip()

class TrackingResponse(CamelModel):
    id: str
    order_id: str
    status: str
    location: Optional[str] = None
    notes: Optional[str] = None
    timestamp: datetime
    updated_by: Optional[str] = None

# Composite Schemas
class OrderWithAgent(OrderResponse):
    assigned_agent: Optional[DeliveryAgentResponse] = None

class OrderWithDetails(OrderWithAgent):
    tracking_history: List[TrackingResponse] = []

class OrderListResponse(CamelModel):
    orders: List[OrderWithAgent]
    total: int

class PublicTrackingResponse(CamelModel):
    """Projection served to anonymous callers: no sender, contact or pricing data."""
    order_number: str
    status: OrderStatus
    recipient_name: str
    estimated_delivery: Optional[datetime] = None
    tracking_history: List[TrackingResponse] = []

class OrderStats(CamelModel):
    total_orders: int
    pending_orders: int
    in_transit_orders: int
    delivered_orders: int
