from models.user import User
from models.customer import Customer
from models.order import Order, OrderTracking, OrderStatus, PackageType, ServiceType, Region
from models.delivery_agent import DeliveryAgent

__all__ = [
    "User",
    "Customer",
    "DeliveryAgent",
    "Order",
    "OrderTracking",
    "OrderStatus",
    "PackageType",
    "ServiceType",
    "Region",
]
