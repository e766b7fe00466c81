from sqlalchemy.orm import Session
from typing import Dict

from models.order import Order, OrderStatus


def get_order_stats(db: Session) -> Dict[str, int]:
    """Current order counts over the whole table: total, pending, in transit, delivered."""
    total_orders = db.query(Order).count()
    pending_orders = db.query(Order).filter(Order.status == OrderStatus.PENDING).count()
    in_transit_orders = db.query(Order).filter(Order.status == OrderStatus.IN_TRANSIT).count()
    delivered_orders = db.query(Order).filter(Order.status == OrderStatus.DELIVERED).count()

    return {
        "total_orders": total_orders,
        "pending_orders": pending_orders,
        "in_transit_orders": in_transit_orders,
        "delivered_orders": delivered_orders
    }
