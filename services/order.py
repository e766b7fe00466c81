"""
Order lifecycle: numbering, create/update/delete, listing and tracking history.

Every order write and the tracking event it produces are committed together;
a failure rolls both back.
"""
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import List, Optional, Dict, Any
from datetime import datetime
from decimal import Decimal
import logging
import secrets
import uuid

from models.order import Order, OrderTracking, OrderStatus
from models.delivery_agent import DeliveryAgent
from schemas.order import OrderCreate, OrderUpdate, TrackingCreate
from services.rates import compute_rate, estimate_total, estimate_delivery_date
from core.config import settings
from core.exceptions import ResourceNotFoundError, ValidationError, PersistenceError

logger = logging.getLogger(__name__)

SYSTEM_ACTOR = "system"
DEFAULT_ACTOR = "admin"
ORDER_NUMBER_DIGITS = 6
ORDER_NUMBER_ATTEMPTS = 5

REQUIRED_FIELDS = (
    "sender_name", "sender_address", "recipient_name", "recipient_address",
    "package_type", "service_type", "from_region", "to_region", "status",
)

def generate_order_number(db: Session, now: Optional[datetime] = None) -> str:
    """Build ``<PREFIX>-<YYYY>-<NNNNNN>`` with a random suffix not yet in use.

    The unique constraint on the column still guards against a concurrent
    request picking the same number between this check and the commit.
    """
    year = (now or datetime.utcnow()).year
    for _ in range(ORDER_NUMBER_ATTEMPTS):
        suffix = str(secrets.randbelow(10 ** ORDER_NUMBER_DIGITS)).zfill(ORDER_NUMBER_DIGITS)
        candidate = f"{settings.ORDER_NUMBER_PREFIX}-{year}-{suffix}"
        if not db.query(Order.id).filter(Order.order_number == candidate).first():
            return candidate
        logger.warning(f"Order number collision on {candidate}, retrying")
    raise PersistenceError("allocate a unique order number")

def _ensure_agent_exists(db: Session, agent_id: Optional[str]):
    if agent_id is None:
        return
    if not db.query(DeliveryAgent.id).filter(DeliveryAgent.id == agent_id).first():
        logger.warning(f"Order references unknown delivery agent: {agent_id}")
        raise ValidationError("Assigned delivery agent does not exist", field="assignedAgentId")

def _apply_pricing(order_data: Dict[str, Any], created_at: datetime) -> None:
    """Fill in rate, total and estimated delivery the caller did not supply."""
    quote = None
    if order_data.get("weight") is not None:
        quote = compute_rate(
            order_data["from_region"],
            order_data["to_region"],
            order_data["weight"],
            order_data["service_type"]
        )

    if order_data.get("shipping_rate") is None and quote:
        order_data["shipping_rate"] = Decimal(str(quote["rate"]))

    if order_data.get("total_amount") is None and order_data.get("shipping_rate") is not None:
        order_data["total_amount"] = estimate_total(
            order_data["shipping_rate"], order_data.get("has_insurance", False)
        )

    if order_data.get("estimated_delivery") is None and quote:
        order_data["estimated_delivery"] = estimate_delivery_date(created_at, quote["estimated_days"])

def create_order(db: Session, order_data: OrderCreate) -> Order:
    """Persist a new order together with its initial "pending" tracking event."""
    _ensure_agent_exists(db, order_data.assigned_agent_id)

    now = datetime.utcnow()
    data = order_data.model_dump()
    _apply_pricing(data, now)

    db_order = Order(
        id=str(uuid.uuid4()),
        order_number=generate_order_number(db, now),
        **data,
        created_at=now,
        updated_at=now
    )

    try:
        db.add(db_order)
        db.flush()
        db.add(OrderTracking(
            id=str(uuid.uuid4()),
            order_id=db_order.id,
            status=OrderStatus.PENDING.value,
            notes="Order created",
            timestamp=now,
            updated_by=SYSTEM_ACTOR
        ))
        db.commit()
        db.refresh(db_order)
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Database integrity error creating order: {str(e)}")
        raise PersistenceError("create order")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating order: {str(e)}")
        raise PersistenceError("create order")

    logger.info(f"Order created: {db_order.order_number} ({db_order.id})")
    return db_order

def update_order(db: Session, order_id: str, order_data: OrderUpdate, updated_by: Optional[str] = None) -> Order:
    """Apply a partial update.

    A supplied status always appends a tracking event, even when it matches
    the current status. Transitions between statuses are not restricted.
    """
    db_order = db.query(Order).filter(Order.id == order_id).first()
    if not db_order:
        logger.warning(f"Attempt to update non-existent order: {order_id}")
        raise ResourceNotFoundError("Order", order_id)

    update_data = order_data.model_dump(exclude_unset=True)
    for field in REQUIRED_FIELDS:
        if field in update_data and update_data[field] is None:
            raise ValidationError(f"{field} cannot be removed", field=field)

    if update_data.get("assigned_agent_id") is not None:
        _ensure_agent_exists(db, update_data["assigned_agent_id"])

    for field, value in update_data.items():
        setattr(db_order, field, value)
    db_order.updated_at = datetime.utcnow()

    new_status = update_data.get("status")

    try:
        if new_status is not None:
            db.add(OrderTracking(
                id=str(uuid.uuid4()),
                order_id=order_id,
                status=new_status.value,
                notes=f"Status updated to {new_status.value}",
                timestamp=datetime.utcnow(),
                updated_by=updated_by or DEFAULT_ACTOR
            ))
        db.commit()
        db.refresh(db_order)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating order {order_id}: {str(e)}")
        raise PersistenceError("update order")

    logger.info(f"Order updated: {db_order.order_number}" + (f" -> {new_status.value}" if new_status else ""))
    return db_order

def delete_order(db: Session, order_id: str) -> None:
    """Remove the order's tracking events, then the order, in one transaction."""
    db_order = db.query(Order).filter(Order.id == order_id).first()
    if not db_order:
        logger.warning(f"Attempt to delete non-existent order: {order_id}")
        raise ResourceNotFoundError("Order", order_id)

    try:
        removed = db.query(OrderTracking).filter(
            OrderTracking.order_id == order_id
        ).delete(synchronize_session=False)
        db.delete(db_order)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting order {order_id}: {str(e)}")
        raise PersistenceError("delete order")

    logger.info(f"Order deleted: {order_id} ({removed} tracking events removed)")

def get_orders(
    db: Session,
    status: Optional[OrderStatus] = None,
    agent_id: Optional[str] = None,
    search: Optional[str] = None,
    limit: Optional[int] = None,
    offset: int = 0
) -> Dict[str, Any]:
    """Filtered, paginated order list with the assigned agent attached.

    Filters combine with AND; ``search`` matches order number, sender name or
    recipient name case-insensitively. ``total`` counts every matching row.
    """
    limit = limit or settings.DEFAULT_PAGE_SIZE
    offset = max(offset or 0, 0)

    query = db.query(Order)

    if status:
        query = query.filter(Order.status == OrderStatus(status))

    if agent_id:
        query = query.filter(Order.assigned_agent_id == agent_id)

    if search and search.strip():
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                Order.order_number.ilike(pattern),
                Order.sender_name.ilike(pattern),
                Order.recipient_name.ilike(pattern)
            )
        )

    total = query.count()
    orders = query.options(
        joinedload(Order.assigned_agent)
    ).order_by(Order.created_at.desc()).offset(offset).limit(limit).all()

    return {"orders": orders, "total": total}

def get_order(db: Session, order_id: str) -> Order:
    """Order with its agent and newest-first tracking history."""
    order = db.query(Order).options(
        joinedload(Order.assigned_agent),
        joinedload(Order.tracking_history)
    ).filter(Order.id == order_id).first()
    if not order:
        raise ResourceNotFoundError("Order", order_id)
    return order

def get_order_by_number(db: Session, order_number: str) -> Order:
    order = db.query(Order).options(
        joinedload(Order.assigned_agent),
        joinedload(Order.tracking_history)
    ).filter(Order.order_number == order_number.strip()).first()
    if not order:
        logger.info(f"Tracking lookup for unknown order number: {order_number}")
        raise ResourceNotFoundError("Order", order_number)
    return order

def add_order_tracking(
    db: Session,
    order_id: str,
    tracking_data: TrackingCreate,
    updated_by: Optional[str] = None
) -> OrderTracking:
    """Append a manual tracking event. The order's own status is left as is."""
    if not db.query(Order.id).filter(Order.id == order_id).first():
        raise ResourceNotFoundError("Order", order_id)

    event = OrderTracking(
        id=str(uuid.uuid4()),
        order_id=order_id,
        status=tracking_data.status,
        location=tracking_data.location,
        notes=tracking_data.notes,
        timestamp=datetime.utcnow(),
        updated_by=updated_by or DEFAULT_ACTOR
    )

    try:
        db.add(event)
        db.commit()
        db.refresh(event)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error adding tracking event to order {order_id}: {str(e)}")
        raise PersistenceError("add order tracking")

    logger.info(f"Tracking event '{event.status}' added to order {order_id}")
    return event

def get_order_tracking(db: Session, order_id: str) -> List[OrderTracking]:
    """Tracking events newest first (ties broken by id); empty for unknown or deleted orders."""
    return db.query(OrderTracking).filter(
        OrderTracking.order_id == order_id
    ).order_by(OrderTracking.timestamp.desc(), OrderTracking.id.desc()).all()
