from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from database.connection import get_db
from routers.auth import get_current_user
from core.config import settings
from core.response import ErrorResponse
from models.order import OrderStatus
from schemas.order import (
    OrderCreate,
    OrderUpdate,
    OrderResponse,
    OrderWithDetails,
    OrderListResponse,
    TrackingCreate,
    TrackingResponse
)
from schemas.user import UserResponse
from services import order as order_service

logger = logging.getLogger(__name__)
router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse}}

@router.get("", response_model=OrderListResponse)
def list_orders(
    status: Optional[OrderStatus] = Query(None),
    agent_id: Optional[str] = Query(None, alias="agentId"),
    search: Optional[str] = Query(None, max_length=100),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List orders with optional status, agent and text filters."""
    offset = (page - 1) * limit
    return order_service.get_orders(
        db,
        status=status,
        agent_id=agent_id,
        search=search,
        limit=limit,
        offset=offset
    )

@router.get("/{order_id}", response_model=OrderWithDetails, responses=NOT_FOUND)
def get_order(
    order_id: str,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return order_service.get_order(db, order_id)

@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    order_data: OrderCreate,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    logger.info(f"Order creation by user: {current_user.email}")
    return order_service.create_order(db, order_data)

@router.put("/{order_id}", response_model=OrderResponse, responses=NOT_FOUND)
def update_order(
    order_id: str,
    order_data: OrderUpdate,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return order_service.update_order(db, order_id, order_data, updated_by=current_user.id)

@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
def delete_order(
    order_id: str,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    logger.info(f"Order {order_id} deletion by user: {current_user.email}")
    order_service.delete_order(db, order_id)

@router.get("/{order_id}/tracking", response_model=List[TrackingResponse])
def get_order_tracking(order_id: str, db: Session = Depends(get_db)):
    """Public tracking history, newest first."""
    return order_service.get_order_tracking(db, order_id)

@router.post(
    "/{order_id}/tracking",
    response_model=TrackingResponse,
    status_code=status.HTTP_201_CREATED,
    responses=NOT_FOUND
)
def add_order_tracking(
    order_id: str,
    tracking_data: TrackingCreate,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return order_service.add_order_tracking(db, order_id, tracking_data, updated_by=current_user.id)
