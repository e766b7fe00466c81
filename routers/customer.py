from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from database.connection import get_db
from routers.auth import get_current_user
from schemas.customer import CustomerCreate, CustomerUpdate, CustomerResponse
from schemas.user import UserResponse
from services import customer as customer_service

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=List[CustomerResponse])
def list_customers(
    search: Optional[str] = Query(None, max_length=100),
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List customers, optionally filtered by name, email or phone."""
    if search and search.strip():
        return customer_service.search_customers(db, search)
    return customer_service.get_customers(db)

@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: str,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return customer_service.get_customer(db, customer_id)

@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(
    customer_data: CustomerCreate,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    logger.info(f"Customer creation by user: {current_user.email}")
    return customer_service.create_customer(db, customer_data)

@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: str,
    customer_data: CustomerUpdate,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return customer_service.update_customer(db, customer_id, customer_data)

@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(
    customer_id: str,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    logger.info(f"Customer {customer_id} deletion by user: {current_user.email}")
    customer_service.delete_customer(db, customer_id)
