from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List
from datetime import datetime
import logging
import uuid

from models.customer import Customer
from schemas.customer import CustomerCreate, CustomerUpdate
from core.exceptions import ResourceNotFoundError, ValidationError, PersistenceError

logger = logging.getLogger(__name__)

def get_customers(db: Session) -> List[Customer]:
    """All customers, newest first."""
    return db.query(Customer).order_by(Customer.created_at.desc()).all()

def search_customers(db: Session, query: str) -> List[Customer]:
    """Case-insensitive substring search over name, email and phone."""
    pattern = f"%{query.strip()}%"
    return db.query(Customer).filter(
        or_(
            Customer.full_name.ilike(pattern),
            Customer.email.ilike(pattern),
            Customer.phone.ilike(pattern)
        )
    ).order_by(Customer.created_at.desc()).all()

def get_customer(db: Session, customer_id: str) -> Customer:
    customer = db.query(Customer).filter(Customer.id == customer_id).first()
    if not customer:
        logger.warning(f"Customer not found: {customer_id}")
        raise ResourceNotFoundError("Customer", customer_id)
    return customer

def create_customer(db: Session, customer_data: CustomerCreate) -> Customer:
    db_customer = Customer(
        id=str(uuid.uuid4()),
        **customer_data.model_dump(),
        created_at=datetime.utcnow(),
        updated_at=datetime.utcnow()
    )

    try:
        db.add(db_customer)
        db.commit()
        db.refresh(db_customer)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating customer: {str(e)}")
        raise PersistenceError("create customer")

    logger.info(f"Customer created successfully: {db_customer.id}")
    return db_customer

def update_customer(db: Session, customer_id: str, customer_data: CustomerUpdate) -> Customer:
    db_customer = get_customer(db, customer_id)

    update_data = customer_data.model_dump(exclude_unset=True)
    if "full_name" in update_data and update_data["full_name"] is None:
        raise ValidationError("Full name cannot be removed", field="fullName")

    for field, value in update_data.items():
        setattr(db_customer, field, value)
    db_customer.updated_at = datetime.utcnow()

    try:
        db.commit()
        db.refresh(db_customer)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating customer {customer_id}: {str(e)}")
        raise PersistenceError("update customer")

    logger.info(f"Customer updated successfully: {customer_id}")
    return db_customer

def delete_customer(db: Session, customer_id: str) -> None:
    db_customer = get_customer(db, customer_id)

    try:
        db.delete(db_customer)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting customer {customer_id}: {str(e)}")
        raise PersistenceError("delete customer")

    logger.info(f"Customer deleted successfully: {customer_id}")
