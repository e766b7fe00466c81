from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import List
from datetime import datetime
import logging
import uuid

from models.delivery_agent import DeliveryAgent
from models.order import Order
from schemas.agent import DeliveryAgentCreate, DeliveryAgentUpdate
from core.exceptions import (
    BusinessLogicError,
    ResourceNotFoundError,
    ValidationError,
    PersistenceError
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("full_name", "phone", "employee_id", "region", "is_active")

def get_delivery_agents(db: Session) -> List[DeliveryAgent]:
    """All agents, newest first."""
    return db.query(DeliveryAgent).order_by(DeliveryAgent.created_at.desc()).all()

def get_active_delivery_agents(db: Session) -> List[DeliveryAgent]:
    """Agents eligible for assignment, alphabetically."""
    return db.query(DeliveryAgent).filter(
        DeliveryAgent.is_active == True
    ).order_by(DeliveryAgent.full_name).all()

def get_delivery_agent(db: Session, agent_id: str) -> DeliveryAgent:
    agent = db.query(DeliveryAgent).filter(DeliveryAgent.id == agent_id).first()
    if not agent:
        logger.warning(f"Delivery agent not found: {agent_id}")
        raise ResourceNotFoundError("Delivery agent", agent_id)
    return agent

def _ensure_employee_id_available(db: Session, employee_id: str, agent_id: str = None):
    query = db.query(DeliveryAgent).filter(DeliveryAgent.employee_id == employee_id)
    if agent_id:
        query = query.filter(DeliveryAgent.id != agent_id)
    if query.first():
        logger.warning(f"Attempt to reuse employee ID: {employee_id}")
        raise BusinessLogicError(
            f"Employee ID '{employee_id}' is already registered",
            details={"field": "employeeId"}
        )

def create_delivery_agent(db: Session, agent_data: DeliveryAgentCreate) -> DeliveryAgent:
    _ensure_employee_id_available(db, agent_data.employee_id)

    db_agent = DeliveryAgent(
        id=str(uuid.uuid4()),
        **agent_data.model_dump(),
        created_at=datetime.utcnow(),
        updated_at=datetime.utcnow()
    )

    try:
        db.add(db_agent)
        db.commit()
        db.refresh(db_agent)
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Database integrity error creating delivery agent: {str(e)}")
        raise PersistenceError("create delivery agent")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating delivery agent: {str(e)}")
        raise PersistenceError("create delivery agent")

    logger.info(f"Delivery agent created successfully: {db_agent.employee_id}")
    return db_agent

def update_delivery_agent(db: Session, agent_id: str, agent_data: DeliveryAgentUpdate) -> DeliveryAgent:
    db_agent = get_delivery_agent(db, agent_id)

    update_data = agent_data.model_dump(exclude_unset=True)
    for field in REQUIRED_FIELDS:
        if field in update_data and update_data[field] is None:
            raise ValidationError(f"{field} cannot be removed", field=field)

    if "employee_id" in update_data:
        _ensure_employee_id_available(db, update_data["employee_id"], agent_id)

    for field, value in update_data.items():
        setattr(db_agent, field, value)
    db_agent.updated_at = datetime.utcnow()

    try:
        db.commit()
        db.refresh(db_agent)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating delivery agent {agent_id}: {str(e)}")
        raise PersistenceError("update delivery agent")

    logger.info(f"Delivery agent updated successfully: {agent_id}")
    return db_agent

def delete_delivery_agent(db: Session, agent_id: str) -> None:
    """Delete an agent and unassign their orders in the same transaction."""
    db_agent = get_delivery_agent(db, agent_id)

    try:
        released = db.query(Order).filter(Order.assigned_agent_id == agent_id).update(
            {Order.assigned_agent_id: None, Order.updated_at: datetime.utcnow()},
            synchronize_session=False
        )
        db.delete(db_agent)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting delivery agent {agent_id}: {str(e)}")
        raise PersistenceError("delete delivery agent")

    logger.info(f"Delivery agent deleted: {agent_id} ({released} orders unassigned)")
