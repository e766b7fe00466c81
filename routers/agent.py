from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List
import logging

from database.connection import get_db
from routers.auth import get_current_user
from schemas.agent import DeliveryAgentCreate, DeliveryAgentUpdate, DeliveryAgentResponse
from schemas.user import UserResponse
from services import agent as agent_service

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=List[DeliveryAgentResponse])
def list_agents(
    active: bool = Query(False, description="Only agents available for assignment"),
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    if active:
        return agent_service.get_active_delivery_agents(db)
    return agent_service.get_delivery_agents(db)

@router.get("/{agent_id}", response_model=DeliveryAgentResponse)
def get_agent(
    agent_id: str,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return agent_service.get_delivery_agent(db, agent_id)

@router.post("", response_model=DeliveryAgentResponse, status_code=status.HTTP_201_CREATED)
def create_agent(
    agent_data: DeliveryAgentCreate,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    logger.info(f"Delivery agent creation by user: {current_user.email}")
    return agent_service.create_delivery_agent(db, agent_data)

@router.put("/{agent_id}", response_model=DeliveryAgentResponse)
def update_agent(
    agent_id: str,
    agent_data: DeliveryAgentUpdate,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return agent_service.update_delivery_agent(db, agent_id, agent_data)

@router.delete("/{agent_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_agent(
    agent_id: str,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    logger.info(f"Delivery agent {agent_id} deletion by user: {current_user.email}")
    agent_service.delete_delivery_agent(db, agent_id)
