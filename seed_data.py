#!/usr/bin/env python3
"""
Seed script to create sample agents, customers and orders for the dashboard
"""
import os
import sys
sys.path.insert(0, os.path.dirname(__file__))

from database.connection import SessionLocal, create_tables
from core.exceptions import BaseCustomException
from models.customer import Customer
from models.delivery_agent import DeliveryAgent
from models.order import Order, OrderStatus
from schemas.agent import DeliveryAgentCreate
from schemas.customer import CustomerCreate
from schemas.order import OrderCreate, OrderUpdate
from services.agent import create_delivery_agent
from services.customer import create_customer
from services.order import create_order, update_order

AGENTS = [
    {"full_name": "Juan Dela Cruz", "phone": "09171234501", "employee_id": "EMP-001", "region": "NCR"},
    {"full_name": "Maria Santos", "phone": "09171234502", "employee_id": "EMP-002", "region": "SOUTH LUZON"},
    {"full_name": "Jose Reyes", "phone": "09171234503", "employee_id": "EMP-003", "region": "VISAYAS"},
    {"full_name": "Ana Bautista", "phone": "09171234504", "employee_id": "EMP-004", "region": "MINDANAO", "is_active": False},
]

CUSTOMERS = [
    {"full_name": "Carlo Mendoza", "email": "carlo.mendoza@example.ph", "phone": "09181230001",
     "address": "12 Ayala Ave", "city": "Makati", "province": "Metro Manila", "zip_code": "1226"},
    {"full_name": "Liza Villanueva", "email": "liza.v@example.ph", "phone": "09181230002",
     "address": "45 Osmena Blvd", "city": "Cebu City", "province": "Cebu", "zip_code": "6000"},
]

ORDERS = [
    {
        "sender_name": "Carlo Mendoza", "sender_address": "12 Ayala Ave, Makati",
        "recipient_name": "Liza Villanueva", "recipient_address": "45 Osmena Blvd, Cebu City",
        "package_type": "parcel", "weight": "3.5", "service_type": "express",
        "from_region": "NCR", "to_region": "VISAYAS", "has_insurance": True,
    },
    {
        "sender_name": "Liza Villanueva", "sender_address": "45 Osmena Blvd, Cebu City",
        "recipient_name": "Ramon Garcia", "recipient_address": "8 CM Recto Ave, Davao City",
        "package_type": "document", "weight": "0.5", "service_type": "regular",
        "from_region": "VISAYAS", "to_region": "MINDANAO",
    },
    {
        "sender_name": "Carlo Mendoza", "sender_address": "12 Ayala Ave, Makati",
        "recipient_name": "Grace Lim", "recipient_address": "3 Session Rd, Baguio",
        "package_type": "cargo", "weight": "12", "service_type": "economy",
        "from_region": "NCR", "to_region": "NORTH LUZON", "is_cod": True, "cod_amount": "2500",
    },
]

# Status progression applied to the seeded orders, by position
STATUS_UPDATES = [
    [OrderStatus.PROCESSING, OrderStatus.IN_TRANSIT],
    [OrderStatus.PROCESSING, OrderStatus.IN_TRANSIT, OrderStatus.DELIVERED],
    [],
]

def seed():
    """Create sample records through the service layer"""
    create_tables()
    db = SessionLocal()

    try:
        agents = []
        for agent_data in AGENTS:
            existing = db.query(DeliveryAgent).filter(DeliveryAgent.employee_id == agent_data["employee_id"]).first()
            if existing:
                print(f"Agent already exists: {existing.full_name}")
                agents.append(existing)
                continue
            agent = create_delivery_agent(db, DeliveryAgentCreate(**agent_data))
            agents.append(agent)
            print(f"Created agent: {agent.full_name} ({agent.region.value})")

        for customer_data in CUSTOMERS:
            if db.query(Customer).filter(Customer.email == customer_data["email"]).first():
                print(f"Customer already exists: {customer_data['full_name']}")
                continue
            customer = create_customer(db, CustomerCreate(**customer_data))
            print(f"Created customer: {customer.full_name}")

        if db.query(Order).count():
            print("Orders already present, skipping order seeding")
            return

        for order_data, statuses, agent in zip(ORDERS, STATUS_UPDATES, agents):
            order = create_order(db, OrderCreate(**order_data, assigned_agent_id=agent.id))
            for new_status in statuses:
                update_order(db, order.id, OrderUpdate(status=new_status), updated_by="seed")
            print(f"Created order: {order.order_number} -> {order.status.value} (rate {order.shipping_rate})")

    except BaseCustomException as e:
        print(f"Error during seeding: {e.message}")
    finally:
        db.close()

if __name__ == "__main__":
    print("Starting sample data seeding...")
    seed()
