#!/usr/bin/env python3
"""
Script to create staff users for the courier backend
Usage: python create_admin.py
"""

import sys
import os
from getpass import getpass

# Add the backend directory to the Python path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from database.connection import SessionLocal, create_tables
from core.exceptions import BaseCustomException
from models.user import User
from services.auth import create_user, get_user_by_email

def create_staff_user():
    """Create a staff user interactively"""
    print("🔧 Courier Staff User Creation")
    print("=" * 40)

    create_tables()
    db = SessionLocal()

    try:
        email = input("Email: ").strip()

        existing_user = get_user_by_email(db, email)
        if existing_user:
            print(f"❌ User with email {email} already exists!")
            return

        password = getpass("Password: ").strip()
        if len(password) < 8:
            print("❌ Password must be at least 8 characters long!")
            return

        first_name = input("First Name: ").strip()
        last_name = input("Last Name: ").strip()

        print("\n🔨 Creating staff user...")
        user = create_user(
            db=db,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name
        )

        print("✅ Staff user created successfully!")
        print(f"📧 Email: {user.email}")
        print(f"👤 Name: {user.first_name} {user.last_name}")
        print(f"🆔 ID: {user.id}")

    except BaseCustomException as e:
        print(f"❌ Error creating staff user: {e.message}")
    finally:
        db.close()

def list_staff_users():
    """List all staff users"""
    print("👥 Current Staff Users")
    print("=" * 40)

    create_tables()
    db = SessionLocal()

    try:
        users = db.query(User).order_by(User.created_at).all()

        if not users:
            print("No staff users found.")
            return

        for user in users:
            print(f"📧 {user.email}")
            print(f"👤 {user.first_name} {user.last_name}")
            print(f"📅 Created: {user.created_at}")
            print(f"🔍 Active: {user.is_active}")
            print("-" * 30)
    finally:
        db.close()

def main():
    """Main function"""
    print("🚀 Courier Staff Management")
    print("=" * 40)
    print("1. Create Staff User")
    print("2. List Staff Users")
    print("3. Exit")

    while True:
        choice = input("\nSelect option (1-3): ").strip()

        if choice == "1":
            create_staff_user()
            break
        elif choice == "2":
            list_staff_users()
            break
        elif choice == "3":
            print("👋 Goodbye!")
            break
        else:
            print("❌ Invalid choice. Please select 1, 2, or 3.")

if __name__ == "__main__":
    main()
