#!/usr/bin/env python3
"""
Initialize database tables from models, optionally adding a user and
printing an access token for it.
"""
import argparse

from auth import create_access_token
from database import engine, Base, SessionLocal
from models import User
from utils.validation import get_user_by_email

def main():
    parser = argparse.ArgumentParser(description="Create tables and optionally a user")
    parser.add_argument("--email", help="Create (or reuse) a user with this email")
    parser.add_argument("--name", help="Full name for a new user")
    args = parser.parse_args()

    print("Creating all database tables...")
    Base.metadata.create_all(bind=engine)
    print("✓ Database tables created successfully!")

    if not args.email:
        return

    db = SessionLocal()
    try:
        user = get_user_by_email(db, args.email)
        if user is None:
            user = User(email=args.email, full_name=args.name, is_active=True)
            db.add(user)
            db.commit()
            db.refresh(user)
            print(f"✓ Created user {user.email} (id {user.id})")
        else:
            print(f"User {user.email} already exists (id {user.id})")
        print(f"Access token: {create_access_token(data={'sub': user.email})}")
    finally:
        db.close()

if __name__ == "__main__":
    main()
