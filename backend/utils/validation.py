"""Lookup helpers that turn missing users and groups into HTTP errors."""

from sqlalchemy.orm import Session
from fastapi import HTTPException

import models


def get_user_by_email(db: Session, email: str):
    """Get a user by their email address."""
    return db.query(models.User).filter(models.User.email == email).first()


def get_group_or_404(db: Session, group_id: int):
    """Get a group by ID or raise 404 if not found."""
    group = db.query(models.Group).filter(models.Group.id == group_id).first()
    if not group:
        raise HTTPException(status_code=404, detail="Group not found")
    return group


def get_user_or_400(db: Session, user_id: int, role: str = "User"):
    """Get a user referenced by a request body, raise 400 if it does not exist."""
    user = db.query(models.User).filter(models.User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=400, detail=f"{role} with ID {user_id} not found")
    return user


def get_users_or_400(db: Session, user_ids: set[int]) -> set:
    """Resolve a set of user IDs, raise 400 naming any that do not exist."""
    if not user_ids:
        return set()
    users = db.query(models.User).filter(models.User.id.in_(user_ids)).all()
    missing = set(user_ids) - {u.id for u in users}
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"Users with IDs {sorted(missing)} not found"
        )
    return set(users)
