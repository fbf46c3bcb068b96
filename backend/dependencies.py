"""Shared dependencies: caller identity and the per-request group directory."""

from typing import Annotated
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

import schemas
import auth
from database import get_db
from directory import GroupDirectory
from stores import GroupStore, TransactionLedger
from utils.validation import get_user_by_email


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Session = Depends(get_db)
):
    """Get the current authenticated user from the JWT token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = auth.decode_access_token(token)
        email: str = payload.get("sub")
        if email is None:
            raise credentials_exception
        token_data = schemas.TokenData(email=email)
    except auth.JWTError:
        raise credentials_exception
    user = get_user_by_email(db, email=token_data.email)
    if user is None or not user.is_active:
        raise credentials_exception
    return user


def get_transaction_ledger(db: Session = Depends(get_db)) -> TransactionLedger:
    return TransactionLedger(db)


def get_group_directory(
    ledger: Annotated[TransactionLedger, Depends(get_transaction_ledger)],
    db: Session = Depends(get_db)
) -> GroupDirectory:
    return GroupDirectory(GroupStore(db), ledger)
