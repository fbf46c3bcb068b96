"""Transactions router: record a transaction in a group and read it back."""

import logging
from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

import models
import schemas
from database import get_db
from dependencies import get_current_user, get_transaction_ledger
from stores import TransactionLedger
from utils.headers import create_entity_creation_alert
from utils.validation import get_group_or_404, get_user_or_400

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.post("", response_model=schemas.Transaction, status_code=201)
def create_transaction(
    transaction: schemas.TransactionCreate,
    response: Response,
    current_user: Annotated[models.User, Depends(get_current_user)],
    ledger: Annotated[TransactionLedger, Depends(get_transaction_ledger)],
    db: Session = Depends(get_db)
):
    logger.debug(f"REST request to save Transaction : {transaction}")
    get_group_or_404(db, transaction.group_id)

    payer_id = transaction.payer_id if transaction.payer_id is not None else current_user.id
    get_user_or_400(db, payer_id, role="Payer")

    db_transaction = ledger.save(models.Transaction(
        description=transaction.description,
        amount=transaction.amount,
        currency=transaction.currency,
        date=transaction.date,
        group_id=transaction.group_id,
        payer_id=payer_id,
        created_by_id=current_user.id
    ))

    response.headers["Location"] = f"/api/transactions/{db_transaction.id}"
    response.headers.update(create_entity_creation_alert("transaction", str(db_transaction.id)))
    return db_transaction


@router.get("/{transaction_id}", response_model=schemas.Transaction)
def get_transaction(
    transaction_id: int,
    current_user: Annotated[models.User, Depends(get_current_user)],
    ledger: Annotated[TransactionLedger, Depends(get_transaction_ledger)]
):
    logger.debug(f"REST request to get Transaction : {transaction_id}")
    transaction = ledger.find_by_id(transaction_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction
