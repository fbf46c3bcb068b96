"""SQLAlchemy-backed group store and transaction ledger."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import models
from exceptions import ConstraintViolation, EntityNotFoundError
from utils.pagination import Page, PageRequest, paginate

logger = logging.getLogger(__name__)

GROUP_SORT_COLUMNS = {
    "id": models.Group.id,
    "name": models.Group.name,
}

TRANSACTION_SORT_COLUMNS = {
    "id": models.Transaction.id,
    "date": models.Transaction.date,
    "amount": models.Transaction.amount,
}


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConstraintViolation(f"Constraint violated: {e.orig}") from e


class GroupStore:
    def __init__(self, db: Session):
        self.db = db

    def save(self, group: models.Group) -> models.Group:
        """
        Insert `group` when it has no id, otherwise copy its mutable fields onto
        the stored row with the same id.

        Raises:
            EntityNotFoundError: no stored group has the candidate's id
            ConstraintViolation: the row breaks a database constraint
        """
        if group.id is None:
            self.db.add(group)
            _commit(self.db)
            self.db.refresh(group)
            return group

        stored = self.find_by_id(group.id)
        if stored is None:
            raise EntityNotFoundError(f"Group {group.id} does not exist")

        stored.name = group.name
        stored.is_public = group.is_public
        stored.owner_id = group.owner_id
        stored.members = set(group.members)
        _commit(self.db)
        self.db.refresh(stored)
        return stored

    def find_by_id(self, group_id: int):
        return self.db.query(models.Group).filter(models.Group.id == group_id).first()

    def find_all(self, page_request: PageRequest) -> Page:
        return paginate(
            self.db.query(models.Group),
            page_request,
            GROUP_SORT_COLUMNS,
            [models.Group.id.asc()],
        )

    def find_all_public(self, page_request: PageRequest) -> Page:
        return paginate(
            self.db.query(models.Group).filter(models.Group.is_public == True),
            page_request,
            GROUP_SORT_COLUMNS,
            [models.Group.id.asc()],
        )

    def delete_by_id(self, group_id: int) -> None:
        """Delete a group with its transactions and membership rows."""
        group = self.find_by_id(group_id)
        if group is None:
            raise EntityNotFoundError(f"Group {group_id} does not exist")

        deleted = self.db.query(models.Transaction).filter(
            models.Transaction.group_id == group_id
        ).delete()
        self.db.delete(group)
        _commit(self.db)
        logger.debug(f"Deleted group {group_id} and {deleted} transaction(s)")


class TransactionLedger:
    def __init__(self, db: Session):
        self.db = db

    def save(self, transaction: models.Transaction) -> models.Transaction:
        self.db.add(transaction)
        _commit(self.db)
        self.db.refresh(transaction)
        return transaction

    def find_by_id(self, transaction_id: int):
        return self.db.query(models.Transaction).filter(
            models.Transaction.id == transaction_id
        ).first()

    def find_all_by_group(self, group_id: int, page_request: PageRequest) -> Page:
        # Newest first unless the caller asks otherwise
        return paginate(
            self.db.query(models.Transaction).filter(models.Transaction.group_id == group_id),
            page_request,
            TRANSACTION_SORT_COLUMNS,
            [models.Transaction.date.desc(), models.Transaction.id.desc()],
        )
