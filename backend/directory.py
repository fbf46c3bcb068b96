"""
Group directory: membership rules and scoped reads for expense groups.

The directory owns no state. Each request builds one around a `GroupStore` and
a `TransactionLedger`, and every write receives the calling user explicitly.

Writes trust the submitted group on update; reads repair the owner membership,
so a member list handed to a caller always contains the owner.
"""

import logging

import models
from exceptions import GroupNotFound, InvalidState
from stores import GroupStore, TransactionLedger
from utils.pagination import Page, PageRequest

logger = logging.getLogger(__name__)


class GroupDirectory:
    def __init__(self, groups: GroupStore, transactions: TransactionLedger):
        self.groups = groups
        self.transactions = transactions

    def create_group(self, candidate: models.Group, caller: models.User) -> models.Group:
        """
        Persist a new group owned by `caller`.

        Any owner already set on the candidate is overwritten, and the caller
        is added to the members.

        Raises:
            InvalidState: the candidate already carries an id
        """
        if candidate.id is not None:
            raise InvalidState("idexists", "A new group cannot already have an ID")

        candidate.owner_id = caller.id
        candidate.owner = caller
        candidate.members.add(caller)

        group = self.groups.save(candidate)
        logger.info(f"Group {group.id} created by user {caller.id}")
        return group

    def update_group(self, candidate: models.Group, caller: models.User) -> models.Group:
        """
        Save `candidate` as submitted. A candidate without an id is created
        instead, exactly as `create_group` would.
        """
        if candidate.id is None:
            return self.create_group(candidate, caller)

        group = self.groups.save(candidate)
        logger.info(f"Group {group.id} updated by user {caller.id}")
        return group

    def list_groups(self, page_request: PageRequest) -> Page:
        return self.groups.find_all(page_request)

    def list_public_groups(self, page_request: PageRequest) -> Page:
        return self.groups.find_all_public(page_request)

    def get_group(self, group_id: int) -> models.Group:
        group = self.groups.find_by_id(group_id)
        if group is None:
            raise GroupNotFound(group_id)
        return group

    def get_group_members(self, group_id: int) -> set:
        """Stored members plus the owner, as a new set; the stored collection is left as is."""
        group = self.get_group(group_id)
        return set(group.members) | {group.owner}

    def get_group_transactions(self, group_id: int, page_request: PageRequest) -> Page:
        # Readable by anyone who knows the id, members or not
        self.get_group(group_id)
        return self.transactions.find_all_by_group(group_id, page_request)

    def delete_group(self, group_id: int) -> None:
        self.groups.delete_by_id(group_id)
        logger.info(f"Group {group_id} deleted")
