"""Groups router: create, update, list, read and delete expense groups."""

import logging
from typing import Annotated
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

import models
import schemas
from database import get_db
from dependencies import get_current_user, get_group_directory
from directory import GroupDirectory
from utils.headers import (
    create_entity_creation_alert,
    create_entity_deletion_alert,
    create_entity_update_alert,
)
from utils.pagination import PageRequest, generate_pagination_headers, page_request_dependency
from utils.validation import get_user_or_400, get_users_or_400

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/groups", tags=["groups"])

ENTITY_NAME = "group"

group_page_request = page_request_dependency({"id", "name"})
transaction_page_request = page_request_dependency({"id", "date", "amount"})


def _to_candidate(db: Session, payload: schemas.GroupWrite) -> models.Group:
    # The submitted owner only survives on update; create replaces it with the caller
    if payload.id is not None and payload.owner_id is not None:
        get_user_or_400(db, payload.owner_id, role="Owner")
    return models.Group(
        id=payload.id,
        name=payload.name,
        is_public=payload.is_public,
        owner_id=payload.owner_id,
        members=get_users_or_400(db, payload.member_ids),
    )


def _created(response: Response, group: models.Group) -> None:
    response.status_code = 201
    response.headers["Location"] = f"/api/groups/{group.id}"
    response.headers.update(create_entity_creation_alert(ENTITY_NAME, str(group.id)))


@router.post("", response_model=schemas.Group, status_code=201)
def create_group(
    payload: schemas.GroupWrite,
    response: Response,
    current_user: Annotated[models.User, Depends(get_current_user)],
    directory: Annotated[GroupDirectory, Depends(get_group_directory)],
    db: Session = Depends(get_db)
):
    logger.debug(f"REST request to save Group : {payload}")
    group = directory.create_group(_to_candidate(db, payload), current_user)
    _created(response, group)
    return group


@router.put("", response_model=schemas.Group)
def update_group(
    payload: schemas.GroupWrite,
    response: Response,
    current_user: Annotated[models.User, Depends(get_current_user)],
    directory: Annotated[GroupDirectory, Depends(get_group_directory)],
    db: Session = Depends(get_db)
):
    logger.debug(f"REST request to update Group : {payload}")
    group = directory.update_group(_to_candidate(db, payload), current_user)
    if payload.id is None:
        _created(response, group)
    else:
        response.headers.update(create_entity_update_alert(ENTITY_NAME, str(group.id)))
    return group


@router.get("", response_model=list[schemas.Group])
def list_groups(
    response: Response,
    current_user: Annotated[models.User, Depends(get_current_user)],
    page_request: Annotated[PageRequest, Depends(group_page_request)],
    directory: Annotated[GroupDirectory, Depends(get_group_directory)]
):
    logger.debug("REST request to get a page of Groups")
    page = directory.list_groups(page_request)
    response.headers.update(generate_pagination_headers(page, "/api/groups", page_request.sort))
    return page.content


@router.get("/public", response_model=list[schemas.Group])
def list_public_groups(
    response: Response,
    current_user: Annotated[models.User, Depends(get_current_user)],
    page_request: Annotated[PageRequest, Depends(group_page_request)],
    directory: Annotated[GroupDirectory, Depends(get_group_directory)]
):
    logger.debug("REST request to get a page of public Groups")
    page = directory.list_public_groups(page_request)
    response.headers.update(generate_pagination_headers(page, "/api/groups/public", page_request.sort))
    return page.content


@router.get("/{group_id}", response_model=schemas.Group)
def get_group(
    group_id: int,
    current_user: Annotated[models.User, Depends(get_current_user)],
    directory: Annotated[GroupDirectory, Depends(get_group_directory)]
):
    logger.debug(f"REST request to get Group : {group_id}")
    return directory.get_group(group_id)


@router.get("/{group_id}/transactions", response_model=schemas.TransactionPage)
def get_group_transactions(
    group_id: int,
    response: Response,
    current_user: Annotated[models.User, Depends(get_current_user)],
    page_request: Annotated[PageRequest, Depends(transaction_page_request)],
    directory: Annotated[GroupDirectory, Depends(get_group_directory)]
):
    logger.debug(f"REST request to get transactions of Group : {group_id}")
    page = directory.get_group_transactions(group_id, page_request)
    response.headers.update(
        generate_pagination_headers(page, f"/api/groups/{group_id}/transactions", page_request.sort)
    )
    return schemas.TransactionPage.model_validate(page)


@router.get("/{group_id}/users", response_model=list[schemas.User])
def get_group_members(
    group_id: int,
    current_user: Annotated[models.User, Depends(get_current_user)],
    directory: Annotated[GroupDirectory, Depends(get_group_directory)]
):
    logger.debug(f"REST request to get members of Group : {group_id}")
    members = directory.get_group_members(group_id)
    return sorted(members, key=lambda m: m.id)


@router.delete("/{group_id}")
def delete_group(
    group_id: int,
    current_user: Annotated[models.User, Depends(get_current_user)],
    directory: Annotated[GroupDirectory, Depends(get_group_directory)]
):
    logger.debug(f"REST request to delete Group : {group_id}")
    directory.delete_group(group_id)
    return Response(status_code=200, headers=create_entity_deletion_alert(ENTITY_NAME, str(group_id)))
