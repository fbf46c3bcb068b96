"""
Errors raised by the group directory and its collaborators, and the FastAPI
handlers that turn them into responses.
"""

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from utils.headers import create_failure_alert


class InvalidState(Exception):
    """Submitted data breaks a structural precondition (e.g. an id on create)."""

    def __init__(self, code: str, message: str, entity: str = "group"):
        super().__init__(message)
        self.code = code
        self.message = message
        self.entity = entity


class GroupNotFound(Exception):
    def __init__(self, group_id: int):
        super().__init__(f"Group {group_id} not found")
        self.group_id = group_id


class StoreError(Exception):
    """
    Failure signalled by a store or ledger. The directory never catches these;
    `status_code` is the severity the store assigned.
    """

    status_code = 500


class EntityNotFoundError(StoreError):
    status_code = 404


class ConstraintViolation(StoreError):
    status_code = 409


async def invalid_state_handler(request: Request, exc: InvalidState):
    return JSONResponse(
        status_code=400,
        content={"detail": exc.message, "code": exc.code},
        headers=create_failure_alert(exc.entity, exc.code, exc.message),
    )


async def group_not_found_handler(request: Request, exc: GroupNotFound):
    return Response(status_code=404)


async def store_error_handler(request: Request, exc: StoreError):
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


def add_exception_handlers(app: FastAPI) -> FastAPI:
    app.add_exception_handler(InvalidState, invalid_state_handler)
    app.add_exception_handler(GroupNotFound, group_not_found_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    return app
