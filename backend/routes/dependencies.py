"""
Shared route dependencies and domain error mapping
"""
from fastapi import HTTPException, Request

from app.bootstrap import TrackerServices
from app.shared.domain.errors import (
    DomainError,
    InvalidArgument,
    InvalidTransition,
    NotFound,
    PermissionDenied,
    PersistenceFailure,
)

ERROR_STATUS = {
    NotFound: 404,
    InvalidTransition: 409,
    InvalidArgument: 400,
    PermissionDenied: 403,
    PersistenceFailure: 503,
}


def get_services(request: Request) -> TrackerServices:
    return request.app.state.services


def to_http_exception(exc: DomainError) -> HTTPException:
    status_code = ERROR_STATUS.get(type(exc), 400)
    return HTTPException(status_code=status_code, detail=exc.message)
