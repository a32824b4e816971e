"""Centralized error transformation for API routes.

Maps factgrid errors (domain and infrastructure) to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from factgrid.domain.shared.error import (
    AuthRequiredError,
    DomainError,
    FactGridError,
    InfrastructureError,
    NotFoundError,
    ValidationError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    NotFoundError: 404,
    ValidationError: 422,
    AuthRequiredError: 401,
}


def map_factgrid_error(error: FactGridError) -> HTTPException:
    """Map a factgrid error to an HTTPException."""
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, InfrastructureError):
        return HTTPException(status_code=503, detail=detail)

    if isinstance(error, DomainError):
        status_code = DOMAIN_ERROR_STATUS_MAP.get(type(error), 400)
        if isinstance(error, ValidationError) and error.field is not None:
            detail["field"] = error.field
        if isinstance(error, AuthRequiredError):
            return HTTPException(
                status_code=401,
                detail=detail,
                headers={"WWW-Authenticate": "Bearer"},
            )
        return HTTPException(status_code=status_code, detail=detail)

    return HTTPException(status_code=500, detail=detail)
