# app/core/errors.py
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, Optional

from fastapi import status


class ErrorKind(str, Enum):
    VALIDATION = "ValidationError"
    DUPLICATE = "DuplicateError"
    INVALID_ID = "InvalidId"
    NOT_FOUND = "NotFound"
    UNAUTHENTICATED = "Unauthenticated"
    FORBIDDEN = "Forbidden"
    INTERNAL = "InternalError"


# Tabel explicit tip eroare -> status HTTP
ERROR_STATUS: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.DUPLICATE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class CatalogError(Exception):
    """Baza pentru toate erorile de domeniu; `kind` decide statusul HTTP."""

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message: str = "Unexpected error"

    def __init__(self, message: Optional[str] = None, *, error: Optional[str] = None) -> None:
        self.message = message or self.default_message
        # detaliu de diagnostic (ex. mesajul driverului DB)
        self.error = error
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return ERROR_STATUS[self.kind]

    def extra(self) -> Dict[str, Any]:
        return {}


class ValidationError(CatalogError):
    kind = ErrorKind.VALIDATION
    default_message = "Invalid input"


class DuplicateError(CatalogError):
    kind = ErrorKind.DUPLICATE
    default_message = "Duplicate value"


class InvalidIdError(CatalogError):
    kind = ErrorKind.INVALID_ID

    def __init__(self, entity: str = "entity", message: Optional[str] = None) -> None:
        self.entity = entity
        super().__init__(message or f"Invalid {entity} id")


class NotFoundError(CatalogError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str = "entity", message: Optional[str] = None) -> None:
        self.entity = entity
        super().__init__(message or f"{entity.capitalize()} not found")


class UnauthenticatedError(CatalogError):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "Authentication required"
    reason = "Unauthenticated"


class TokenExpiredError(UnauthenticatedError):
    default_message = "Authentication error: token expired"
    reason = "TokenExpired"


class TokenMalformedError(UnauthenticatedError):
    default_message = "Authentication error: malformed token"
    reason = "TokenMalformed"


class ForbiddenError(CatalogError):
    kind = ErrorKind.FORBIDDEN

    def __init__(self, role: Optional[str], required_roles: Iterable[str]) -> None:
        self.role = role
        self.required_roles = list(required_roles)
        super().__init__(f"Access denied: role {role} is not allowed to perform this action")

    def extra(self) -> Dict[str, Any]:
        return {"requiredRoles": self.required_roles}


class InternalError(CatalogError):
    kind = ErrorKind.INTERNAL


def error_payload(exc: CatalogError) -> Dict[str, Any]:
    """Corpul JSON unitar pentru orice CatalogError."""
    payload: Dict[str, Any] = {"success": False, "message": exc.message}
    if isinstance(exc, UnauthenticatedError):
        payload["error"] = exc.reason
    elif exc.kind is ErrorKind.INTERNAL and exc.error:
        payload["error"] = exc.error
    else:
        payload["error"] = exc.kind.value
    payload.update(exc.extra())
    return payload


__all__ = [
    "ERROR_STATUS",
    "CatalogError",
    "DuplicateError",
    "ErrorKind",
    "ForbiddenError",
    "InternalError",
    "InvalidIdError",
    "NotFoundError",
    "TokenExpiredError",
    "TokenMalformedError",
    "UnauthenticatedError",
    "ValidationError",
    "error_payload",
]
