# app/routers/deps.py
from __future__ import annotations

import logging
from typing import Annotated, Callable, Optional

from fastapi import Depends, Header, Request

from app.core.errors import ForbiddenError
from app.core.roles import Operation, allowed_roles, authorize
from app.core.security import Identity, authenticate, extract_token

logger = logging.getLogger(__name__)


def get_current_identity(
    authorization: Annotated[Optional[str], Header(description="Bearer <token>")] = None,
    x_access_token: Annotated[Optional[str], Header(description="Token brut (fallback)")] = None,
) -> Identity:
    """Gate 1: autentificare. Identitatea vine doar din token (fără DB)."""
    return authenticate(extract_token(authorization, x_access_token))


def require(operation: Operation) -> Callable[..., Identity]:
    """
    Gate 2: autorizare pe rol, compus explicit după gate-ul de autentificare.
    Rutele îl declară prin `Depends(can_create)` etc.; rulează înaintea validării body-ului.
    """
    allowed = allowed_roles(operation)

    def _gate(request: Request, identity: Identity = Depends(get_current_identity)) -> Identity:
        try:
            authorize(identity, allowed)
        except ForbiddenError:
            logger.info(
                "Access denied for %s (%s) on %s %s",
                identity.email, identity.role, request.method, request.url.path,
            )
            raise
        return identity

    _gate.__name__ = f"require_{operation.value}"
    return _gate


can_create = require(Operation.CREATE)
can_view = require(Operation.READ)
can_edit = require(Operation.UPDATE)
can_delete = require(Operation.DELETE)

__all__ = ("can_create", "can_delete", "can_edit", "can_view", "get_current_identity", "require")
