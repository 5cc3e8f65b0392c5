# app/core/roles.py
from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional

from app.core.errors import ForbiddenError, UnauthenticatedError


class Role(str, Enum):
    ADMIN = "admin"
    COORDINADOR = "coordinador"
    AUXILIAR = "auxiliar"


class Operation(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


# Politica fixă rol -> operație (aceeași pentru categorii, subcategorii, produse)
ROLE_POLICY: Dict[Operation, FrozenSet[Role]] = {
    Operation.CREATE: frozenset({Role.ADMIN, Role.COORDINADOR}),
    Operation.READ: frozenset({Role.ADMIN, Role.COORDINADOR, Role.AUXILIAR}),
    Operation.UPDATE: frozenset({Role.ADMIN, Role.COORDINADOR}),
    Operation.DELETE: frozenset({Role.ADMIN}),
}

_ROLE_ORDER = [Role.ADMIN, Role.COORDINADOR, Role.AUXILIAR]


def allowed_roles(operation: Operation) -> list[str]:
    """Rolurile permise, în ordine stabilă (admin, coordinador, auxiliar)."""
    allowed = ROLE_POLICY[operation]
    return [r.value for r in _ROLE_ORDER if r in allowed]


def authorize(identity: Optional[object], allowed: Iterable[str]) -> None:
    """
    Verifică rolul identității față de setul permis.
    - fără identitate / fără rol -> UnauthenticatedError
    - rol nepermis -> ForbiddenError(required_roles)
    """
    role = getattr(identity, "role", None) if identity is not None else None
    if not role:
        raise UnauthenticatedError("Unauthorized access: user is not authenticated")
    allowed = list(allowed)
    if role not in allowed:
        raise ForbiddenError(role, allowed)
