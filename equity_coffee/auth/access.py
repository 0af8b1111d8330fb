"""
Ownership checks used before any mutation of an owned row.

Callers look the row up first and raise NotFoundError when it is missing, so
absence is always reported before ownership.
"""

from __future__ import annotations

from typing import Any

from equity_coffee.core.errors import ForbiddenError

from .security import Identity


def is_owner_or_admin(owner_id: Any, identity: Identity) -> bool:
    if identity.is_admin:
        return True
    return owner_id is not None and str(owner_id) == str(identity.user_id)


def ensure_owner_or_admin(owner_id: Any, identity: Identity, *, message: str = "Forbidden") -> None:
    if not is_owner_or_admin(owner_id, identity):
        raise ForbiddenError(message)
