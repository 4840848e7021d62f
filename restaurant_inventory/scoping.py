from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from restaurant_inventory.db_models import InventoryItemORM, UserORM
from restaurant_inventory.errors import AuthorizationError, NotFoundError

ADMIN_ROLE = "admin"


def is_admin(actor: UserORM) -> bool:
    return actor.role == ADMIN_ROLE


def resolve_tenant_id(actor: UserORM) -> str:
    """Id of the admin whose records ``actor`` may see.

    Admins own their tenant; managers and staff inherit their admin's.
    """
    if is_admin(actor):
        return actor.id
    if not actor.admin_id:
        raise AuthorizationError("Account is not attached to an admin.")
    return actor.admin_id


def scope_filter(actor: UserORM, model: Any):
    """Query predicate restricting ``model`` rows to the actor's tenant."""
    return model.owner_id == resolve_tenant_id(actor)


def require_admin(actor: UserORM) -> None:
    if not is_admin(actor):
        raise AuthorizationError()


def require_item_in_scope(db: Session, item_id: str, actor: UserORM) -> InventoryItemORM:
    item = (
        db.query(InventoryItemORM)
        .filter(InventoryItemORM.id == item_id, scope_filter(actor, InventoryItemORM))
        .first()
    )
    if not item:
        raise NotFoundError("Inventory item not found")
    return item


__all__ = [
    "ADMIN_ROLE",
    "is_admin",
    "require_admin",
    "require_item_in_scope",
    "resolve_tenant_id",
    "scope_filter",
]
