from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from restaurant_inventory.db import get_db
from restaurant_inventory.db_models import UserORM
from restaurant_inventory.errors import AuthenticationError
from restaurant_inventory.scoping import require_admin
from restaurant_inventory.security import decode_token
from restaurant_inventory.seed import ensure_demo_admin

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

BYPASS_PAYLOAD = {"sub": "demo-admin"}


def get_settings(request: Request) -> Dict[str, Any]:
    return request.app.state.settings


def get_token_payload(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    settings: Dict[str, Any] = Depends(get_settings),
) -> Dict[str, Any]:
    if settings["auth_bypass"]:
        return BYPASS_PAYLOAD
    # Browsers send the session cookie; API clients send a bearer token.
    token = token or request.cookies.get(settings["auth_cookie_name"])
    if not token:
        raise AuthenticationError(headers={"WWW-Authenticate": "Bearer"})
    try:
        payload = decode_token(token, settings)
    except ValueError as exc:
        raise AuthenticationError("Could not validate credentials", headers={"WWW-Authenticate": "Bearer"}) from exc
    return payload


def get_current_user(
    payload: Dict[str, Any] = Depends(get_token_payload),
    settings: Dict[str, Any] = Depends(get_settings),
    db: Session = Depends(get_db),
) -> UserORM:
    if settings["auth_bypass"]:
        return ensure_demo_admin(db)

    sub = payload.get("sub")
    if not sub:
        raise AuthenticationError("Invalid token payload.")
    user = db.query(UserORM).filter(UserORM.id == sub).first()
    if not user or user.status != "active":
        raise AuthenticationError("Inactive or missing user.")
    return user


def get_admin_user(user: UserORM = Depends(get_current_user)) -> UserORM:
    """Current user, required to be a tenant admin."""
    require_admin(user)
    return user
