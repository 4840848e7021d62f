from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from restaurant_inventory.db import commit_or_raise, get_db
from restaurant_inventory.db_models import UserORM, utcnow
from restaurant_inventory.deps import get_current_user, get_settings
from restaurant_inventory.errors import AuthenticationError, ValidationError
from restaurant_inventory.rate_limit import rate_limited
from restaurant_inventory.schemas import AuthResponse, LoginRequest, MeResponse, MessageResponse, RegisterRequest, SessionUser
from restaurant_inventory.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def ensure_email_unique(db: Session, email: str, message: str = "Email already registered") -> None:
    existing = db.query(UserORM).filter(UserORM.email == email).first()
    if existing:
        raise ValidationError(message)


def build_session_user(user: UserORM) -> SessionUser:
    return SessionUser(id=user.id, name=user.name, email=user.email, role=user.role)


def _issue_session(response: Response, user: UserORM, settings: Dict[str, Any], message: str) -> AuthResponse:
    session_user = build_session_user(user)
    token = create_access_token(
        {"sub": user.id, "name": user.name, "email": user.email, "role": user.role},
        settings,
    )
    response.set_cookie(
        key=settings["auth_cookie_name"],
        value=token,
        httponly=True,
        secure=settings["cookie_secure"],
        samesite="lax",
        max_age=settings["access_token_expire_minutes"] * 60,
        path="/",
    )
    return AuthResponse(message=message, user=session_user, access_token=token)


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limited(5))],
)
def register(
    payload: RegisterRequest,
    response: Response,
    db: Session = Depends(get_db),
    settings: Dict[str, Any] = Depends(get_settings),
) -> AuthResponse:
    email = payload.email.strip().lower()
    ensure_email_unique(db, email)

    # Self-registration always opens a new tenant.
    user = UserORM(
        name=payload.name.strip(),
        email=email,
        hashed_password=hash_password(payload.password),
        role="admin",
        department="management",
        status="active",
    )
    db.add(user)
    commit_or_raise(db, "new user")
    db.refresh(user)
    logger.info("Registered admin id=%s email=%s", user.id, user.email)
    return _issue_session(response, user, settings, "User registered successfully")


@router.post("/login", response_model=AuthResponse, dependencies=[Depends(rate_limited(10))])
def login(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    settings: Dict[str, Any] = Depends(get_settings),
) -> AuthResponse:
    email = payload.email.strip().lower()
    user = db.query(UserORM).filter(UserORM.email == email).first()
    if not user or not verify_password(payload.password, user.hashed_password):
        logger.warning("Rejected login for email=%s", email)
        raise AuthenticationError("Invalid email or password")
    if user.status != "active":
        logger.warning("Rejected login for inactive user id=%s", user.id)
        raise AuthenticationError("Account is inactive")

    user.last_active = utcnow()
    commit_or_raise(db, "login timestamp")
    db.refresh(user)
    logger.info("User logged in id=%s", user.id)
    return _issue_session(response, user, settings, "Login successful")


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response, settings: Dict[str, Any] = Depends(get_settings)) -> MessageResponse:
    response.delete_cookie(
        key=settings["auth_cookie_name"],
        path="/",
        secure=settings["cookie_secure"],
        httponly=True,
        samesite="lax",
    )
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=MeResponse)
def me(user: UserORM = Depends(get_current_user)) -> MeResponse:
    return MeResponse(user=build_session_user(user))
