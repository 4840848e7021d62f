from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    data: Dict[str, Any],
    settings: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
) -> str:
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings["access_token_expire_minutes"]))
    to_encode.update({"iat": now, "exp": expire})
    return jwt.encode(to_encode, settings["secret_key"], algorithm=settings["jwt_algorithm"])


def decode_token(token: str, settings: Dict[str, Any]) -> Dict[str, Any]:
    try:
        payload = jwt.decode(token, settings["secret_key"], algorithms=[settings["jwt_algorithm"]])
    except JWTError as exc:
        raise ValueError("Invalid token") from exc
    return payload
