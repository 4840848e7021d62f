from __future__ import annotations

import os
from typing import Any, Dict


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def get_settings() -> Dict[str, Any]:
    allowed_raw = os.getenv("ALLOWED_ORIGINS", "*")
    allowed_list = [o.strip() for o in allowed_raw.split(",") if o.strip()]
    return {
        "database_url": os.getenv("DATABASE_URL", "sqlite:///./dev.db"),
        "secret_key": os.getenv("SECRET_KEY", "changeme-secret-key"),
        "jwt_algorithm": os.getenv("JWT_ALGORITHM", "HS256"),
        # Sessions are valid for a day.
        "access_token_expire_minutes": int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440")),
        "auth_cookie_name": os.getenv("AUTH_COOKIE_NAME", "restaurant-inventory-auth"),
        "cookie_secure": _flag("COOKIE_SECURE", "false"),
        "allowed_origins": allowed_list,
        "allow_origin_regex": os.getenv("ALLOWED_ORIGIN_REGEX", None),
        "auth_bypass": _flag("AUTH_BYPASS", "false"),
        "seed_demo_data": _flag("SEED_DEMO_DATA", "false"),
        "rate_limit_enabled": _flag("RATE_LIMIT_ENABLED", "true"),
        "rate_limit_storage_uri": os.getenv("RATE_LIMIT_STORAGE_URI", "memory://"),
        "stock_update_max_retries": int(os.getenv("STOCK_UPDATE_MAX_RETRIES", "3")),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
    }
