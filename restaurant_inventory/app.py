"""FastAPI application for the restaurant inventory service.

``create_app`` wires the process-scoped pieces (settings, database, rate
limiter) onto ``app.state``, registers the routers and maps the service's
exception hierarchy onto JSON ``{"detail": ...}`` responses.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from restaurant_inventory.config import get_settings
from restaurant_inventory.db import Database
from restaurant_inventory.errors import InventoryError
from restaurant_inventory.rate_limit import RateLimiter
from restaurant_inventory.routers import activity as activity_router
from restaurant_inventory.routers import auth as auth_router
from restaurant_inventory.routers import dashboard as dashboard_router
from restaurant_inventory.routers import inventory as inventory_router
from restaurant_inventory.routers import staff as staff_router
from restaurant_inventory.seed import seed_demo_data

logger = logging.getLogger("restaurant-inventory-api")
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid input"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    message = first.get("msg", "Invalid input")
    if loc:
        return f"{'.'.join(loc)}: {message}"
    return message


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(InventoryError)
    async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=exc.headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": _first_validation_message(exc)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(settings: Optional[Dict[str, Any]] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or get_settings()
    database = database or Database(settings["database_url"])

    app = FastAPI(
        title="Restaurant Inventory API",
        description="Stock levels, activity log, staff and usage analytics for restaurant kitchens.",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.database = database
    app.state.rate_limiter = RateLimiter(settings["rate_limit_storage_uri"])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings["allowed_origins"] or ["*"],
        allow_origin_regex=settings["allow_origin_regex"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth_router.router)
    app.include_router(inventory_router.router)
    app.include_router(activity_router.router)
    app.include_router(staff_router.router)
    app.include_router(dashboard_router.router)

    @app.on_event("startup")
    async def startup_event() -> None:
        database.init_db()
        if settings["seed_demo_data"]:
            seed_demo_data(database)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        database.dispose()

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/")
    def root() -> Dict[str, str]:
        return {"service": "restaurant-inventory", "docs": "/docs"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
