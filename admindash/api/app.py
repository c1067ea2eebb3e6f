"""
FastAPI application factory for the admin dashboard.

This module creates the main FastAPI app with:
- One UserStore and one ProductStore per app, held on app.state
- CORS configuration for the dashboard frontend
- Error handlers mapping service errors to {error, code, details}
- API routes under /api
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config import Settings
from ..errors import AdminDashError
from ..store import SEED_PRODUCTS, SEED_USERS, ProductStore, UserStore
from .routes import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log store state across the app lifecycle."""
    logger.info(
        f"Admin dashboard starting: {app.state.users.count()} users, "
        f"{app.state.products.count()} products"
    )
    yield
    logger.info("Admin dashboard stopped")


def create_stores(settings: Settings) -> tuple[UserStore, ProductStore]:
    """Create the two record stores, seeded unless disabled."""
    users = UserStore()
    products = ProductStore()
    if settings.seed_data:
        users.seed(SEED_USERS)
        products.seed(SEED_PRODUCTS)
    return users, products


def register_error_handlers(app: FastAPI) -> None:
    """Map service errors and unexpected failures to JSON responses."""

    @app.exception_handler(AdminDashError)
    async def handle_service_error(request: Request, exc: AdminDashError) -> JSONResponse:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_request_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = {
            ".".join(str(part) for part in error["loc"]): error["msg"] for error in exc.errors()
        }
        logger.info(f"{request.method} {request.url.path} -> 400: invalid request")
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid request body",
                "code": "VALIDATION_ERROR",
                "details": {"errors": errors},
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "code": "INTERNAL_ERROR", "details": {}},
        )


def create_app(
    settings: Settings | None = None,
    users: UserStore | None = None,
    products: ProductStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Service settings (loaded from environment if omitted)
        users: User store to serve (a fresh, seeded one if omitted)
        products: Product store to serve (a fresh, seeded one if omitted)
    """
    settings = settings or Settings()
    if users is None or products is None:
        default_users, default_products = create_stores(settings)
        users = default_users if users is None else users
        products = default_products if products is None else products

    app = FastAPI(
        title="Admin Dashboard API",
        description="Manage users and products and read dashboard KPIs.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.users = users
    app.state.products = products

    # CORS for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # API routes
    app.include_router(router, prefix="/api")

    @app.get("/health")
    async def health():
        return {"status": "healthy", "service": "admindash"}

    return app
