"""
API routes for the admin dashboard.

Provides REST endpoints over the user and product stores plus the
dashboard summary. Handlers validate bodies before touching a store and
raise service errors (see errors.py) that the app maps to responses.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, Response
from pydantic import BaseModel

from ..config import Settings
from ..errors import ConflictError, NotFoundError
from ..stats import build_summary
from ..store import ProductStore, UserStore
from ..validation import (
    ProductCreate,
    ProductUpdate,
    UserCreate,
    UserUpdate,
    parse_payload,
)
from .pagination import resolve_page

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Admin Dashboard"])


# --- Response Models ---


class UserResponse(BaseModel):
    """User response."""

    id: str
    name: str
    email: str
    role: str | None = None
    createdAt: str
    updatedAt: str


class ProductResponse(BaseModel):
    """Product response."""

    id: str
    name: str
    description: str | None = None
    price: float
    category: str | None = None
    createdAt: str
    updatedAt: str


class UserListResponse(BaseModel):
    """One page of users."""

    data: list[UserResponse]
    total: int


class ProductListResponse(BaseModel):
    """One page of products."""

    data: list[ProductResponse]
    total: int


class ChartPointResponse(BaseModel):
    name: str
    value: int


class DashboardSummaryResponse(BaseModel):
    """Dashboard KPIs and chart series."""

    totalUsers: int
    totalProducts: int
    revenue: float
    categoryCount: int
    usersByRole: list[ChartPointResponse]
    productsByCategory: list[ChartPointResponse]
    recentProducts: list[ProductResponse]


# --- Dependencies ---


def get_settings(request: Request) -> Settings:
    """Get settings from app state."""
    return request.app.state.settings


def get_user_store(request: Request) -> UserStore:
    """Get the user store from app state."""
    return request.app.state.users


def get_product_store(request: Request) -> ProductStore:
    """Get the product store from app state."""
    return request.app.state.products


# --- User Routes ---


@router.get("/users", response_model=UserListResponse)
async def list_users(
    page: str | None = Query(None, description="1-indexed page"),
    limit: str | None = Query(None, description="Page size"),
    search: str | None = Query(None, description="Substring of name or email"),
    users: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings),
):
    """List users with pagination and optional search."""
    page_no, page_size = resolve_page(page, limit, settings)
    result = users.list(page_no, page_size, search)
    return {"data": [u.to_dict() for u in result.items], "total": result.total}


@router.get("/users/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, users: UserStore = Depends(get_user_store)):
    """Get a single user by ID."""
    user = users.get(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user.to_dict()


@router.post("/users", response_model=UserResponse, status_code=201)
async def create_user(
    body: Any = Body(None),
    users: UserStore = Depends(get_user_store),
):
    """
    Create a user.

    Body: { name, email, role? }. Emails are unique, compared
    case-insensitively.
    """
    fields = parse_payload(UserCreate, body).to_fields()

    with users.locked():
        if users.get_by_email(fields["email"]) is not None:
            raise ConflictError("Email already in use", field_name="email")
        user = users.insert(fields)

    logger.info(f"Created user {user.id}")
    return user.to_dict()


@router.patch("/users/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    body: Any = Body(None),
    users: UserStore = Depends(get_user_store),
):
    """
    Update a user.

    Body: { name?, email?, role? }. Only the fields present are changed.
    """
    if users.get(user_id) is None:
        raise NotFoundError("User", user_id)

    fields = parse_payload(UserUpdate, body).to_fields()

    with users.locked():
        if "email" in fields:
            owner = users.get_by_email(fields["email"])
            if owner is not None and owner.id != user_id:
                raise ConflictError("Email already in use", field_name="email")
        user = users.update(user_id, fields)

    if user is None:
        raise NotFoundError("User", user_id)
    return user.to_dict()


@router.delete("/users/{user_id}", status_code=204)
async def delete_user(user_id: str, users: UserStore = Depends(get_user_store)):
    """Delete a user."""
    if not users.delete(user_id):
        raise NotFoundError("User", user_id)
    logger.info(f"Deleted user {user_id}")
    return Response(status_code=204)


# --- Product Routes ---


@router.get("/products", response_model=ProductListResponse)
async def list_products(
    page: str | None = Query(None, description="1-indexed page"),
    limit: str | None = Query(None, description="Page size"),
    search: str | None = Query(None, description="Substring of name, description or category"),
    products: ProductStore = Depends(get_product_store),
    settings: Settings = Depends(get_settings),
):
    """List products with pagination and optional search."""
    page_no, page_size = resolve_page(page, limit, settings)
    result = products.list(page_no, page_size, search)
    return {"data": [p.to_dict() for p in result.items], "total": result.total}


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, products: ProductStore = Depends(get_product_store)):
    """Get a single product by ID."""
    product = products.get(product_id)
    if product is None:
        raise NotFoundError("Product", product_id)
    return product.to_dict()


@router.post("/products", response_model=ProductResponse, status_code=201)
async def create_product(
    body: Any = Body(None),
    products: ProductStore = Depends(get_product_store),
):
    """
    Create a product.

    Body: { name, description?, price, category? }
    """
    fields = parse_payload(ProductCreate, body).to_fields()
    product = products.insert(fields)
    logger.info(f"Created product {product.id}")
    return product.to_dict()


@router.patch("/products/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    body: Any = Body(None),
    products: ProductStore = Depends(get_product_store),
):
    """
    Update a product.

    Body: { name?, description?, price?, category? }. Only the fields
    present are changed; null description/category clears the value.
    """
    if products.get(product_id) is None:
        raise NotFoundError("Product", product_id)

    fields = parse_payload(ProductUpdate, body).to_fields()
    product = products.update(product_id, fields)
    if product is None:
        raise NotFoundError("Product", product_id)
    return product.to_dict()


@router.delete("/products/{product_id}", status_code=204)
async def delete_product(product_id: str, products: ProductStore = Depends(get_product_store)):
    """Delete a product."""
    if not products.delete(product_id):
        raise NotFoundError("Product", product_id)
    logger.info(f"Deleted product {product_id}")
    return Response(status_code=204)


# --- Dashboard Routes ---


@router.get("/dashboard/summary", response_model=DashboardSummaryResponse)
async def dashboard_summary(
    users: UserStore = Depends(get_user_store),
    products: ProductStore = Depends(get_product_store),
    settings: Settings = Depends(get_settings),
):
    """
    Dashboard KPIs.

    Aggregates the first dashboard_limit users and products: totals,
    revenue, categories, users per role, products per category and the
    most recently updated products.
    """
    summary = build_summary(
        users.list(1, settings.dashboard_limit),
        products.list(1, settings.dashboard_limit),
        recent_limit=settings.recent_limit,
    )
    return summary.to_dict()
