"""
Dashboard KPIs and chart series.

Aggregates one page of users and one page of products (the first
dashboard_limit records of each store) into the numbers shown on the
dashboard: totals, revenue, distinct categories, users per role,
products per category and the most recently updated products.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .store import Page, Product, Role, User

UNCATEGORIZED = "Uncategorized"


@dataclass
class ChartPoint:
    """One labelled value in a chart series."""

    name: str
    value: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass
class DashboardSummary:
    """KPI payload for the dashboard.

    Attributes:
        total_users: Users in the store (not just the aggregated page)
        total_products: Products in the store
        revenue: Sum of aggregated product prices
        category_count: Distinct categories among aggregated products
        users_by_role: Admin/Editor/Viewer counts, in that order
        products_by_category: Category counts, largest first
        recent_products: Most recently updated products
    """

    total_users: int
    total_products: int
    revenue: float
    category_count: int
    users_by_role: list[ChartPoint] = field(default_factory=list)
    products_by_category: list[ChartPoint] = field(default_factory=list)
    recent_products: list[Product] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalUsers": self.total_users,
            "totalProducts": self.total_products,
            "revenue": self.revenue,
            "categoryCount": self.category_count,
            "usersByRole": [p.to_dict() for p in self.users_by_role],
            "productsByCategory": [p.to_dict() for p in self.products_by_category],
            "recentProducts": [p.to_dict() for p in self.recent_products],
        }


def category_of(product: Product) -> str:
    return (product.category or "").strip() or UNCATEGORIZED


def users_by_role(users: list[User]) -> list[ChartPoint]:
    """Count users per role; users without a role count as viewers."""
    counts = {role: 0 for role in Role}
    for user in users:
        counts[user.role or Role.VIEWER] += 1
    return [ChartPoint(role.value.capitalize(), counts[role]) for role in Role]


def products_by_category(products: list[Product]) -> list[ChartPoint]:
    """Count products per category, largest first (ties keep first-seen order)."""
    counts: dict[str, int] = {}
    for product in products:
        category = category_of(product)
        counts[category] = counts.get(category, 0) + 1
    points = [ChartPoint(name, value) for name, value in counts.items()]
    return sorted(points, key=lambda p: p.value, reverse=True)


def recent_products(products: list[Product], limit: int = 5) -> list[Product]:
    """Most recently updated products first."""
    ordered = sorted(
        products,
        key=lambda p: datetime.fromisoformat(p.updated_at),
        reverse=True,
    )
    return ordered[:limit]


def build_summary(
    users: Page[User],
    products: Page[Product],
    recent_limit: int = 5,
) -> DashboardSummary:
    """Build the dashboard summary from one page of each store.

    Args:
        users: Users page (its total drives the user KPI)
        products: Products page (its total drives the product KPI)
        recent_limit: How many recent products to include

    Returns:
        DashboardSummary
    """
    return DashboardSummary(
        total_users=users.total,
        total_products=products.total,
        revenue=sum((p.price for p in products.items), 0.0),
        category_count=len({category_of(p) for p in products.items}),
        users_by_role=users_by_role(users.items),
        products_by_category=products_by_category(products.items),
        recent_products=recent_products(products.items, recent_limit),
    )
