"""
Unit tests for dashboard aggregation.
"""

from datetime import datetime, timedelta, timezone

import pytest

from admindash.stats import (
    UNCATEGORIZED,
    build_summary,
    products_by_category,
    recent_products,
    users_by_role,
)
from admindash.store import SEED_PRODUCTS, SEED_USERS, ProductStore, UserStore


class StepClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 6, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(minutes=1)
        return self.now


@pytest.fixture
def users():
    store = UserStore(clock=StepClock())
    store.seed(SEED_USERS)
    return store


@pytest.fixture
def products():
    store = ProductStore(clock=StepClock())
    store.seed(SEED_PRODUCTS)
    return store


def test_users_by_role_fixed_order(users):
    users.insert({"name": "No Role", "email": "none@example.com"})
    users.insert({"name": "Second Admin", "email": "a2@example.com", "role": "admin"})

    points = users_by_role(users.all())

    assert [p.to_dict() for p in points] == [
        {"name": "Admin", "value": 2},
        {"name": "Editor", "value": 1},
        {"name": "Viewer", "value": 2},
    ]


def test_users_by_role_empty():
    assert [p.value for p in users_by_role([])] == [0, 0, 0]


def test_products_by_category_sorted_by_count(products):
    products.insert({"name": "Stapler", "price": 5, "category": "Office"})
    products.insert({"name": "Mystery", "price": 1})
    products.insert({"name": "Cable", "price": 2, "category": "Electronics"})

    points = products_by_category(products.all())

    assert [(p.name, p.value) for p in points] == [
        ("Electronics", 3),
        ("Office", 2),
        (UNCATEGORIZED, 1),
    ]


def test_products_by_category_ties_keep_first_seen_order():
    store = ProductStore()
    for category in ["B", "A", "C"]:
        store.insert({"name": category, "price": 1, "category": category})

    assert [p.name for p in products_by_category(store.all())] == ["B", "A", "C"]


def test_recent_products_newest_first(products):
    products.update("1", {"price": 3000})

    recent = recent_products(products.all(), limit=2)

    assert [p.id for p in recent] == ["1", "3"]


def test_build_summary(users, products):
    products.insert({"name": "Loose", "price": 10})

    summary = build_summary(
        users.list(1, 100),
        products.list(1, 100),
        recent_limit=5,
    ).to_dict()

    assert summary["totalUsers"] == 3
    assert summary["totalProducts"] == 4
    assert summary["revenue"] == 2990 + 4590 + 890 + 10
    assert summary["categoryCount"] == 3
    assert summary["productsByCategory"][0] == {"name": "Electronics", "value": 2}
    assert [p["name"] for p in summary["recentProducts"]] == [
        "Loose",
        "Desk Lamp",
        "Mechanical Keyboard",
        "Wireless Headphones",
    ]


def test_build_summary_uses_page_total_for_counts(products):
    """Totals come from the store; aggregates only from the fetched page."""
    summary = build_summary(UserStore().list(1, 10), products.list(1, 1))

    assert summary.total_users == 0
    assert summary.total_products == 3
    assert summary.revenue == 2990
    assert summary.category_count == 1
