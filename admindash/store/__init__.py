"""
In-memory record stores.

- TabularStore: generic list/get/insert/update/delete over one record kind
- UserStore / ProductStore: the two kinds served by the dashboard
"""

from .products import SEED_PRODUCTS, Product, ProductStore
from .tabular import Page, TabularStore
from .users import SEED_USERS, Role, User, UserStore

__all__ = [
    "Page",
    "Product",
    "ProductStore",
    "Role",
    "SEED_PRODUCTS",
    "SEED_USERS",
    "TabularStore",
    "User",
    "UserStore",
]
