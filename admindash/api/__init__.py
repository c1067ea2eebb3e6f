"""
HTTP layer for the admin dashboard.

Exposes the user and product stores as REST resources and serves the
dashboard summary.
"""

from .app import create_app
from .routes import router

__all__ = ["create_app", "router"]
