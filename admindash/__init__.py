"""
Admin dashboard service.

An in-memory user and product catalog behind a REST API:
- store: generic TabularStore plus the User and Product kinds
- validation: request payload models
- stats: dashboard KPIs and chart series
- api: FastAPI app and routes

Usage:
    python -m admindash.main --port 8000
"""

__version__ = "1.0.0"
