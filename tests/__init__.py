"""
Admin dashboard test suite.

This package contains:
- unit/: Store, validation, pagination, stats and config tests
- integration/: HTTP API tests through an in-process ASGI client
"""
