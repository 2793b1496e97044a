"""Test suite for the rate limit rule administration service.

Test structure follows the test pyramid:
- unit/: Unit tests - domain model and services with mocked dependencies
- integration/: Real adapters (SQLite-backed repository, structlog, in-memory
  lifecycle scenarios)
- api/: API endpoint tests through FastAPI TestClient
"""
