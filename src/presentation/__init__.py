"""Presentation layer - API endpoints and HTTP concerns.

Thin FastAPI routers that call application services and translate Result
values into HTTP responses (RFC 7807 on failure).

Structure:
- api/v1/: Rules and dashboard endpoints, error responses
- api/middleware/: Trace id middleware
"""
