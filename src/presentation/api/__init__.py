"""API module - HTTP endpoints organized by version."""
