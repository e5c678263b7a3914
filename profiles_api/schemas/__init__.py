"""Request/response schemas for the HTTP layer."""
