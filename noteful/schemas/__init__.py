"""
Noteful API: Request/Response Schemas
======================================

Pydantic models for the API contract, kept apart from the ORM models so the
wire format (camelCase keys, no user_id, no password hash) can differ from
the table layout.
"""
