"""
Noteful API: Application Package
=================================

What:  Multi-user note-taking REST API. Users own notes, folders and tags.
Who:   Imported by uvicorn (`noteful.main:app`), Alembic, the seeder and pytest.

Architecture Note:
    The package keeps the usual layered split:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, auth dependency
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← owner scoping, reference checks
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← injected async engine/sessions
    └─────────────────────────────────────┘

    Every service call receives the requesting user's id and filters on it,
    so a route can never observe another user's rows.
"""

__version__ = "1.0.0"
