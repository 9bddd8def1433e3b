"""
Noter Backend — Application Package Initializer
===============================================

What: Marks the `noter` directory as a Python package.
Who:  Imported by uvicorn (`noter.main:app`), Alembic, pytest, and the client.

Architecture Note:
    The package follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation, ids, timestamps
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    noter.client sits beside these layers: it is the async adapter the UI
    uses to talk to the routes (or to an in-memory store when offline).
"""

__version__ = "1.0.0"
