"""
FleetDesk Backend — Application Package Initializer
====================================================

What: Marks the `fleetdesk` directory as a Python package.
Who:  Imported by uvicorn (fleetdesk.main:app), Alembic and pytest.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Business Rules)       │  ← availability checks, sequences
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← one transaction per request
    └─────────────────────────────────────┘

    Routes never touch SQL directly, and services never build HTTP responses;
    they raise exceptions from fleetdesk.exceptions and main.py maps them.
"""

__version__ = "1.0.0"
