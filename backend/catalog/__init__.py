"""
Library Catalog Backend — Application Package Initializer
==========================================================

What: Marks the `catalog` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn catalog.main:app`), Alembic and pytest.

Architecture Note:
    The catalog follows a layered layout:

    ┌─────────────────────────────────────┐
    │      Routes (render / redirect)     │  ← HTTP + template concerns
    ├─────────────────────────────────────┤
    │   Services (validation, outcomes)   │  ← business rules
    ├─────────────────────────────────────┤
    │     Repositories (data accessors)   │  ← one session per call
    ├─────────────────────────────────────┤
    │   Models & Database (SQLAlchemy)    │  ← async engine, ORM mapping
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
