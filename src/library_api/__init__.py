"""
Library API package.

A small HTTP service for CRUD operations over a catalog of books.

Key Components:
- models: Pydantic models for request and response bodies
- validation: field rules applied before anything is stored
- database: SQLAlchemy schema, session management and the book repository
- api: FastAPI router and application factory
- config: Configuration management with Pydantic v2
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
