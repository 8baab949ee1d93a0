"""HTTP surface of the Library API."""

from .app import create_app
from .books import build_books_router

__all__ = [
    "build_books_router",
    "create_app",
]
