"""
FastAPI application assembly.

``create_app`` wires the connection provider, store and validator into the
book router. Nothing is looked up globally once the app is built; pass your
own collaborators to swap any of them out.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import ServerConfig, get_config
from ..database.book_repository import BookRepository
from ..database.repository import BookStore
from ..database.session import DatabaseManager
from ..models import ValidationFailure
from ..observability import initialize_observability
from ..validation import BookValidator
from .auth import api_key_dependency
from .books import build_books_router, validation_error_response

logger = logging.getLogger(__name__)


def _property_name(loc: tuple) -> str:
    # ("body", "pageCount") -> "PageCount"; ("body",) or ("body", 0) mean the body itself
    fields = [
        part for part in loc if isinstance(part, str) and part not in ("body", "query", "path")
    ]
    if not fields:
        return "Body"
    name = fields[-1]
    return name[:1].upper() + name[1:]


async def request_validation_handler(
    request: Request,  # noqa: ARG001
    exc: RequestValidationError,
) -> JSONResponse:
    """Report request bodies that cannot be bound to a Book as field errors."""
    failures = [
        ValidationFailure(
            property_name=_property_name(tuple(error.get("loc", ()))),
            error_message=error["msg"],
        )
        for error in exc.errors()
    ]
    return validation_error_response(failures)


def create_app(
    config: ServerConfig | None = None,
    db: DatabaseManager | None = None,
    store: BookStore | None = None,
    validator: BookValidator | None = None,
) -> FastAPI:
    """
    Build the Library API application.

    Args:
        config: Settings; defaults to the global configuration
        db: Connection provider; built from ``config.database_url`` when omitted
        store: Book store; a ``BookRepository`` over ``db`` when omitted
        validator: Record validator; ``BookValidator`` when omitted
    """
    config = config or get_config()
    db = db or DatabaseManager(config=config)
    store = store or BookRepository(db)
    validator = validator or BookValidator()

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        # The table must exist before the first request is served
        db.init_database()
        try:
            yield
        finally:
            db.close()

    app = FastAPI(
        title="Library API",
        version=__version__,
        debug=config.debug,
        lifespan=lifespan,
    )
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    dependencies = []
    if config.api_key:
        dependencies.append(api_key_dependency(config.api_key))
    else:
        logger.info("No API key configured; book endpoints are unauthenticated")

    app.include_router(build_books_router(store, validator, dependencies=dependencies))

    @app.get("/health", tags=["Health"])
    def health() -> dict:
        return {"status": "ok", "database": db.verify_connection()}

    initialize_observability(app, config)

    return app
