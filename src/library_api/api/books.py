"""
Book catalog endpoints.

The router is built around an explicit store and validator so the app factory
(and tests) decide which implementations serve requests.

| Method | Path          | Success | Failure       |
|--------|---------------|---------|---------------|
| POST   | /books        | 201     | 400           |
| GET    | /books        | 200     |               |
| GET    | /books/{isbn} | 200     | 404           |
| PUT    | /books/{isbn} | 200     | 400, 404      |
| DELETE | /books/{isbn} | 204     | 404           |
"""

from collections.abc import Sequence

from fastapi import APIRouter, Query, Request, Response, status
from fastapi.params import Depends
from fastapi.responses import JSONResponse

from ..database.repository import BookStore
from ..models import Book, BookUpdate, ValidationFailure
from ..validation import DUPLICATE_ISBN_MESSAGE, BookValidator

VALIDATION_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {
        "model": list[ValidationFailure],
        "description": "The submitted book failed validation",
    }
}
NOT_FOUND_RESPONSES = {status.HTTP_404_NOT_FOUND: {"description": "No book with this ISBN"}}


def validation_error_response(failures: Sequence[ValidationFailure]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=[failure.model_dump(by_alias=True) for failure in failures],
    )


def build_books_router(
    store: BookStore,
    validator: BookValidator,
    dependencies: Sequence[Depends] | None = None,
) -> APIRouter:
    """Create the /books router bound to ``store`` and ``validator``."""
    router = APIRouter(prefix="/books", tags=["Books"], dependencies=list(dependencies or []))

    @router.post(
        "",
        name="create_book",
        response_model=Book,
        status_code=status.HTTP_201_CREATED,
        responses=VALIDATION_RESPONSES,
    )
    def create_book(book: Book, request: Request) -> Response:
        failures = validator.validate(book)
        if failures:
            return validation_error_response(failures)

        if not store.create(book):
            return validation_error_response(
                [ValidationFailure(property_name="Isbn", error_message=DUPLICATE_ISBN_MESSAGE)]
            )

        location = request.url_for("get_book", isbn=book.isbn).path
        return JSONResponse(
            status_code=status.HTTP_201_CREATED,
            content=book.model_dump(mode="json", by_alias=True),
            headers={"Location": location},
        )

    @router.get("", name="get_books", response_model=list[Book])
    def get_books(
        search_term: str | None = Query(default=None, alias="searchTerm"),
    ) -> Sequence[Book]:
        if search_term:
            return store.search_by_title(search_term)
        return store.get_all()

    @router.get("/{isbn}", name="get_book", response_model=Book, responses=NOT_FOUND_RESPONSES)
    def get_book(isbn: str) -> Book | Response:
        book = store.get_by_isbn(isbn)
        if book is None:
            return Response(status_code=status.HTTP_404_NOT_FOUND)
        return book

    @router.put(
        "/{isbn}",
        name="update_book",
        response_model=Book,
        responses={**VALIDATION_RESPONSES, **NOT_FOUND_RESPONSES},
    )
    def update_book(isbn: str, payload: BookUpdate) -> Book | Response:
        # The path identifies the record; whatever ISBN the body carried is ignored
        book = payload.to_book(isbn)

        failures = validator.validate(book)
        if failures:
            return validation_error_response(failures)

        if not store.update(book):
            return Response(status_code=status.HTTP_404_NOT_FOUND)
        return book

    @router.delete(
        "/{isbn}",
        name="delete_book",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        responses=NOT_FOUND_RESPONSES,
    )
    def delete_book(isbn: str) -> Response:
        if not store.delete(isbn):
            return Response(status_code=status.HTTP_404_NOT_FOUND)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
