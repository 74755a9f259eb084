import logging
import os
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from domain.exceptions import BookNotFoundError, BookValidationError
from domain.repositories import BookRepository
from domain.use_cases import (
    CreateBookUseCase,
    DeleteBookUseCase,
    SearchBooksUseCase,
    UpdateBookUseCase,
)
from infrastructure.database import InMemoryBookRepository, Neo4jBookRepository
from presentation.schemas import (
    BookListResponse,
    BookPayload,
    BookResponse,
    BookResultResponse,
    DeleteBookResponse,
    ErrorResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["books"])

_book_repository: Optional[BookRepository] = None


def get_book_repository() -> BookRepository:
    """Dependency to get the shared book repository instance"""
    global _book_repository
    if _book_repository is None:
        if os.getenv("USE_MOCK_NEO4J", "false").lower() == "true":
            logger.info("USE_MOCK_NEO4J is set, using in-memory book store")
            _book_repository = InMemoryBookRepository()
        else:
            _book_repository = Neo4jBookRepository()
    return _book_repository


def close_book_repository() -> None:
    global _book_repository
    if _book_repository is not None:
        _book_repository.close()
        _book_repository = None


def _error(status_code: int, message: str, key: str = "error") -> JSONResponse:
    content = ErrorResponse(**{key: message}).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=content)


async def _read_payload(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        raise BookValidationError("Request body must be valid JSON")
    if not isinstance(body, dict):
        raise BookValidationError("Request body must be a JSON object")
    return body


@router.get("/books", response_model=BookListResponse, responses={500: {"model": ErrorResponse}})
async def search_books(
    id: Optional[str] = Query(None, description="Internal identifier"),
    title: Optional[str] = Query(None, description="Case-insensitive title substring"),
    book_id: Optional[str] = Query(None, alias="bookId", description="Exact catalog identifier"),
    author: Optional[List[str]] = Query(None, description="Author name substring, repeatable"),
    genre: Optional[List[str]] = Query(None, description="Genre name substring, repeatable"),
    repo: BookRepository = Depends(get_book_repository),
):
    """Search books; every given filter must match"""
    try:
        books = SearchBooksUseCase(repo).execute(id=id, title=title, book_id=book_id, authors=author, genres=genre)
        return BookListResponse(data=[BookResponse.from_entity(book) for book in books])
    except Exception as e:
        logger.error(f"GET books failed: {e}")
        return _error(500, str(e))


@router.post(
    "/books",
    response_model=BookResultResponse,
    responses={500: {"model": ErrorResponse}},
    openapi_extra={"requestBody": {"content": {"application/json": {"schema": BookPayload.model_json_schema()}}}},
)
async def create_book(request: Request, repo: BookRepository = Depends(get_book_repository)):
    """Create a book. Validation failures come back with HTTP 200 and success=false"""
    try:
        payload = await _read_payload(request)
        book = CreateBookUseCase(repo).execute(
            title=payload.get("title"), authors=payload.get("authors"), genres=payload.get("genres")
        )
        return BookResultResponse(data=BookResponse.from_entity(book))
    except BookValidationError as e:
        logger.info(f"POST books rejected: {e}")
        return _error(200, str(e), key="err")
    except Exception as e:
        logger.error(f"POST books failed: {e}")
        return _error(500, str(e), key="err")


@router.put(
    "/books",
    response_model=BookResultResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    openapi_extra={"requestBody": {"content": {"application/json": {"schema": BookPayload.model_json_schema()}}}},
)
async def update_book(
    request: Request,
    id: Optional[str] = Query(None, description="Internal identifier of the book to update"),
    repo: BookRepository = Depends(get_book_repository),
):
    """Replace a book's title, authors and genres"""
    if not id:
        return _error(400, "Missing required id")

    try:
        payload = await _read_payload(request)
        book = UpdateBookUseCase(repo).execute(
            id, title=payload.get("title"), authors=payload.get("authors"), genres=payload.get("genres")
        )
        return BookResultResponse(data=BookResponse.from_entity(book))
    except BookValidationError as e:
        # Rejected before any write; reported like any other PUT failure
        logger.info(f"PUT books rejected: {e}")
        return _error(500, str(e))
    except BookNotFoundError as e:
        return _error(404, str(e))
    except Exception as e:
        logger.error(f"PUT books failed: {e}")
        return _error(500, str(e))


@router.delete(
    "/books", response_model=DeleteBookResponse, responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def delete_book(
    id: Optional[str] = Query(None, description="Internal identifier of the book to delete"),
    repo: BookRepository = Depends(get_book_repository),
):
    """Delete a book and all of its relationships; deletedCount is 0 when nothing matched"""
    if not id:
        return _error(400, "Missing required id")

    try:
        deleted_count = DeleteBookUseCase(repo).execute(id)
        return DeleteBookResponse(deleted_count=deleted_count)
    except Exception as e:
        logger.error(f"DELETE books failed: {e}")
        return _error(500, str(e))
