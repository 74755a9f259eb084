from .book_schemas import (
    BookListResponse,
    BookPayload,
    BookResponse,
    BookResultResponse,
    DeleteBookResponse,
    ErrorResponse,
)

__all__ = [
    "BookPayload",
    "BookResponse",
    "BookListResponse",
    "BookResultResponse",
    "DeleteBookResponse",
    "ErrorResponse",
]
