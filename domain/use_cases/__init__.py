from .manage_books import (
    CreateBookUseCase,
    DeleteBookUseCase,
    SearchBooksUseCase,
    UpdateBookUseCase,
)

__all__ = [
    "SearchBooksUseCase",
    "CreateBookUseCase",
    "UpdateBookUseCase",
    "DeleteBookUseCase",
]
