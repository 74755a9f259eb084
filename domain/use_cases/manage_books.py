import logging
import uuid
from typing import Any, List, Optional

from domain.entities import Book, BookFilter
from domain.exceptions import (
    BookNotFoundError,
    InvalidNameListError,
    MissingAuthorsError,
    MissingGenresError,
    MissingTitleError,
)
from domain.repositories import BookRepository

logger = logging.getLogger(__name__)


def normalize_title(title: Any) -> str:
    if not isinstance(title, str) or not title.strip():
        raise MissingTitleError()
    return title


def normalize_names(names: Any, missing_error: type) -> List[str]:
    """
    Drop blank entries and duplicates (first occurrence wins).

    Names are kept exactly as given; they are the identity of the entity.

    Raises ``missing_error`` when nothing usable is left.
    """
    if names is None:
        raise missing_error()
    if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
        raise InvalidNameListError()

    normalized = []
    for name in names:
        if name.strip() and name not in normalized:
            normalized.append(name)

    if not normalized:
        raise missing_error()
    return normalized


class SearchBooksUseCase:
    def __init__(self, book_repository: BookRepository):
        self.book_repository = book_repository

    def execute(
        self,
        id: Optional[str] = None,
        title: Optional[str] = None,
        book_id: Optional[str] = None,
        authors: Optional[List[str]] = None,
        genres: Optional[List[str]] = None,
    ) -> List[Book]:
        book_filter = BookFilter(
            id=id,
            title=title,
            book_id=book_id,
            authors=[a for a in authors or [] if a],
            genres=[g for g in genres or [] if g],
        )
        if book_filter.is_empty():
            logger.debug("No filters given, listing all books")
        return self.book_repository.search_books(book_filter)


class CreateBookUseCase:
    def __init__(self, book_repository: BookRepository):
        self.book_repository = book_repository

    def execute(self, title: Any, authors: Any, genres: Any) -> Book:
        title = normalize_title(title)
        authors = normalize_names(authors, MissingAuthorsError)
        genres = normalize_names(genres, MissingGenresError)

        book_id = str(uuid.uuid4())
        return self.book_repository.create_book(book_id, title, authors, genres)


class UpdateBookUseCase:
    """
    Replace a book's title, authors and genres.

    Authors and genres must be non-empty here too, so a book never ends up
    without at least one of each.
    """

    def __init__(self, book_repository: BookRepository):
        self.book_repository = book_repository

    def execute(self, id: str, title: Any, authors: Any, genres: Any) -> Book:
        title = normalize_title(title)
        authors = normalize_names(authors, MissingAuthorsError)
        genres = normalize_names(genres, MissingGenresError)

        book = self.book_repository.update_book(id, title, authors, genres)
        if book is None:
            logger.info(f"Update skipped, no book with id {id}")
            raise BookNotFoundError(id)
        return book


class DeleteBookUseCase:
    def __init__(self, book_repository: BookRepository):
        self.book_repository = book_repository

    def execute(self, id: str) -> int:
        return self.book_repository.delete_book(id)
