from .book import Author, Book, Genre
from .book_filter import (
    AuthorNameContainsAny,
    BookFilter,
    CatalogIdEquals,
    GenreNameContainsAny,
    InternalIdEquals,
    TitleContains,
)

__all__ = [
    "Author",
    "Book",
    "Genre",
    "BookFilter",
    "InternalIdEquals",
    "TitleContains",
    "CatalogIdEquals",
    "AuthorNameContainsAny",
    "GenreNameContainsAny",
]
