"""
In-memory graph store used when Neo4j is not available
"""

import itertools
import logging
import threading
from typing import Dict, List, Optional, Set, Tuple

from domain.entities import Author, Book, BookFilter, Genre
from domain.repositories import BookRepository

logger = logging.getLogger(__name__)


class InMemoryBookRepository(BookRepository):
    """
    Book graph kept as plain dictionaries.

    Authors and genres are keyed by exact name, so linking a name that is
    already known reuses the existing entity. Edges are sets of
    ``(author_name, book_key)`` and ``(book_key, genre_name)`` pairs.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._books: Dict[str, Dict[str, str]] = {}
        self._authors: Dict[str, Author] = {}
        self._genres: Dict[str, Genre] = {}
        self._wrote: Set[Tuple[str, str]] = set()
        self._in_genre: Set[Tuple[str, str]] = set()

    def ping(self) -> bool:
        return True

    # ---------------------- Inspection ----------------------
    def author_names(self) -> List[str]:
        return list(self._authors)

    def genre_names(self) -> List[str]:
        return list(self._genres)

    def books_written_by(self, name: str) -> List[str]:
        return [book_key for author_name, book_key in self._wrote if author_name == name]

    # ---------------------- Helpers ----------------------
    def _to_book(self, key: str) -> Book:
        node = self._books[key]
        # Insertion order of the entity maps keeps name lists stable
        authors = [name for name in self._authors if (name, key) in self._wrote]
        genres = [name for name in self._genres if (key, name) in self._in_genre]
        return Book(id=key, book_id=node["bookId"], title=node["title"], authors=authors, genres=genres)

    def _link(self, key: str, authors: List[str], genres: List[str]) -> None:
        for name in authors:
            self._authors.setdefault(name, Author(name=name))
            self._wrote.add((name, key))
        for name in genres:
            self._genres.setdefault(name, Genre(name=name))
            self._in_genre.add((key, name))

    def _unlink(self, key: str) -> None:
        self._wrote = {edge for edge in self._wrote if edge[1] != key}
        self._in_genre = {edge for edge in self._in_genre if edge[0] != key}

    # ---------------------- Public queries ----------------------
    def search_books(self, book_filter: BookFilter) -> List[Book]:
        with self._lock:
            books = [self._to_book(key) for key in self._books]
        matched = [book for book in books if book_filter.matches(book)]
        logger.info(f"Found {len(matched)} books")
        return matched

    def create_book(self, book_id: str, title: str, authors: List[str], genres: List[str]) -> Book:
        with self._lock:
            key = str(next(self._ids))
            self._books[key] = {"bookId": book_id, "title": title}
            self._link(key, authors, genres)
            book = self._to_book(key)
        logger.info(f"Created book {key} ({book_id})")
        return book

    def update_book(self, id: str, title: str, authors: List[str], genres: List[str]) -> Optional[Book]:
        with self._lock:
            if id not in self._books:
                return None
            self._books[id]["title"] = title
            self._unlink(id)
            self._link(id, authors, genres)
            book = self._to_book(id)
        logger.info(f"Updated book {id}")
        return book

    def delete_book(self, id: str) -> int:
        with self._lock:
            if id not in self._books:
                deleted_count = 0
            else:
                self._unlink(id)
                del self._books[id]
                deleted_count = 1
        logger.info(f"Deleted {deleted_count} book(s) with id {id}")
        return deleted_count
