from abc import ABC, abstractmethod
from typing import List, Optional

from domain.entities import Book, BookFilter


class BookRepository(ABC):
    @abstractmethod
    def search_books(self, book_filter: BookFilter) -> List[Book]:
        pass

    @abstractmethod
    def create_book(self, book_id: str, title: str, authors: List[str], genres: List[str]) -> Book:
        pass

    @abstractmethod
    def update_book(self, id: str, title: str, authors: List[str], genres: List[str]) -> Optional[Book]:
        """Replace title and all author/genre links; None when the id matches no book"""
        pass

    @abstractmethod
    def delete_book(self, id: str) -> int:
        pass

    @abstractmethod
    def ping(self) -> bool:
        pass

    def close(self) -> None:
        pass
