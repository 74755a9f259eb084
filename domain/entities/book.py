from dataclasses import dataclass, field
from typing import List


@dataclass
class Author:
    name: str


@dataclass
class Genre:
    name: str


@dataclass
class Book:
    id: str
    book_id: str
    title: str
    authors: List[str] = field(default_factory=list)
    genres: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "bookId": self.book_id,
            "title": self.title,
            "authors": list(self.authors),
            "genres": list(self.genres),
        }
