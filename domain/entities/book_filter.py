"""
Book search filters.

Each optional search field is a predicate. A predicate renders itself as a
Cypher condition over the book variable ``b`` and can also be evaluated
directly against a ``Book`` for stores that are not backed by Neo4j.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .book import Book


def _contains_ignore_case(value: str, term: str) -> bool:
    return term.lower() in (value or "").lower()


@dataclass(frozen=True)
class InternalIdEquals:
    id: str

    def to_cypher(self) -> Tuple[str, Dict[str, Any]]:
        return "elementId(b) = $id", {"id": self.id}

    def matches(self, book: Book) -> bool:
        return book.id == self.id


@dataclass(frozen=True)
class TitleContains:
    title: str

    def to_cypher(self) -> Tuple[str, Dict[str, Any]]:
        return "toLower(b.title) CONTAINS toLower($title)", {"title": self.title}

    def matches(self, book: Book) -> bool:
        return _contains_ignore_case(book.title, self.title)


@dataclass(frozen=True)
class CatalogIdEquals:
    book_id: str

    def to_cypher(self) -> Tuple[str, Dict[str, Any]]:
        return "b.bookId = $bookId", {"bookId": self.book_id}

    def matches(self, book: Book) -> bool:
        return book.book_id == self.book_id


@dataclass(frozen=True)
class AuthorNameContainsAny:
    """Any linked author's name contains any of the terms"""

    terms: Tuple[str, ...]

    def to_cypher(self) -> Tuple[str, Dict[str, Any]]:
        clause = """EXISTS {
            MATCH (b)<-[:WROTE]-(a:Author)
            WHERE any(term IN $authors WHERE toLower(a.name) CONTAINS toLower(term))
        }"""
        return clause, {"authors": list(self.terms)}

    def matches(self, book: Book) -> bool:
        return any(_contains_ignore_case(name, term) for name in book.authors for term in self.terms)


@dataclass(frozen=True)
class GenreNameContainsAny:
    """Any linked genre's name contains any of the terms"""

    terms: Tuple[str, ...]

    def to_cypher(self) -> Tuple[str, Dict[str, Any]]:
        clause = """EXISTS {
            MATCH (b)-[:IN_GENRE]->(g:Genre)
            WHERE any(term IN $genres WHERE toLower(g.name) CONTAINS toLower(term))
        }"""
        return clause, {"genres": list(self.terms)}

    def matches(self, book: Book) -> bool:
        return any(_contains_ignore_case(name, term) for name in book.genres for term in self.terms)


@dataclass
class BookFilter:
    id: Optional[str] = None
    title: Optional[str] = None
    book_id: Optional[str] = None
    authors: List[str] = field(default_factory=list)
    genres: List[str] = field(default_factory=list)

    def predicates(self) -> list:
        """Return one predicate per present field, in a stable order"""
        predicates = []
        if self.id:
            predicates.append(InternalIdEquals(self.id))
        if self.title:
            predicates.append(TitleContains(self.title))
        if self.book_id:
            predicates.append(CatalogIdEquals(self.book_id))
        authors = tuple(a for a in self.authors if a)
        if authors:
            predicates.append(AuthorNameContainsAny(authors))
        genres = tuple(g for g in self.genres if g)
        if genres:
            predicates.append(GenreNameContainsAny(genres))
        return predicates

    def is_empty(self) -> bool:
        return not self.predicates()

    def matches(self, book: Book) -> bool:
        return all(predicate.matches(book) for predicate in self.predicates())

    def to_cypher_where(self) -> Tuple[str, Dict[str, Any]]:
        """Fold the predicates into a single WHERE clause and its parameters"""
        conditions = []
        parameters: Dict[str, Any] = {}
        for predicate in self.predicates():
            condition, params = predicate.to_cypher()
            conditions.append(condition)
            parameters.update(params)

        if not conditions:
            return "", parameters
        return "WHERE " + "\n  AND ".join(conditions), parameters
