"""
Neo4j repository for books, authors and genres
"""

import logging
import os
from typing import Any, List, Optional

from neo4j import GraphDatabase

from domain.entities import Book, BookFilter
from domain.repositories import BookRepository

logger = logging.getLogger(__name__)

# Linking runs inside FOREACH so an empty list leaves the book row intact
LINK_AUTHORS_AND_GENRES = """
FOREACH (authorName IN $authors |
    MERGE (a:Author {name: authorName})
    MERGE (a)-[:WROTE]->(b)
)
FOREACH (genreName IN $genres |
    MERGE (g:Genre {name: genreName})
    MERGE (b)-[:IN_GENRE]->(g)
)
"""

RETURN_BOOK = """
WITH b
OPTIONAL MATCH (b)<-[:WROTE]-(a:Author)
OPTIONAL MATCH (b)-[:IN_GENRE]->(g:Genre)
RETURN b, collect(DISTINCT a.name) AS authors, collect(DISTINCT g.name) AS genres
"""

CREATE_BOOK_QUERY = (
    """
CREATE (b:Book {bookId: $bookId, title: $title})
"""
    + LINK_AUTHORS_AND_GENRES
    + RETURN_BOOK
)

UPDATE_BOOK_QUERY = (
    """
MATCH (b:Book)
WHERE elementId(b) = $id
SET b.title = $title
WITH b
OPTIONAL MATCH (b)<-[wrote:WROTE]-(:Author)
DELETE wrote
WITH DISTINCT b
OPTIONAL MATCH (b)-[inGenre:IN_GENRE]->(:Genre)
DELETE inGenre
WITH DISTINCT b
"""
    + LINK_AUTHORS_AND_GENRES
    + RETURN_BOOK
)

DELETE_BOOK_QUERY = """
MATCH (b:Book)
WHERE elementId(b) = $id
DETACH DELETE b
RETURN count(b) AS deletedCount
"""


def build_search_query(book_filter: BookFilter):
    """Build the conjunctive search query and its parameters"""
    where_clause, parameters = book_filter.to_cypher_where()
    query = f"""
MATCH (b:Book)
{where_clause}
OPTIONAL MATCH (b)<-[:WROTE]-(a:Author)
OPTIONAL MATCH (b)-[:IN_GENRE]->(g:Genre)
RETURN b, collect(DISTINCT a.name) AS authors, collect(DISTINCT g.name) AS genres
"""
    return query, parameters


class Neo4jBookRepository(BookRepository):
    def __init__(self, driver: Optional[Any] = None, database: Optional[str] = None) -> None:
        self._driver = driver
        self.database = database or os.getenv("NEO4J_DATABASE") or None

    @property
    def driver(self):
        """Driver built from env on first use, so configuration errors surface inside a request"""
        if self._driver is None:
            uri = os.getenv("NEO4J_URI", "bolt://localhost:7687")
            user = os.getenv("NEO4J_USER", "neo4j")
            password = os.getenv("NEO4J_PASSWORD", "password")
            self._driver = GraphDatabase.driver(uri, auth=(user, password))
            logger.info(f"Neo4j driver created for {uri}")
        return self._driver

    def close(self) -> None:
        """Close database connection"""
        if self._driver is not None:
            self._driver.close()
            self._driver = None
            logger.info("Neo4j connection closed")

    def ping(self) -> bool:
        self.driver.verify_connectivity()
        return True

    # ---------------------- Low-level helpers ----------------------
    def _session(self):
        if self.database:
            return self.driver.session(database=self.database)
        return self.driver.session()

    def _run(self, query: str, **params) -> list:
        # Consume results inside the session to avoid using a lazy Result after session closes
        with self._session() as session:
            result = session.run(query, **params)
            return list(result)

    @staticmethod
    def _record_to_book(record) -> Book:
        node = record["b"]
        return Book(
            id=str(node.element_id),
            book_id=node.get("bookId"),
            title=node.get("title"),
            authors=[a for a in record["authors"] if a],
            genres=[g for g in record["genres"] if g],
        )

    # ---------------------- Public queries ------------------------
    def search_books(self, book_filter: BookFilter) -> List[Book]:
        query, parameters = build_search_query(book_filter)
        logger.debug(f"Running book search with parameters: {parameters}")
        records = self._run(query, **parameters)
        books = [self._record_to_book(record) for record in records]
        logger.info(f"Found {len(books)} books")
        return books

    def create_book(self, book_id: str, title: str, authors: List[str], genres: List[str]) -> Book:
        records = self._run(CREATE_BOOK_QUERY, bookId=book_id, title=title, authors=authors, genres=genres)
        book = self._record_to_book(records[0])
        logger.info(f"Created book {book.id} ({book.book_id})")
        return book

    def update_book(self, id: str, title: str, authors: List[str], genres: List[str]) -> Optional[Book]:
        records = self._run(UPDATE_BOOK_QUERY, id=id, title=title, authors=authors, genres=genres)
        if not records:
            return None
        book = self._record_to_book(records[0])
        logger.info(f"Updated book {book.id}")
        return book

    def delete_book(self, id: str) -> int:
        records = self._run(DELETE_BOOK_QUERY, id=id)
        deleted_count = int(records[0]["deletedCount"]) if records else 0
        logger.info(f"Deleted {deleted_count} book(s) with id {id}")
        return deleted_count
