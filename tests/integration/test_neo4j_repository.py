from unittest.mock import MagicMock, Mock, patch

import pytest

from domain.entities import BookFilter
from infrastructure.database import Neo4jBookRepository
from infrastructure.database.neo4j_repository import (
    CREATE_BOOK_QUERY,
    DELETE_BOOK_QUERY,
    UPDATE_BOOK_QUERY,
    build_search_query,
)


class FakeNode(dict):
    def __init__(self, element_id, **properties):
        super().__init__(**properties)
        self.element_id = element_id


def book_record(element_id="4:db:1", book_id="uuid-1", title="Dune", authors=None, genres=None):
    return {
        "b": FakeNode(element_id, bookId=book_id, title=title),
        "authors": authors if authors is not None else ["Frank Herbert"],
        "genres": genres if genres is not None else ["Science Fiction"],
    }


class TestNeo4jBookRepository:
    def setup_method(self):
        self.mock_driver = Mock()
        # __enter__/__exit__ を持つ擬似コンテキストを用意
        self.mock_session_cm = MagicMock()
        self.mock_session = Mock()
        self.mock_session_cm.__enter__.return_value = self.mock_session
        self.mock_session_cm.__exit__.return_value = None
        self.mock_driver.session.return_value = self.mock_session_cm
        self.repository = Neo4jBookRepository(driver=self.mock_driver)

    @patch.dict("os.environ", {"NEO4J_URI": "bolt://localhost:7687", "NEO4J_USER": "neo4j", "NEO4J_PASSWORD": "secret"})
    @patch("infrastructure.database.neo4j_repository.GraphDatabase")
    def test_driver_built_from_environment(self, mock_graph_database):
        # Arrange
        mock_driver = Mock()
        mock_graph_database.driver.return_value = mock_driver

        # Act
        repository = Neo4jBookRepository()

        # Assert
        assert repository.driver == mock_driver
        mock_graph_database.driver.assert_called_once_with("bolt://localhost:7687", auth=("neo4j", "secret"))

    def test_close_connection(self):
        self.repository.close()
        self.mock_driver.close.assert_called_once()

    @patch("infrastructure.database.neo4j_repository.GraphDatabase")
    def test_driver_is_built_on_first_use(self, mock_graph_database):
        repository = Neo4jBookRepository()
        mock_graph_database.driver.assert_not_called()

        repository.close()
        mock_graph_database.driver.assert_not_called()

        repository.ping()
        mock_graph_database.driver.assert_called_once()

    @patch("infrastructure.database.neo4j_repository.GraphDatabase")
    def test_driver_errors_surface_on_use(self, mock_graph_database):
        mock_graph_database.driver.side_effect = ValueError("Unknown URI scheme")
        repository = Neo4jBookRepository()

        with pytest.raises(ValueError, match="Unknown URI scheme"):
            repository.search_books(BookFilter())

    def test_ping_verifies_connectivity(self):
        assert self.repository.ping() is True
        self.mock_driver.verify_connectivity.assert_called_once()

    def test_named_database_is_used_for_sessions(self):
        repository = Neo4jBookRepository(driver=self.mock_driver, database="catalog")
        self.mock_session.run.return_value = []

        repository.search_books(BookFilter())

        self.mock_driver.session.assert_called_once_with(database="catalog")

    def test_search_maps_records(self):
        # Arrange
        self.mock_session.run.return_value = [
            book_record(),
            book_record(element_id="4:db:2", book_id="uuid-2", title="Empty", authors=[], genres=[]),
        ]

        # Act
        books = self.repository.search_books(BookFilter(title="dune"))

        # Assert
        assert [b.id for b in books] == ["4:db:1", "4:db:2"]
        assert books[0].book_id == "uuid-1"
        assert books[0].authors == ["Frank Herbert"]
        assert books[1].authors == []
        assert books[1].genres == []
        query, = self.mock_session.run.call_args.args
        assert "toLower(b.title) CONTAINS toLower($title)" in query
        assert self.mock_session.run.call_args.kwargs == {"title": "dune"}

    def test_search_session_released_on_failure(self):
        self.mock_session.run.side_effect = Exception("Connection lost")

        with pytest.raises(Exception, match="Connection lost"):
            self.repository.search_books(BookFilter())

        self.mock_session_cm.__exit__.assert_called_once()

    def test_create_book(self):
        self.mock_session.run.return_value = [book_record(authors=["A", "B"], genres=["X"])]

        book = self.repository.create_book("uuid-1", "Dune", ["A", "B"], ["X"])

        assert book.id == "4:db:1"
        assert book.authors == ["A", "B"]
        self.mock_session.run.assert_called_once_with(
            CREATE_BOOK_QUERY, bookId="uuid-1", title="Dune", authors=["A", "B"], genres=["X"]
        )

    def test_update_book(self):
        self.mock_session.run.return_value = [book_record(title="New", authors=["C"])]

        book = self.repository.update_book("4:db:1", "New", ["C"], ["Science Fiction"])

        assert book.title == "New"
        assert book.authors == ["C"]
        self.mock_session.run.assert_called_once_with(
            UPDATE_BOOK_QUERY, id="4:db:1", title="New", authors=["C"], genres=["Science Fiction"]
        )

    def test_update_missing_book_returns_none(self):
        self.mock_session.run.return_value = []

        assert self.repository.update_book("4:db:404", "New", ["C"], ["Y"]) is None

    def test_delete_book_returns_count(self):
        self.mock_session.run.return_value = [{"deletedCount": 1}]

        assert self.repository.delete_book("4:db:1") == 1
        self.mock_session.run.assert_called_once_with(DELETE_BOOK_QUERY, id="4:db:1")

    def test_delete_missing_book_returns_zero(self):
        self.mock_session.run.return_value = [{"deletedCount": 0}]

        assert self.repository.delete_book("4:db:404") == 0


class TestCypherQueries:
    def test_search_without_filters_has_no_where(self):
        query, params = build_search_query(BookFilter())
        assert "WHERE" not in query
        assert params == {}

    def test_search_collects_distinct_names(self):
        query, _ = build_search_query(BookFilter())
        assert "collect(DISTINCT a.name) AS authors" in query
        assert "collect(DISTINCT g.name) AS genres" in query

    def test_update_removes_old_links_before_merging(self):
        assert UPDATE_BOOK_QUERY.index("DELETE wrote") < UPDATE_BOOK_QUERY.index("MERGE (a:Author")
        assert UPDATE_BOOK_QUERY.index("DELETE inGenre") < UPDATE_BOOK_QUERY.index("MERGE (g:Genre")

    def test_authors_and_genres_are_merged_by_name(self):
        for query in (CREATE_BOOK_QUERY, UPDATE_BOOK_QUERY):
            assert "MERGE (a:Author {name: authorName})" in query
            assert "MERGE (a)-[:WROTE]->(b)" in query
            assert "MERGE (g:Genre {name: genreName})" in query
            assert "MERGE (b)-[:IN_GENRE]->(g)" in query

    def test_delete_detaches_relationships(self):
        assert "DETACH DELETE b" in DELETE_BOOK_QUERY
