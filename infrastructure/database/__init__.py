from .in_memory_repository import InMemoryBookRepository
from .neo4j_repository import Neo4jBookRepository

__all__ = ["Neo4jBookRepository", "InMemoryBookRepository"]
