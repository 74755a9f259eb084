#!/usr/bin/env python3
"""Create uniqueness constraints used by the book catalog.

Author and Genre nodes are merged by name; a uniqueness constraint on the
name makes concurrent MERGEs of the same name resolve to a single node.

Usage:
    python scripts/create_neo4j_constraints.py
    python scripts/create_neo4j_constraints.py --show-only  # Show existing constraints only
"""

import argparse
import logging
import os
import sys

from neo4j import GraphDatabase

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

CONSTRAINTS = [
    ("Author", "name", "author_name_unique"),
    ("Genre", "name", "genre_name_unique"),
    ("Book", "bookId", "book_book_id_unique"),
]


def show_existing_constraints(driver) -> list[dict]:
    """Show all existing constraints and return them as a list."""
    with driver.session() as session:
        result = session.run("SHOW CONSTRAINTS")
        constraints = []
        logger.info("=" * 60)
        logger.info("EXISTING CONSTRAINTS")
        logger.info("=" * 60)
        for record in result:
            info = {
                "name": record["name"],
                "type": record["type"],
                "labels_or_types": record["labelsOrTypes"],
                "properties": record["properties"],
            }
            constraints.append(info)
            logger.info(f"  [{info['type']:12}] {info['name']:30} | {info['labels_or_types']} -> {info['properties']}")
        logger.info("=" * 60)
        return constraints


def create_constraints(session, existing_names: set) -> int:
    created_count = 0
    for label, prop, name in CONSTRAINTS:
        if name in existing_names:
            logger.info(f"  [SKIP] {name} already exists")
            continue

        query = f"CREATE CONSTRAINT {name} IF NOT EXISTS FOR (n:{label}) REQUIRE n.{prop} IS UNIQUE"
        try:
            session.run(query).consume()
            logger.info(f"  [CREATE] {name}: {label}.{prop}")
            created_count += 1
        except Exception as e:
            logger.warning(f"  [ERROR] Failed to create {name}: {e}")
    return created_count


def main():
    parser = argparse.ArgumentParser(description="Create Neo4j constraints for the book catalog")
    parser.add_argument("--show-only", action="store_true", help="Show existing constraints only")
    parser.add_argument("--uri", type=str, help="Neo4j URI (default: from env)")
    parser.add_argument("--user", type=str, help="Neo4j user (default: from env)")
    parser.add_argument("--password", type=str, help="Neo4j password (default: from env)")
    args = parser.parse_args()

    from dotenv import load_dotenv

    load_dotenv()
    uri = args.uri or os.getenv("NEO4J_URI")
    user = args.user or os.getenv("NEO4J_USER", "neo4j")
    password = args.password or os.getenv("NEO4J_PASSWORD")

    if not uri:
        logger.error("Neo4j URI not provided. Set NEO4J_URI environment variable.")
        sys.exit(1)
    if not password:
        logger.error("Neo4j password not provided. Set NEO4J_PASSWORD environment variable.")
        sys.exit(1)

    logger.info(f"Connecting to Neo4j at {uri}")
    driver = GraphDatabase.driver(uri, auth=(user, password))

    try:
        driver.verify_connectivity()
        existing = show_existing_constraints(driver)

        if args.show_only:
            logger.info("Show-only mode. Exiting without creating constraints.")
            return

        with driver.session() as session:
            created = create_constraints(session, {c["name"] for c in existing})
        logger.info(f"Created {created} new constraint(s)")
    except Exception as e:
        logger.error(f"Error: {e}")
        sys.exit(1)
    finally:
        driver.close()


if __name__ == "__main__":
    main()
