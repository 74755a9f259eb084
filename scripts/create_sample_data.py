#!/usr/bin/env python3
"""Seed the catalog with a few sample books.

Usage:
    python scripts/create_sample_data.py
"""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config import env  # noqa: F401,E402
from domain.use_cases import CreateBookUseCase  # noqa: E402
from presentation.api import close_book_repository, get_book_repository  # noqa: E402

logger = logging.getLogger(__name__)

SAMPLE_BOOKS = [
    {"title": "Good Omens", "authors": ["Terry Pratchett", "Neil Gaiman"], "genres": ["Fantasy", "Comedy"]},
    {"title": "Guards! Guards!", "authors": ["Terry Pratchett"], "genres": ["Fantasy"]},
    {"title": "American Gods", "authors": ["Neil Gaiman"], "genres": ["Fantasy", "Mythology"]},
    {"title": "The Left Hand of Darkness", "authors": ["Ursula K. Le Guin"], "genres": ["Science Fiction"]},
    {"title": "A Wizard of Earthsea", "authors": ["Ursula K. Le Guin"], "genres": ["Fantasy"]},
    {"title": "Dune", "authors": ["Frank Herbert"], "genres": ["Science Fiction"]},
]


def create_sample_data():
    use_case = CreateBookUseCase(get_book_repository())
    try:
        for sample in SAMPLE_BOOKS:
            book = use_case.execute(**sample)
            logger.info(f"Created '{book.title}' ({book.book_id})")
    finally:
        close_book_repository()


if __name__ == "__main__":
    create_sample_data()
