from .book_api import close_book_repository, get_book_repository
from .book_api import router as book_router
from .ui_api import router as ui_router

__all__ = [
    "book_router",
    "ui_router",
    "get_book_repository",
    "close_book_repository",
]
