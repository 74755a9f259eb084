import logging
import os
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Ensure environment variables are loaded at import time
from config import env  # noqa: F401
from domain.repositories import BookRepository
from presentation.api import book_router, close_book_repository, get_book_repository, ui_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    close_book_repository()


app = FastAPI(title="Book Catalog API", version="1.0.0", lifespan=lifespan)

allow_origins = [
    os.getenv("CATALOG_UI_URL", "http://localhost:3000"),
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

# Include routers
app.include_router(book_router)
app.include_router(ui_router)


@app.get("/")
async def root():
    return {"message": "Book Catalog API"}


@app.get("/health")
async def health_check(repo: BookRepository = Depends(get_book_repository)):
    # Check if the book store can be reached
    try:
        repo.ping()
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return {"status": "unhealthy", "error": str(e)}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
