from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.entities import Book


class BookPayload(BaseModel):
    """Body accepted by POST and PUT /books (documentation only, parsed leniently)"""

    title: str
    authors: List[str]
    genres: List[str]


class BookResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    book_id: str = Field(..., alias="bookId")
    title: str
    authors: List[str] = []
    genres: List[str] = []

    @classmethod
    def from_entity(cls, book: Book) -> "BookResponse":
        return cls(**book.to_dict())


class BookListResponse(BaseModel):
    success: bool = True
    data: List[BookResponse]


class BookResultResponse(BaseModel):
    success: bool = True
    data: BookResponse


class DeleteBookResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    deleted_count: int = Field(..., alias="deletedCount")


class ErrorResponse(BaseModel):
    """Failure envelope; POST reports the message under err, the other routes under error"""

    success: bool = False
    error: Optional[str] = None
    err: Optional[str] = None
