"""Domain errors raised by the book use cases and repositories"""


class CatalogError(Exception):
    pass


class BookValidationError(CatalogError):
    """A required field is missing or malformed; nothing was written"""

    message = "Invalid book payload"

    def __init__(self, message=None):
        super().__init__(message or self.message)


class MissingTitleError(BookValidationError):
    message = "Book title missing"


class MissingAuthorsError(BookValidationError):
    message = "At least one author required"


class MissingGenresError(BookValidationError):
    message = "At least one genre required"


class InvalidNameListError(BookValidationError):
    message = "Names must be given as a list of strings"


class BookNotFoundError(CatalogError):
    def __init__(self, book_id: str):
        self.book_id = book_id
        super().__init__("Book not found")
