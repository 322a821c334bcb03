"""Exceptions raised by bookproject services."""


class ShelfNotFoundError(LookupError):
    """Raised when a shelf does not exist in the library."""

    def __init__(self, shelf_name):
        self.shelf_name = shelf_name
        super().__init__(f"Shelf '{shelf_name}' not found")


class BookNotFoundError(LookupError):
    """Raised when no book has the requested id."""

    def __init__(self, book_id):
        self.book_id = book_id
        super().__init__(f"Book {book_id} not found")
