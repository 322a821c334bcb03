"""
Database-backed Library class for bookproject.

Ties the shelf services and the shelf resolver to one SQLite library.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union
import logging

from sqlalchemy.orm import Session

from .db.models import Book, CustomShelf, PredefinedShelf, ShelfName
from .db.session import init_db, get_session, close_db
from .exceptions import ShelfNotFoundError
from .services.book_service import BookService
from .services.custom_shelf_service import CustomShelfService
from .services.predefined_shelf_service import PredefinedShelfService
from .shelf_utils import PredefinedShelfUtils, ShelfSelection, get_predefined_shelf_name

logger = logging.getLogger(__name__)


def _to_shelf_name(shelf: Union[str, ShelfName]) -> ShelfName:
    if isinstance(shelf, ShelfName):
        return shelf
    shelf_name = get_predefined_shelf_name(shelf)
    if shelf_name is None:
        raise ShelfNotFoundError(shelf)
    return shelf_name


class Library:
    """
    Database-backed book tracking library.

    Usage:
        lib = Library.open("/path/to/library")
        book = lib.add_book("Dune", shelf="To read", author="Frank Herbert")
        lib.move_book(book.id, "Reading")
        reading = lib.books_in_shelf("reading")
        lib.close()
    """

    def __init__(self, library_path: Path, session: Session):
        self.library_path = Path(library_path)
        self.session = session
        self.predefined_shelf_service = PredefinedShelfService(session)
        self.book_service = BookService(session)
        self.custom_shelf_service = CustomShelfService(session)
        self.shelf_utils = PredefinedShelfUtils(self.predefined_shelf_service)

    @classmethod
    def open(cls, library_path: Path, echo: bool = False) -> 'Library':
        """
        Open or create a library.

        Args:
            library_path: Path to library directory
            echo: If True, log all SQL statements

        Returns:
            Library instance
        """
        library_path = Path(library_path)
        init_db(library_path, echo=echo)
        session = get_session()

        lib = cls(library_path, session)
        lib.predefined_shelf_service.initialize()

        logger.info(f"Opened library at {library_path}")
        return lib

    def close(self):
        """Close library and cleanup database connection."""
        if self.session:
            self.session.close()
        close_db()
        logger.info("Closed library")

    # Books

    def add_book(self, title: str, shelf: Union[str, ShelfName] = ShelfName.TO_READ,
                 author: Optional[str] = None) -> Book:
        """Add a book to a predefined shelf (given by name or ShelfName)."""
        book = self.book_service.add_book(title, _to_shelf_name(shelf), author_name=author)
        logger.info(f"Added book: {book.title}")
        return book

    def get_book(self, book_id: int) -> Book:
        return self.book_service.get_book(book_id)

    def get_all_books(self) -> List[Book]:
        return self.book_service.get_all_books()

    def move_book(self, book_id: int, shelf: Union[str, ShelfName]) -> Book:
        return self.book_service.move_to_shelf(book_id, _to_shelf_name(shelf))

    def rename_book(self, book_id: int, title: str) -> Book:
        return self.book_service.rename_book(book_id, title)

    def delete_book(self, book_id: int) -> None:
        self.book_service.delete_book(book_id)

    # Predefined shelves

    def predefined_shelves(self) -> List[PredefinedShelf]:
        return self.predefined_shelf_service.find_all()

    def shelf_names(self) -> List[str]:
        return self.shelf_utils.get_predefined_shelf_names_as_strings()

    def books_in_shelf(self, shelf: Union[str, ShelfSelection]) -> Set[Book]:
        """Books on a predefined shelf, or every book for "All books"."""
        return self.shelf_utils.get_books_in_chosen_predefined_shelf(shelf)

    # Custom shelves

    def create_custom_shelf(self, name: str) -> CustomShelf:
        return self.custom_shelf_service.create_shelf(name)

    def custom_shelves(self) -> List[CustomShelf]:
        return self.custom_shelf_service.get_all_shelves()

    def add_to_custom_shelf(self, book_id: int, name: str) -> CustomShelf:
        book = self.get_book(book_id)
        return self.custom_shelf_service.add_book(book, name)

    def books_in_custom_shelf(self, name: str) -> Set[Book]:
        return self.custom_shelf_service.get_books(name)

    def delete_custom_shelf(self, name: str) -> None:
        self.custom_shelf_service.delete_shelf(name)

    def stats(self) -> Dict[str, Any]:
        """
        Get library statistics.

        Returns:
            Dictionary with total_books, per-shelf counts and custom shelf count
        """
        return {
            'total_books': self.session.query(Book).count(),
            'shelves': self.predefined_shelf_service.count_books(),
            'custom_shelves': self.session.query(CustomShelf).count(),
        }
