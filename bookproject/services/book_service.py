"""
Book service for adding, moving and removing tracked books.
"""

from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from ..db.models import Author, Book, ShelfName
from ..db.session import get_or_create
from ..exceptions import BookNotFoundError
from .predefined_shelf_service import PredefinedShelfService

logger = logging.getLogger(__name__)


class BookService:
    """Service for CRUD operations on books and their shelf membership."""

    def __init__(self, session: Session):
        """
        Initialize book service.

        Args:
            session: SQLAlchemy session
        """
        self.session = session
        self.shelf_service = PredefinedShelfService(session)

    def add_book(self, title: str, shelf_name: ShelfName = ShelfName.TO_READ,
                 author_name: Optional[str] = None) -> Book:
        """
        Add a book to a predefined shelf.

        Args:
            title: Book title
            shelf_name: Shelf the book starts on
            author_name: Optional author; reused if already known

        Returns:
            The new Book

        Raises:
            ValueError: If the title is blank
            ShelfNotFoundError: If the shelf row is missing
        """
        title = (title or "").strip()
        if not title:
            raise ValueError("Book title cannot be empty")

        shelf = self.shelf_service.find_by_shelf_name(shelf_name)

        author = None
        if author_name and author_name.strip():
            author, _ = get_or_create(self.session, Author, name=author_name.strip())

        book = Book(title=title, author=author, predefined_shelf=shelf)
        self.session.add(book)
        self.session.commit()

        logger.debug(f"Added book '{title}' to shelf '{shelf_name}'")
        return book

    def get_book(self, book_id: int) -> Book:
        """
        Get book by ID.

        Raises:
            BookNotFoundError: If no book has this ID
        """
        book = self.session.get(Book, book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def get_all_books(self) -> List[Book]:
        """Get all books ordered by title."""
        return self.session.query(Book).order_by(Book.title, Book.id).all()

    def find_by_title(self, fragment: str) -> List[Book]:
        """Get books whose title contains a fragment (case-insensitive)."""
        return self.session.query(Book).filter(
            Book.title.ilike(f"%{fragment}%")
        ).order_by(Book.title).all()

    def move_to_shelf(self, book_id: int, shelf_name: ShelfName) -> Book:
        """
        Move a book onto another predefined shelf.

        A book is on one predefined shelf at a time, so this replaces the
        previous shelf.

        Args:
            book_id: Book ID
            shelf_name: Destination shelf

        Returns:
            Updated Book
        """
        book = self.get_book(book_id)
        shelf = self.shelf_service.find_by_shelf_name(shelf_name)

        previous = book.predefined_shelf
        book.predefined_shelf = shelf
        self.session.commit()

        logger.debug(f"Moved book {book_id} from '{previous.name}' to '{shelf.name}'")
        return book

    def rename_book(self, book_id: int, title: str) -> Book:
        """Change a book's title."""
        title = (title or "").strip()
        if not title:
            raise ValueError("Book title cannot be empty")

        book = self.get_book(book_id)
        book.title = title
        self.session.commit()
        logger.debug(f"Renamed book {book_id} to '{title}'")
        return book

    def delete_book(self, book_id: int) -> None:
        """
        Delete a book.

        Raises:
            BookNotFoundError: If no book has this ID
        """
        book = self.get_book(book_id)
        self.session.delete(book)
        self.session.commit()
        logger.debug(f"Deleted book {book_id}")
