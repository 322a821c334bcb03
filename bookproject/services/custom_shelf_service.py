"""Service for managing user-created shelves.

Custom shelves sit alongside the predefined reading-status shelves: a book
keeps its predefined shelf and can additionally be placed on one custom shelf.
"""

from typing import List, Optional, Set
import logging

from sqlalchemy.orm import Session

from ..db.models import ALL_BOOKS_SHELF, Book, CustomShelf, ShelfName
from ..exceptions import ShelfNotFoundError

logger = logging.getLogger(__name__)

_RESERVED_NAMES = {str(shelf_name).lower() for shelf_name in ShelfName} | {ALL_BOOKS_SHELF.lower()}


class CustomShelfService:
    """Service for CRUD operations on custom shelves."""

    def __init__(self, session: Session):
        self.session = session

    def create_shelf(self, name: str) -> CustomShelf:
        """Create a custom shelf.

        Args:
            name: Shelf name, unique within the library

        Returns:
            CustomShelf instance

        Raises:
            ValueError: If the name is blank, reserved or already taken
        """
        name = (name or "").strip()
        if not name:
            raise ValueError("Shelf name cannot be empty")
        if name.lower() in _RESERVED_NAMES:
            raise ValueError(f"'{name}' is reserved for a predefined shelf")
        if self.get_shelf(name):
            raise ValueError(f"Shelf '{name}' already exists")

        shelf = CustomShelf(name=name)
        self.session.add(shelf)
        self.session.commit()
        logger.debug(f"Created custom shelf '{name}'")
        return shelf

    def get_shelf(self, name: str) -> Optional[CustomShelf]:
        """Get custom shelf by name, or None."""
        return self.session.query(CustomShelf).filter_by(name=name).first()

    def require_shelf(self, name: str) -> CustomShelf:
        shelf = self.get_shelf(name)
        if shelf is None:
            raise ShelfNotFoundError(name)
        return shelf

    def get_all_shelves(self) -> List[CustomShelf]:
        """Get all custom shelves ordered by name."""
        return self.session.query(CustomShelf).order_by(CustomShelf.name).all()

    def get_books(self, name: str) -> Set[Book]:
        """Get the books on a custom shelf."""
        return set(self.require_shelf(name).books)

    def add_book(self, book: Book, name: str) -> CustomShelf:
        """Put a book on a custom shelf, replacing any previous custom shelf.

        Args:
            book: Book instance
            name: Custom shelf name

        Returns:
            The custom shelf
        """
        shelf = self.require_shelf(name)
        book.custom_shelf = shelf
        self.session.commit()
        logger.debug(f"Added book {book.id} to custom shelf '{name}'")
        return shelf

    def remove_book(self, book: Book) -> bool:
        """Take a book off its custom shelf.

        Returns:
            True if removed, False if the book had no custom shelf
        """
        if book.custom_shelf is None:
            return False

        book.custom_shelf = None
        self.session.commit()
        return True

    def delete_shelf(self, name: str) -> None:
        """Delete a custom shelf. Its books stay in the library."""
        shelf = self.require_shelf(name)
        for book in list(shelf.books):
            book.custom_shelf = None

        self.session.delete(shelf)
        self.session.commit()
        logger.debug(f"Deleted custom shelf '{name}'")
