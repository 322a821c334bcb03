"""
Predefined shelf service.

Looks up and creates the four fixed reading-status shelves.
"""

from typing import List
import logging

from sqlalchemy.orm import Session

from ..db.models import PredefinedShelf, ShelfName
from ..exceptions import ShelfNotFoundError

logger = logging.getLogger(__name__)

_DECLARATION_ORDER = {shelf_name: i for i, shelf_name in enumerate(ShelfName)}


class PredefinedShelfService:
    """Service for the fixed To read / Reading / Read / Did not finish shelves."""

    def __init__(self, session: Session):
        """
        Initialize the predefined shelf service.

        Args:
            session: SQLAlchemy database session
        """
        self.session = session

    def initialize(self) -> List[PredefinedShelf]:
        """
        Create any predefined shelves missing from the database.

        Safe to call repeatedly; existing shelves are left untouched.

        Returns:
            All predefined shelves in display order
        """
        existing = {shelf.shelf_name for shelf in self.session.query(PredefinedShelf).all()}
        missing = [shelf_name for shelf_name in ShelfName if shelf_name not in existing]

        for shelf_name in missing:
            self.session.add(PredefinedShelf(shelf_name=shelf_name))

        if missing:
            self.session.commit()
            logger.debug(f"Created predefined shelves: {[str(s) for s in missing]}")

        return self.find_all()

    def find_all(self) -> List[PredefinedShelf]:
        """
        Get all predefined shelves.

        Returns:
            Shelves ordered as ShelfName declares them
        """
        shelves = self.session.query(PredefinedShelf).all()
        return sorted(shelves, key=lambda shelf: _DECLARATION_ORDER[shelf.shelf_name])

    def find_by_shelf_name(self, shelf_name: ShelfName) -> PredefinedShelf:
        """
        Get the shelf for a ShelfName.

        Args:
            shelf_name: Which predefined shelf to fetch

        Returns:
            PredefinedShelf instance

        Raises:
            ShelfNotFoundError: If the library has no row for this shelf
        """
        shelf = self.session.query(PredefinedShelf).filter_by(shelf_name=shelf_name).first()
        if shelf is None:
            raise ShelfNotFoundError(str(shelf_name))
        return shelf

    def count_books(self) -> dict:
        """
        Count the books on each predefined shelf.

        Returns:
            Mapping of display name to book count, in display order
        """
        return {shelf.name: len(shelf.books) for shelf in self.find_all()}
