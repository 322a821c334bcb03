"""
Shelf name resolution and per-shelf book lookups.

Users refer to predefined shelves by display name ("To read", "did not
finish", ...) or ask for every book at once with the "All books" sentinel.
This module turns those strings into PredefinedShelf rows and book sets.

Usage:
    utils = PredefinedShelfUtils(PredefinedShelfService(session))
    utils.get_books_in_chosen_predefined_shelf("reading")
    utils.get_books_in_chosen_predefined_shelf(ALL_BOOKS_SHELF)
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Union
import logging

from .db.models import ALL_BOOKS_SHELF, Book, PredefinedShelf, ShelfName
from .exceptions import ShelfNotFoundError
from .services.predefined_shelf_service import PredefinedShelfService

logger = logging.getLogger(__name__)

# Keyed by lower-cased display name, e.g. "did not finish" -> DID_NOT_FINISH
_SHELF_NAMES_BY_KEY = {str(shelf_name).lower(): shelf_name for shelf_name in ShelfName}


@dataclass(frozen=True)
class AllShelves:
    """Every book on every predefined shelf."""

    def __str__(self):
        return ALL_BOOKS_SHELF


@dataclass(frozen=True)
class NamedShelf:
    """A single shelf chosen by display name."""
    name: str

    def __str__(self):
        return self.name


ShelfSelection = Union[AllShelves, NamedShelf]


def parse_shelf_selection(value: str) -> ShelfSelection:
    """
    Convert a shelf string from a form, URL or command line into a selection.

    The sentinel is matched case-insensitively; anything else becomes a
    NamedShelf and is resolved later.
    """
    if isinstance(value, str) and value.lower() == ALL_BOOKS_SHELF.lower():
        return AllShelves()
    return NamedShelf(value)


def is_predefined_shelf(shelf_name) -> bool:
    """
    Check whether a name matches one of the predefined shelves.

    Comparison ignores case. Never raises: None, empty strings and
    non-strings are simply not predefined shelves.
    """
    return get_predefined_shelf_name(shelf_name) is not None


def get_predefined_shelf_name(shelf_name) -> Optional[ShelfName]:
    """
    Resolve a display name to its ShelfName.

    Returns:
        The ShelfName, or None when nothing matches
    """
    if not isinstance(shelf_name, str):
        return None
    return _SHELF_NAMES_BY_KEY.get(shelf_name.lower())


class PredefinedShelfUtils:
    """Resolves shelf names against a library's predefined shelves."""

    def __init__(self, predefined_shelf_service: PredefinedShelfService):
        """
        Args:
            predefined_shelf_service: Store used to fetch shelves and their books
        """
        self.predefined_shelf_service = predefined_shelf_service

    is_predefined_shelf = staticmethod(is_predefined_shelf)
    get_predefined_shelf_name = staticmethod(get_predefined_shelf_name)

    def get_predefined_shelf_names_as_strings(self) -> List[str]:
        """Display names of the library's predefined shelves, in display order."""
        return [shelf.name for shelf in self.predefined_shelf_service.find_all()]

    def find_predefined_shelf(self, shelf_name: ShelfName) -> PredefinedShelf:
        return self.predefined_shelf_service.find_by_shelf_name(shelf_name)

    def find_to_read_shelf(self) -> PredefinedShelf:
        return self.find_predefined_shelf(ShelfName.TO_READ)

    def find_reading_shelf(self) -> PredefinedShelf:
        return self.find_predefined_shelf(ShelfName.READING)

    def find_read_shelf(self) -> PredefinedShelf:
        return self.find_predefined_shelf(ShelfName.READ)

    def find_did_not_finish_shelf(self) -> PredefinedShelf:
        return self.find_predefined_shelf(ShelfName.DID_NOT_FINISH)

    def get_books_in_chosen_predefined_shelf(
        self, chosen_shelf: Union[str, ShelfSelection]
    ) -> Set[Book]:
        """
        Get the books on the chosen shelf.

        Args:
            chosen_shelf: A display name, the "All books" sentinel, or a
                ShelfSelection

        Returns:
            Set of books (empty if the shelf has none)

        Raises:
            ShelfNotFoundError: If the name is not a predefined shelf, or the
                library is missing that shelf
        """
        if isinstance(chosen_shelf, str):
            chosen_shelf = parse_shelf_selection(chosen_shelf)

        if isinstance(chosen_shelf, AllShelves):
            return self.get_books_in_predefined_shelves(
                self.predefined_shelf_service.find_all()
            )

        if not isinstance(chosen_shelf, NamedShelf):
            raise ShelfNotFoundError(chosen_shelf)

        shelf_name = get_predefined_shelf_name(chosen_shelf.name)
        if shelf_name is None:
            logger.debug(f"'{chosen_shelf.name}' does not match any predefined shelf")
            raise ShelfNotFoundError(chosen_shelf.name)

        return set(self.find_predefined_shelf(shelf_name).books)

    @staticmethod
    def get_books_in_predefined_shelves(shelves: Iterable[PredefinedShelf]) -> Set[Book]:
        """Union of the books on several shelves."""
        books: Set[Book] = set()
        for shelf in shelves:
            books.update(shelf.books)
        return books
