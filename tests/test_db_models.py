"""
Tests for database models.
"""

import pytest
import tempfile
import shutil
from pathlib import Path

from sqlalchemy.exc import IntegrityError

from bookproject.library_db import Library
from bookproject.db.models import Author, Book, CustomShelf, PredefinedShelf, ShelfName


@pytest.fixture
def temp_library():
    """Create a temporary library for testing."""
    temp_dir = tempfile.mkdtemp()
    lib = Library.open(Path(temp_dir))

    yield lib

    # Cleanup
    lib.close()
    shutil.rmtree(temp_dir, ignore_errors=True)


class TestShelfName:
    """Test the ShelfName enum."""

    def test_display_strings(self):
        assert str(ShelfName.TO_READ) == "To read"
        assert str(ShelfName.READING) == "Reading"
        assert str(ShelfName.READ) == "Read"
        assert str(ShelfName.DID_NOT_FINISH) == "Did not finish"

    def test_declaration_order(self):
        assert list(ShelfName) == [
            ShelfName.TO_READ, ShelfName.READING, ShelfName.READ, ShelfName.DID_NOT_FINISH
        ]


class TestPredefinedShelfModel:
    """Test PredefinedShelf model."""

    def test_shelf_name_is_unique(self, temp_library):
        temp_library.session.add(PredefinedShelf(shelf_name=ShelfName.READ))

        with pytest.raises(IntegrityError):
            temp_library.session.commit()
        temp_library.session.rollback()

    def test_books_is_a_set(self, temp_library):
        shelf = temp_library.predefined_shelves()[0]
        assert isinstance(shelf.books, set)

    def test_assigning_books_moves_them(self, temp_library):
        book = temp_library.add_book("Dune", shelf="To read")
        read = temp_library.predefined_shelves()[2]

        read.books = {book}
        temp_library.session.commit()

        assert book.predefined_shelf is read
        assert temp_library.books_in_shelf("To read") == set()

    def test_repr(self, temp_library):
        assert "To read" in repr(temp_library.predefined_shelves()[0])


class TestBookModel:
    """Test Book model."""

    def test_book_creation(self, temp_library):
        book = temp_library.add_book("Test Book", author="Author")

        assert book.id is not None
        assert book.title == "Test Book"
        assert book.created_at is not None
        assert book.updated_at is not None

    def test_book_requires_predefined_shelf(self, temp_library):
        temp_library.session.add(Book(title="Shelfless"))

        with pytest.raises(IntegrityError):
            temp_library.session.commit()
        temp_library.session.rollback()

    def test_author_back_reference(self, temp_library):
        book = temp_library.add_book("Dune", author="Frank Herbert")
        author = temp_library.session.query(Author).filter_by(name="Frank Herbert").one()

        assert author.books == [book]

    def test_custom_shelf_back_reference(self, temp_library):
        book = temp_library.add_book("Dune")
        temp_library.create_custom_shelf("Book club")
        temp_library.add_to_custom_shelf(book.id, "Book club")

        shelf = temp_library.session.query(CustomShelf).filter_by(name="Book club").one()
        assert shelf.books == {book}

    def test_repr_truncates_long_titles(self, temp_library):
        book = temp_library.add_book("x" * 80)

        assert repr(book).count("x") == 50
