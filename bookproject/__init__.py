"""
bookproject - keep track of the books you want to read, are reading, have read
or did not finish.

Main API:
    from bookproject.library_db import Library
    from pathlib import Path

    # Open or create a library
    lib = Library.open(Path("/path/to/library"))

    # Add a book to a shelf
    book = lib.add_book("The Hobbit", shelf="To read", author="J.R.R. Tolkien")

    # Shelf names are matched case-insensitively
    lib.move_book(book.id, "reading")
    lib.books_in_shelf("All books")

    # Always close when done
    lib.close()
"""

from .library_db import Library

__version__ = "0.1.0"
__all__ = ["Library"]
