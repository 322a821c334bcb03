"""
Database module for bookproject.

Provides SQLAlchemy session management and initialization.
"""

from .models import Base, Author, Book, PredefinedShelf, CustomShelf, ShelfName
from .session import get_session, init_db, close_db, get_or_create

__all__ = [
    'Base',
    'Author',
    'Book',
    'PredefinedShelf',
    'CustomShelf',
    'ShelfName',
    'get_session',
    'init_db',
    'close_db',
    'get_or_create',
]
