"""
Services for bookproject business logic.
"""

from .predefined_shelf_service import PredefinedShelfService
from .book_service import BookService
from .custom_shelf_service import CustomShelfService

__all__ = [
    'PredefinedShelfService',
    'BookService',
    'CustomShelfService',
]
