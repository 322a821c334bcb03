"""
SQLAlchemy models for the bookproject database.

Every book sits on exactly one predefined shelf and may also sit on one
custom shelf.
"""

from datetime import datetime
import enum

from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Enum, Index
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class ShelfName(enum.Enum):
    """The four shelves every library has, in display order."""
    TO_READ = "To read"
    READING = "Reading"
    READ = "Read"
    DID_NOT_FINISH = "Did not finish"

    def __str__(self):
        return self.value


# Sentinel meaning "every book on every predefined shelf"; not a shelf row
ALL_BOOKS_SHELF = "All books"


class Author(Base):
    """Author of one or more books."""
    __tablename__ = 'authors'

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False, unique=True, index=True)

    books = relationship('Book', back_populates='author')

    def __repr__(self):
        return f"<Author(id={self.id}, name='{self.name}')>"


class PredefinedShelf(Base):
    """One of the fixed reading-status shelves."""
    __tablename__ = 'predefined_shelves'

    id = Column(Integer, primary_key=True)
    shelf_name = Column(Enum(ShelfName), nullable=False, unique=True)

    books = relationship('Book', back_populates='predefined_shelf', collection_class=set)

    @property
    def name(self) -> str:
        return str(self.shelf_name)

    def __repr__(self):
        return f"<PredefinedShelf(id={self.id}, name='{self.shelf_name}')>"


class CustomShelf(Base):
    """User-created shelf (e.g. "Holiday reads")."""
    __tablename__ = 'custom_shelves'

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False, unique=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    books = relationship('Book', back_populates='custom_shelf', collection_class=set)

    def __repr__(self):
        return f"<CustomShelf(id={self.id}, name='{self.name}')>"


class Book(Base):
    """A tracked book."""
    __tablename__ = 'books'

    id = Column(Integer, primary_key=True)
    title = Column(String(500), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey('authors.id', ondelete='SET NULL'))
    predefined_shelf_id = Column(
        Integer, ForeignKey('predefined_shelves.id', ondelete='RESTRICT'), nullable=False
    )
    custom_shelf_id = Column(Integer, ForeignKey('custom_shelves.id', ondelete='SET NULL'))

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    author = relationship('Author', back_populates='books', lazy='selectin')
    predefined_shelf = relationship('PredefinedShelf', back_populates='books', lazy='selectin')
    custom_shelf = relationship('CustomShelf', back_populates='books', lazy='selectin')

    __table_args__ = (
        Index('idx_book_shelf', 'predefined_shelf_id'),
    )

    def __repr__(self):
        return f"<Book(id={self.id}, title='{self.title[:50]}')>"
