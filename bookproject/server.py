"""
Web server for bookproject.

Provides a REST API for tracking books across predefined and custom shelves.
"""

from pathlib import Path
from typing import Optional, List, Dict
import logging

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .db.models import Book
from .exceptions import BookNotFoundError, ShelfNotFoundError
from .library_db import Library
from .shelf_utils import ALL_BOOKS_SHELF, get_predefined_shelf_name

logger = logging.getLogger(__name__)


# Pydantic models for API
class BookResponse(BaseModel):
    id: int
    title: str
    author: Optional[str]
    shelf: str
    custom_shelf: Optional[str]


class BookCreateRequest(BaseModel):
    title: str
    author: Optional[str] = None
    shelf: str = "To read"
    custom_shelf: Optional[str] = None


class BookUpdateRequest(BaseModel):
    title: Optional[str] = None
    shelf: Optional[str] = None
    custom_shelf: Optional[str] = None


class ShelfResponse(BaseModel):
    name: str
    book_count: int


class CustomShelfCreateRequest(BaseModel):
    name: str


class LibraryStats(BaseModel):
    total_books: int
    shelves: Dict[str, int]
    custom_shelves: int


# Global library instance
_library: Optional[Library] = None


def get_library() -> Library:
    """Get the current library instance."""
    if _library is None:
        raise HTTPException(status_code=500, detail="Library not initialized")
    return _library


def init_library(library_path: Path):
    """Initialize the library."""
    global _library
    _library = Library.open(library_path)


def set_library(library: Library):
    """Set the library instance directly (for testing)."""
    global _library
    _library = library


def create_app(library_path: Path) -> FastAPI:
    """Create FastAPI application with initialized library."""
    init_library(library_path)
    return app


def book_to_response(book: Book) -> BookResponse:
    return BookResponse(
        id=book.id,
        title=book.title,
        author=book.author.name if book.author else None,
        shelf=book.predefined_shelf.name,
        custom_shelf=book.custom_shelf.name if book.custom_shelf else None,
    )


def _sorted_books(books) -> List[BookResponse]:
    return [book_to_response(b) for b in sorted(books, key=lambda b: (b.title.lower(), b.id))]


def _get_book_or_404(lib: Library, book_id: int) -> Book:
    try:
        return lib.get_book(book_id)
    except BookNotFoundError:
        raise HTTPException(status_code=404, detail="Book not found")


# Create FastAPI app
app = FastAPI(
    title="Book Project",
    description="Keep track of the books you want to read, are reading, have read or did not finish",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/shelves", response_model=List[ShelfResponse])
async def list_shelves():
    """List predefined shelves in display order with their book counts."""
    lib = get_library()
    return [
        ShelfResponse(name=shelf.name, book_count=len(shelf.books))
        for shelf in lib.predefined_shelves()
    ]


@app.get("/api/shelves/{shelf_name}/books", response_model=List[BookResponse])
async def list_shelf_books(shelf_name: str):
    """List books on a predefined shelf, or every book for "All books"."""
    lib = get_library()
    try:
        books = lib.books_in_shelf(shelf_name)
    except ShelfNotFoundError:
        raise HTTPException(status_code=404, detail=f"Shelf not found: {shelf_name}")
    return _sorted_books(books)


@app.get("/api/books", response_model=List[BookResponse])
async def list_books(
    shelf: str = Query(ALL_BOOKS_SHELF, description="Predefined shelf name or 'All books'"),
    search: Optional[str] = None,
):
    """List books, optionally restricted to one shelf and a title fragment."""
    lib = get_library()
    try:
        books = lib.books_in_shelf(shelf)
    except ShelfNotFoundError:
        raise HTTPException(status_code=404, detail=f"Shelf not found: {shelf}")

    if search:
        needle = search.lower()
        books = {b for b in books if needle in b.title.lower()}

    return _sorted_books(books)


@app.post("/api/books", response_model=BookResponse, status_code=201)
async def create_book(request: BookCreateRequest):
    """Add a book to a predefined shelf."""
    lib = get_library()
    try:
        if request.custom_shelf:
            lib.custom_shelf_service.require_shelf(request.custom_shelf)
        book = lib.add_book(request.title, shelf=request.shelf, author=request.author)
        if request.custom_shelf:
            lib.add_to_custom_shelf(book.id, request.custom_shelf)
    except ShelfNotFoundError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return book_to_response(book)


@app.get("/api/books/{book_id}", response_model=BookResponse)
async def get_book(book_id: int):
    """Get a single book."""
    lib = get_library()
    return book_to_response(_get_book_or_404(lib, book_id))


@app.patch("/api/books/{book_id}", response_model=BookResponse)
async def update_book(book_id: int, update: BookUpdateRequest):
    """Retitle a book or move it to another shelf."""
    lib = get_library()
    book = _get_book_or_404(lib, book_id)

    try:
        # Validate every field before the first commit so a bad field changes nothing
        if update.title is not None and not update.title.strip():
            raise ValueError("Book title cannot be empty")
        shelf_name = None
        if update.shelf is not None:
            shelf_name = get_predefined_shelf_name(update.shelf)
            if shelf_name is None:
                raise ShelfNotFoundError(update.shelf)
        if update.custom_shelf is not None:
            lib.custom_shelf_service.require_shelf(update.custom_shelf)

        if update.title is not None:
            lib.rename_book(book_id, update.title)
        if shelf_name is not None:
            lib.move_book(book_id, shelf_name)
        if update.custom_shelf is not None:
            lib.add_to_custom_shelf(book_id, update.custom_shelf)
    except ShelfNotFoundError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return book_to_response(book)


@app.delete("/api/books/{book_id}")
async def delete_book(book_id: int):
    """Delete a book."""
    lib = get_library()
    book = _get_book_or_404(lib, book_id)
    title = book.title
    lib.delete_book(book_id)
    return {"message": f"Deleted '{title}'"}


@app.get("/api/custom-shelves", response_model=List[ShelfResponse])
async def list_custom_shelves():
    """List custom shelves by name."""
    lib = get_library()
    return [
        ShelfResponse(name=shelf.name, book_count=len(shelf.books))
        for shelf in lib.custom_shelves()
    ]


@app.post("/api/custom-shelves", response_model=ShelfResponse, status_code=201)
async def create_custom_shelf(request: CustomShelfCreateRequest):
    """Create a custom shelf."""
    lib = get_library()
    try:
        shelf = lib.create_custom_shelf(request.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ShelfResponse(name=shelf.name, book_count=0)


@app.get("/api/custom-shelves/{name}/books", response_model=List[BookResponse])
async def list_custom_shelf_books(name: str):
    """List the books on a custom shelf."""
    lib = get_library()
    try:
        books = lib.books_in_custom_shelf(name)
    except ShelfNotFoundError:
        raise HTTPException(status_code=404, detail=f"Shelf not found: {name}")
    return _sorted_books(books)


@app.delete("/api/custom-shelves/{name}")
async def delete_custom_shelf(name: str):
    """Delete a custom shelf; its books stay on their predefined shelves."""
    lib = get_library()
    try:
        lib.delete_custom_shelf(name)
    except ShelfNotFoundError:
        raise HTTPException(status_code=404, detail=f"Shelf not found: {name}")
    return {"message": f"Deleted shelf '{name}'"}


@app.get("/api/stats", response_model=LibraryStats)
async def get_stats():
    """Get library statistics."""
    lib = get_library()
    return LibraryStats(**lib.stats())
