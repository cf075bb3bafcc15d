"""
Admin endpoints for managing the shelf.

Every route requires a profile with ``is_admin`` set.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bookclub.core.database import get_db
from bookclub.schemas.book import BookCreate, BookResponse
from bookclub.services import auth_service, book_service

router = APIRouter(dependencies=[Depends(auth_service.require_admin)])


@router.get("/books", response_model=list[BookResponse])
def list_all_books(db: Session = Depends(get_db)):
    """Every book including archived ones, newest first."""
    return book_service.list_all_books(db)


@router.post("/books", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
def create_book(book: BookCreate, db: Session = Depends(get_db)):
    """Add a book; adding it as Current moves the old Current book to Read."""
    return book_service.create_book(
        db,
        title=book.title,
        author=book.author,
        cover_url=book.cover_url,
        initial_status=book.status,
    )


@router.post("/books/{book_id}/set-current", response_model=BookResponse)
def set_current(book_id: int, db: Session = Depends(get_db)):
    return book_service.set_current(db, book_id)


@router.post("/books/{book_id}/mark-read", response_model=BookResponse)
def mark_read(book_id: int, db: Session = Depends(get_db)):
    return book_service.mark_read(db, book_id)


@router.post("/books/{book_id}/archive", response_model=BookResponse)
def archive(book_id: int, db: Session = Depends(get_db)):
    return book_service.archive(db, book_id)


@router.post("/books/{book_id}/unarchive", response_model=BookResponse)
def unarchive(book_id: int, db: Session = Depends(get_db)):
    return book_service.unarchive(db, book_id)
