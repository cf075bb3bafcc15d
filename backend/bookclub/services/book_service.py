"""
Book lifecycle and the single-Current-book rule.

Every transition that can produce a Current book demotes the previous one
inside the same transaction. The partial unique index on ``books.status``
backs this up: when two transitions interleave, the later commit fails
with ConflictError and its whole transaction is rolled back.
"""

from sqlalchemy import case
from sqlalchemy.orm import Session

from bookclub.core.exceptions import NotFoundError, ValidationError
from bookclub.core.logging import get_logger
from bookclub.core.store import handle_store_errors
from bookclub.models.book import Book
from bookclub.models.enums import BookStatus

logger = get_logger(__name__)


def coerce_book_status(value: BookStatus | str) -> BookStatus:
    """Parse a status, rejecting the retired NextUp value and typos."""
    try:
        return BookStatus(value)
    except ValueError as e:
        allowed = ", ".join(s.value for s in BookStatus)
        raise ValidationError(f"Unknown book status {value!r}; expected one of {allowed}") from e


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def get_book(db: Session, book_id: int) -> Book:
    book = db.query(Book).filter(Book.id == book_id).first()
    if not book:
        raise NotFoundError(f"Book {book_id} not found")
    return book


def get_current_book(db: Session) -> Book | None:
    return db.query(Book).filter(Book.status == BookStatus.CURRENT).first()


def list_shelf(db: Session) -> list[Book]:
    """Non-archived books, the Current one first, then newest first."""
    current_first = case((Book.status == BookStatus.CURRENT, 0), else_=1)
    return (
        db.query(Book)
        .filter(Book.status != BookStatus.ARCHIVED)
        .order_by(current_first, Book.date_added.desc(), Book.id.desc())
        .all()
    )


def list_all_books(db: Session) -> list[Book]:
    """Every book including archived ones, newest first (admin view)."""
    return db.query(Book).order_by(Book.date_added.desc(), Book.id.desc()).all()


def _demote_current(db: Session) -> int:
    """Move every Current book to Read. Does not commit."""
    return (
        db.query(Book)
        .filter(Book.status == BookStatus.CURRENT)
        .update({Book.status: BookStatus.READ}, synchronize_session=False)
    )


def add_book(
    db: Session,
    title: str,
    author: str,
    cover_url: str | None = None,
    initial_status: BookStatus | str = BookStatus.READ,
) -> tuple[Book, int]:
    """
    Validate and stage a new book, demoting the Current book when the new
    one is Current. Does not commit; returns the book and the demoted count.
    """
    title = _clean(title)
    author = _clean(author)
    if not title or not author:
        raise ValidationError("Title and author are required.")
    status = coerce_book_status(initial_status)

    demoted = 0
    if status == BookStatus.CURRENT:
        demoted = _demote_current(db)

    book = Book(title=title, author=author, cover_url=_clean(cover_url), status=status)
    db.add(book)
    return book, demoted


@handle_store_errors
def create_book(
    db: Session,
    title: str,
    author: str,
    cover_url: str | None = None,
    initial_status: BookStatus | str = BookStatus.READ,
) -> Book:
    """
    Add a book to the shelf.

    With ``initial_status=Current`` the previous Current book is demoted to
    Read in the same transaction as the insert.
    """
    book, demoted = add_book(db, title, author, cover_url, initial_status)
    db.commit()
    db.refresh(book)

    logger.info(
        f"Book created: {book.title}",
        extra={
            "extra_fields": {
                "book_id": book.id,
                "status": book.status.value,
                "demoted": demoted,
            }
        },
    )
    return book


@handle_store_errors
def set_current(db: Session, book_id: int) -> Book:
    """Make ``book_id`` the only Current book; the previous one becomes Read."""
    book = get_book(db, book_id)

    demoted = _demote_current(db)
    db.query(Book).filter(Book.id == book_id).update(
        {Book.status: BookStatus.CURRENT}, synchronize_session=False
    )
    db.commit()
    db.refresh(book)

    logger.info(
        f"Current book is now {book.title}",
        extra={"extra_fields": {"book_id": book.id, "demoted": demoted}},
    )
    return book


@handle_store_errors
def _set_status(db: Session, book_id: int, status: BookStatus) -> Book:
    book = get_book(db, book_id)
    previous = book.status
    book.status = status
    db.commit()
    db.refresh(book)

    logger.info(
        f"Book {book_id} status {previous.value} -> {status.value}",
        extra={"extra_fields": {"book_id": book_id, "status": status.value}},
    )
    return book


def mark_read(db: Session, book_id: int) -> Book:
    return _set_status(db, book_id, BookStatus.READ)


def archive(db: Session, book_id: int) -> Book:
    return _set_status(db, book_id, BookStatus.ARCHIVED)


def unarchive(db: Session, book_id: int) -> Book:
    """Restore an archived book to the shelf as Read."""
    return _set_status(db, book_id, BookStatus.READ)
