"""
Write helpers shared by the services.

Every at-most-one-per-key table carries a UNIQUE constraint. These helpers
lean on it instead of check-then-insert: a duplicate insert from a
concurrent session is rolled back and reported as ConflictError, which the
toggle and upsert helpers absorb as "already in that state".
"""

from functools import wraps
from typing import Any, Callable, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from bookclub.core.database import Base
from bookclub.core.exceptions import ConflictError, StoreError
from bookclub.core.logging import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def handle_store_errors(function: Callable) -> Callable:
    """
    Roll back the session and translate SQLAlchemy failures.

    The wrapped function must take the session as its first argument.
    IntegrityError becomes ConflictError, any other SQLAlchemyError
    becomes StoreError.
    """

    @wraps(function)
    def wrapper(db: Session, *args, **kwargs):
        try:
            return function(db, *args, **kwargs)
        except IntegrityError as e:
            db.rollback()
            logger.warning(
                f"{function.__name__} rejected by a constraint",
                extra={"extra_fields": {"operation": function.__name__, "error": str(e.orig)}},
            )
            raise ConflictError(f"Data integrity violation in {function.__name__}") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                f"{function.__name__} failed",
                extra={"extra_fields": {"operation": function.__name__, "error": str(e)}},
                exc_info=True,
            )
            raise StoreError(f"Database operation failed: {function.__name__}") from e

    return wrapper


def insert_unique(db: Session, row: ModelT) -> ModelT:
    """Insert and commit a row, raising ConflictError on a duplicate key."""
    db.add(row)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(f"{type(row).__name__} already exists") from e
    db.refresh(row)
    return row


def toggle_unique(db: Session, model: type[ModelT], **key: Any) -> bool:
    """
    Delete the row matching ``key`` if present, otherwise insert it.

    Returns whether the row is present afterwards. Losing an insert race
    to another session means the row exists, so that counts as present.
    Any other rejected insert (a dangling foreign key, a NULL key) finds no
    row on the re-check and the ConflictError propagates.
    """
    deleted = db.query(model).filter_by(**key).delete(synchronize_session=False)
    if deleted:
        db.commit()
        return False

    try:
        insert_unique(db, model(**key))
    except ConflictError:
        if db.query(model).filter_by(**key).first() is None:
            raise
        logger.info(
            f"{model.__name__} already present, treating toggle as no-op",
            extra={"extra_fields": {k: str(v) for k, v in key.items()}},
        )
    return True


def upsert_unique(
    db: Session,
    model: type[ModelT],
    key: dict[str, Any],
    values: dict[str, Any],
) -> ModelT:
    """
    Insert a row for ``key`` or update the existing one with ``values``.

    If a concurrent session inserts the same key first, the insert is
    retried as an update of that row (last write wins).
    """
    row = db.query(model).filter_by(**key).first()
    if row is None:
        try:
            return insert_unique(db, model(**key, **values))
        except ConflictError:
            row = db.query(model).filter_by(**key).first()
            if row is None:
                raise
            logger.info(
                f"{model.__name__} inserted concurrently, updating instead",
                extra={"extra_fields": {k: str(v) for k, v in key.items()}},
            )

    for field, value in values.items():
        setattr(row, field, value)
    db.commit()
    db.refresh(row)
    return row
