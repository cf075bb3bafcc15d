from datetime import datetime

from sqlalchemy.orm import Session

from bookclub.core.exceptions import ValidationError
from bookclub.core.store import handle_store_errors, upsert_unique
from bookclub.models.enums import PARTICIPATING_STATUSES, ReadingStatusValue
from bookclub.models.reading_status import ReadingStatus
from bookclub.schemas.reading_status import Participant, WhoIsIn
from bookclub.services import book_service, profile_service


def coerce_reading_status(value: ReadingStatusValue | str) -> ReadingStatusValue:
    """Only the four-value form is accepted; the old In/Out pair is not."""
    try:
        return ReadingStatusValue(value)
    except ValueError as e:
        allowed = ", ".join(s.value for s in ReadingStatusValue)
        raise ValidationError(f"Unknown reading status {value!r}; expected one of {allowed}") from e


@handle_store_errors
def set_status(
    db: Session,
    book_id: int,
    user_id: int,
    status: ReadingStatusValue | str,
) -> ReadingStatus:
    """Record the user's status for a book, replacing any earlier one."""
    status = coerce_reading_status(status)
    book_service.get_book(db, book_id)

    return upsert_unique(
        db,
        ReadingStatus,
        key={"book_id": book_id, "user_id": user_id},
        values={"status": status, "updated_at": datetime.utcnow()},
    )


def get_status(db: Session, book_id: int, user_id: int) -> ReadingStatus | None:
    return (
        db.query(ReadingStatus)
        .filter(ReadingStatus.book_id == book_id, ReadingStatus.user_id == user_id)
        .first()
    )


def who_is_in(db: Session, book_id: int) -> WhoIsIn:
    """Members taking part in a book (In, Reading or Finished), latest first."""
    book_service.get_book(db, book_id)

    rows = (
        db.query(ReadingStatus)
        .filter(ReadingStatus.book_id == book_id)
        .order_by(ReadingStatus.updated_at.desc(), ReadingStatus.id.desc())
        .all()
    )

    breakdown = {s: 0 for s in ReadingStatusValue}
    for row in rows:
        breakdown[row.status] += 1

    active = [row for row in rows if row.status in PARTICIPATING_STATUSES]
    names = profile_service.labels_for(db, {row.user_id for row in active})
    participants = [
        Participant(
            user_id=row.user_id,
            name=names[row.user_id],
            status=row.status,
            updated_at=row.updated_at,
        )
        for row in active
    ]
    return WhoIsIn(
        book_id=book_id,
        count=len(participants),
        participants=participants,
        breakdown=breakdown,
    )
