from sqlalchemy import func
from sqlalchemy.orm import Session

from bookclub.core.config import get_settings
from bookclub.core.exceptions import NotFoundError
from bookclub.core.store import handle_store_errors
from bookclub.models.enums import NotificationType
from bookclub.models.notification import Notification


def build_notification(
    recipient_id: int,
    type: NotificationType | str,
    text: str,
    book_id: int | None = None,
    review_id: int | None = None,
    comment_id: int | None = None,
) -> Notification:
    """Unsaved unread notification, for callers batching it into their own transaction."""
    return Notification(
        recipient_id=recipient_id,
        type=type.value if isinstance(type, NotificationType) else str(type),
        text=text,
        is_read=False,
        book_id=book_id,
        review_id=review_id,
        comment_id=comment_id,
    )


@handle_store_errors
def notify(
    db: Session,
    recipient_id: int,
    type: NotificationType | str,
    text: str,
    book_id: int | None = None,
    review_id: int | None = None,
    comment_id: int | None = None,
) -> Notification:
    notification = build_notification(recipient_id, type, text, book_id, review_id, comment_id)
    db.add(notification)
    db.commit()
    db.refresh(notification)
    return notification


def list_notifications(db: Session, recipient_id: int, limit: int | None = None) -> list[Notification]:
    """Newest notifications for one recipient."""
    limit = limit or get_settings().NOTIFICATION_PAGE_SIZE
    return (
        db.query(Notification)
        .filter(Notification.recipient_id == recipient_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
        .all()
    )


def unread_count(db: Session, recipient_id: int) -> int:
    return (
        db.query(func.count(Notification.id))
        .filter(Notification.recipient_id == recipient_id, Notification.is_read.is_(False))
        .scalar()
        or 0
    )


@handle_store_errors
def mark_read(db: Session, notification_id: int, recipient_id: int) -> Notification:
    # Other members' notifications are reported as missing
    notification = (
        db.query(Notification)
        .filter(Notification.id == notification_id, Notification.recipient_id == recipient_id)
        .first()
    )
    if not notification:
        raise NotFoundError(f"Notification {notification_id} not found")

    notification.is_read = True
    db.commit()
    db.refresh(notification)
    return notification


@handle_store_errors
def mark_all_read(db: Session, recipient_id: int) -> int:
    updated = (
        db.query(Notification)
        .filter(Notification.recipient_id == recipient_id, Notification.is_read.is_(False))
        .update({Notification.is_read: True}, synchronize_session=False)
    )
    db.commit()
    return updated
