from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bookclub.core.database import get_db
from bookclub.schemas.notification import Inbox, NotificationResponse
from bookclub.services import auth_service, notification_service

router = APIRouter()


@router.get("/", response_model=Inbox)
def get_inbox(
    limit: int | None = Query(None, ge=1, le=200),
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    """The caller's newest notifications and unread count."""
    return Inbox(
        unread_count=notification_service.unread_count(db, current_user.id),
        items=notification_service.list_notifications(db, current_user.id, limit=limit),
    )


@router.post("/read-all")
def mark_all_read(
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    updated = notification_service.mark_all_read(db, current_user.id)
    return {"status": "updated", "count": updated}


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_read(
    notification_id: int,
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    return notification_service.mark_read(db, notification_id, current_user.id)
