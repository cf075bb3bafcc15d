from datetime import datetime

from pydantic import BaseModel


class NotificationResponse(BaseModel):
    id: int
    type: str
    text: str
    is_read: bool
    created_at: datetime
    book_id: int | None
    review_id: int | None
    comment_id: int | None

    class Config:
        from_attributes = True


class Inbox(BaseModel):
    unread_count: int
    items: list[NotificationResponse]
