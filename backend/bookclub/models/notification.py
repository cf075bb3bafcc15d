from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bookclub.core.database import Base


class Notification(Base):
    """Inbox entry. Only the recipient flips ``is_read``."""

    __tablename__ = "notifications"

    id: Mapped[int] = mapped_column(primary_key=True)
    recipient_id: Mapped[int] = mapped_column(ForeignKey("profiles.id"), index=True)
    type: Mapped[str] = mapped_column(String(50), index=True)  # see NotificationType
    text: Mapped[str] = mapped_column(Text)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Optional links for the inbox
    book_id: Mapped[int | None] = mapped_column(ForeignKey("books.id"))
    review_id: Mapped[int | None] = mapped_column(ForeignKey("reviews.id"))
    comment_id: Mapped[int | None] = mapped_column(ForeignKey("review_comments.id"))
