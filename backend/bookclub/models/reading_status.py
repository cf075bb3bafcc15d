from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookclub.core.database import Base
from bookclub.models.enums import ReadingStatusValue, string_enum


class ReadingStatus(Base):
    """A member's personal status for a book. One per (book, user)."""

    __tablename__ = "reading_statuses"
    __table_args__ = (
        UniqueConstraint("book_id", "user_id", name="unique_book_user_status"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    book_id: Mapped[int] = mapped_column(ForeignKey("books.id"), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("profiles.id"), index=True)
    status: Mapped[ReadingStatusValue] = mapped_column(
        string_enum(ReadingStatusValue, "reading_status_value")
    )
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    profile: Mapped["Profile"] = relationship()


from bookclub.models.profile import Profile  # noqa: E402, F811
