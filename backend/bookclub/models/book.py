from datetime import datetime

from sqlalchemy import DateTime, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookclub.core.database import Base
from bookclub.models.enums import BookStatus, string_enum


class Book(Base):
    """A book on the team shelf. Never deleted; Archived is the soft delete."""

    __tablename__ = "books"
    __table_args__ = (
        # At most one row may be Current. A racing transition that would
        # leave two Current rows fails on this index and rolls back.
        Index(
            "uq_books_single_current",
            "status",
            unique=True,
            postgresql_where=text("status = 'Current'"),
            sqlite_where=text("status = 'Current'"),
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(500), index=True)
    author: Mapped[str] = mapped_column(String(255))
    cover_url: Mapped[str | None] = mapped_column(String(1000))
    status: Mapped[BookStatus] = mapped_column(
        string_enum(BookStatus, "book_status"), default=BookStatus.READ, index=True
    )
    date_added: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    reviews: Mapped[list["Review"]] = relationship(back_populates="book")


# Forward references
from bookclub.models.review import Review  # noqa: E402, F811
