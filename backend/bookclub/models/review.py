from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookclub.core.database import Base
from bookclub.models.enums import ReactionType, string_enum


class Review(Base):
    """A member's rating and thoughts on a book. One per (book, user)."""

    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("book_id", "user_id", name="unique_book_user_review"),
        CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_review_rating"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    book_id: Mapped[int] = mapped_column(ForeignKey("books.id"), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("profiles.id"), index=True)

    rating: Mapped[int | None] = mapped_column(Integer)  # 1-5, NULL = unrated
    thoughts: Mapped[str] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    book: Mapped["Book"] = relationship(back_populates="reviews")
    author: Mapped["Profile"] = relationship()


class Reaction(Base):
    """A typed reaction on a review. One per (review, user, type)."""

    __tablename__ = "review_reactions"
    __table_args__ = (
        UniqueConstraint("review_id", "user_id", "type", name="unique_review_user_reaction"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    review_id: Mapped[int] = mapped_column(ForeignKey("reviews.id"), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("profiles.id"), index=True)
    type: Mapped[ReactionType] = mapped_column(string_enum(ReactionType, "reaction_type"))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class Comment(Base):
    """Reply on a review. Append-only."""

    __tablename__ = "review_comments"

    id: Mapped[int] = mapped_column(primary_key=True)
    review_id: Mapped[int] = mapped_column(ForeignKey("reviews.id"), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("profiles.id"), index=True)
    body: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    author: Mapped["Profile"] = relationship()
    mentions: Mapped[list["Mention"]] = relationship(back_populates="comment")


class Mention(Base):
    """A resolved @name in a comment."""

    __tablename__ = "comment_mentions"
    __table_args__ = (
        UniqueConstraint("comment_id", "mentioned_user_id", name="unique_comment_mention"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    comment_id: Mapped[int] = mapped_column(ForeignKey("review_comments.id"), index=True)
    mentioned_user_id: Mapped[int] = mapped_column(ForeignKey("profiles.id"), index=True)

    comment: Mapped["Comment"] = relationship(back_populates="mentions")


# Forward references
from bookclub.models.book import Book  # noqa: E402, F811
from bookclub.models.profile import Profile  # noqa: E402, F811
