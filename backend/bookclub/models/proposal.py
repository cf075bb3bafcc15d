from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookclub.core.database import Base


class Proposal(Base):
    """A nominated book waiting in the Up Next backlog."""

    __tablename__ = "book_proposals"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(500))
    author: Mapped[str] = mapped_column(String(255))
    cover_url: Mapped[str | None] = mapped_column(String(1000))
    why_read: Mapped[str | None] = mapped_column(Text)  # the pitch
    proposed_by: Mapped[int] = mapped_column(ForeignKey("profiles.id"), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Cleared on promotion or withdrawal
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)

    # Relationships
    votes: Mapped[list["Vote"]] = relationship(
        back_populates="proposal", cascade="all, delete-orphan"
    )


class Vote(Base):
    """One team member's vote for a proposal."""

    __tablename__ = "book_votes"
    __table_args__ = (
        UniqueConstraint("proposal_id", "user_id", name="unique_proposal_user_vote"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    proposal_id: Mapped[int] = mapped_column(ForeignKey("book_proposals.id"), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("profiles.id"), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    proposal: Mapped["Proposal"] = relationship(back_populates="votes")
