"""
Up Next backlog: proposals, votes and promotion to the shelf.
"""

from sqlalchemy import func
from sqlalchemy.orm import Session

from bookclub.core.exceptions import (
    BookClubError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from bookclub.core.logging import get_logger
from bookclub.core.store import handle_store_errors, toggle_unique
from bookclub.models.book import Book
from bookclub.models.enums import BookStatus
from bookclub.models.profile import Profile
from bookclub.models.proposal import Proposal, Vote
from bookclub.schemas.proposal import RankedProposal, VoteResult
from bookclub.services import book_service

logger = get_logger(__name__)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def get_proposal(db: Session, proposal_id: int) -> Proposal:
    proposal = db.query(Proposal).filter(Proposal.id == proposal_id).first()
    if not proposal:
        raise NotFoundError(f"Proposal {proposal_id} not found")
    return proposal


@handle_store_errors
def propose(
    db: Session,
    title: str,
    author: str,
    cover_url: str | None,
    why_read: str | None,
    proposer_id: int,
) -> Proposal:
    """Nominate a book. Duplicate titles are allowed."""
    title = _clean(title)
    author = _clean(author)
    if not title or not author:
        raise ValidationError("Title and Author are required.")

    proposal = Proposal(
        title=title,
        author=author,
        cover_url=_clean(cover_url),
        why_read=_clean(why_read),
        proposed_by=proposer_id,
        is_active=True,
    )
    db.add(proposal)
    db.commit()
    db.refresh(proposal)

    logger.info(
        f"Proposal submitted: {proposal.title}",
        extra={"extra_fields": {"proposal_id": proposal.id, "proposed_by": proposer_id}},
    )
    return proposal


def count_votes(db: Session, proposal_id: int) -> int:
    return db.query(func.count(Vote.id)).filter(Vote.proposal_id == proposal_id).scalar() or 0


@handle_store_errors
def toggle_vote(db: Session, proposal_id: int, user_id: int) -> VoteResult:
    """
    Remove the user's vote if present, otherwise add it.

    Applying this twice leaves the vote as it was.
    """
    proposal = get_proposal(db, proposal_id)
    if not proposal.is_active:
        raise ValidationError("Voting is closed for this proposal.")

    voted = toggle_unique(db, Vote, proposal_id=proposal_id, user_id=user_id)
    return VoteResult(
        proposal_id=proposal_id,
        voted=voted,
        vote_count=count_votes(db, proposal_id),
    )


def rank_proposals(
    db: Session,
    user_id: int | None = None,
    limit: int | None = None,
) -> list[RankedProposal]:
    """
    Active proposals by vote count, most votes first.

    Ties go to the newest proposal. Counts come from a fresh scan of the
    vote rows on every call.
    """
    proposals = db.query(Proposal).filter(Proposal.is_active).all()

    counts = dict(
        db.query(Vote.proposal_id, func.count(Vote.id))
        .join(Proposal, Proposal.id == Vote.proposal_id)
        .filter(Proposal.is_active)
        .group_by(Vote.proposal_id)
        .all()
    )

    mine: set[int] = set()
    if user_id is not None:
        mine = {
            row.proposal_id
            for row in db.query(Vote.proposal_id).filter(Vote.user_id == user_id).all()
        }

    ranked = sorted(
        proposals,
        key=lambda p: (counts.get(p.id, 0), p.created_at, p.id),
        reverse=True,
    )
    if limit is not None:
        ranked = ranked[:limit]

    return [
        RankedProposal(
            id=p.id,
            title=p.title,
            author=p.author,
            cover_url=p.cover_url,
            why_read=p.why_read,
            proposed_by=p.proposed_by,
            created_at=p.created_at,
            is_active=p.is_active,
            vote_count=counts.get(p.id, 0),
            voted_by_me=p.id in mine,
        )
        for p in ranked
    ]


def _close(db: Session, proposal_id: int) -> int:
    """Deactivate the proposal if it is still active. Does not commit."""
    return (
        db.query(Proposal)
        .filter(Proposal.id == proposal_id, Proposal.is_active.is_(True))
        .update({Proposal.is_active: False}, synchronize_session=False)
    )


@handle_store_errors
def promote(
    db: Session,
    proposal_id: int,
    target_status: BookStatus | str = BookStatus.CURRENT,
) -> Book:
    """
    Turn a proposal into a book and take it off the backlog.

    The proposal is closed with a conditional update and the book is
    staged (demoting the Current book when ``target_status`` is Current)
    in the same transaction, so a promotion either lands whole or not at
    all. Of two admins promoting the same proposal at once, the one whose
    update finds it already closed gets a ValidationError.
    """
    proposal = get_proposal(db, proposal_id)
    if not proposal.is_active:
        raise ValidationError("This proposal has already been promoted or withdrawn.")

    try:
        if not _close(db, proposal_id):
            raise ValidationError("This proposal has already been promoted or withdrawn.")
        book, demoted = book_service.add_book(
            db,
            title=proposal.title,
            author=proposal.author,
            cover_url=proposal.cover_url,
            initial_status=target_status,
        )
    except BookClubError:
        db.rollback()
        raise

    db.commit()
    db.refresh(book)

    logger.info(
        f"Proposal {proposal_id} promoted to book {book.id}",
        extra={"extra_fields": {"status": book.status.value, "demoted": demoted}},
    )
    return book


@handle_store_errors
def withdraw(db: Session, proposal_id: int, actor: Profile) -> Proposal:
    """Take a proposal off the backlog. Only its proposer or an admin may."""
    proposal = get_proposal(db, proposal_id)
    if proposal.proposed_by != actor.id and not actor.is_admin:
        raise PermissionDeniedError("Only the proposer or an admin can withdraw a proposal.")

    if _close(db, proposal_id):
        db.commit()
        logger.info(
            f"Proposal {proposal_id} withdrawn",
            extra={"extra_fields": {"by": actor.id}},
        )
    db.refresh(proposal)
    return proposal
