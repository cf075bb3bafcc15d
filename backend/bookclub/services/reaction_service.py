from sqlalchemy import func
from sqlalchemy.orm import Session

from bookclub.core.exceptions import ValidationError
from bookclub.core.store import handle_store_errors, toggle_unique
from bookclub.models.enums import ReactionType
from bookclub.models.review import Reaction
from bookclub.schemas.review import ReactionCounts, ReactionToggleResult
from bookclub.services.review_service import get_review


def coerce_reaction_type(value: ReactionType | str) -> ReactionType:
    try:
        return ReactionType(value)
    except ValueError as e:
        raise ValidationError(f"Unknown reaction type {value!r}") from e


def counts_by_type(db: Session, review_id: int, viewer_id: int | None = None) -> ReactionCounts:
    """Tally every reaction type on a review from the raw reaction rows."""
    get_review(db, review_id)

    counts = {t: 0 for t in ReactionType}
    rows = (
        db.query(Reaction.type, func.count(Reaction.id))
        .filter(Reaction.review_id == review_id)
        .group_by(Reaction.type)
        .all()
    )
    for reaction_type, count in rows:
        counts[reaction_type] = count

    mine: list[ReactionType] = []
    if viewer_id is not None:
        mine = sorted(
            (
                row.type
                for row in db.query(Reaction.type)
                .filter(Reaction.review_id == review_id, Reaction.user_id == viewer_id)
                .all()
            ),
            key=list(ReactionType).index,
        )

    return ReactionCounts(review_id=review_id, counts=counts, mine=mine)


@handle_store_errors
def toggle_reaction(
    db: Session,
    review_id: int,
    user_id: int,
    reaction_type: ReactionType | str,
) -> ReactionToggleResult:
    """Add or remove one reaction type; applying it twice is a no-op."""
    reaction_type = coerce_reaction_type(reaction_type)
    get_review(db, review_id)

    active = toggle_unique(
        db, Reaction, review_id=review_id, user_id=user_id, type=reaction_type
    )
    tally = counts_by_type(db, review_id, viewer_id=user_id)
    return ReactionToggleResult(
        review_id=review_id,
        counts=tally.counts,
        mine=tally.mine,
        type=reaction_type,
        active=active,
    )
