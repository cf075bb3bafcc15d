from sqlalchemy import func
from sqlalchemy.orm import Session

from bookclub.core.exceptions import NotFoundError, ValidationError
from bookclub.core.logging import get_logger
from bookclub.core.store import handle_store_errors, upsert_unique
from bookclub.models.review import Review
from bookclub.schemas.book import RatingAggregate
from bookclub.schemas.review import ReviewResponse
from bookclub.services import book_service, profile_service

logger = get_logger(__name__)


def get_review(db: Session, review_id: int) -> Review:
    review = db.query(Review).filter(Review.id == review_id).first()
    if not review:
        raise NotFoundError(f"Review {review_id} not found")
    return review


def to_response(review: Review, author_name: str) -> ReviewResponse:
    return ReviewResponse(
        id=review.id,
        book_id=review.book_id,
        user_id=review.user_id,
        author_name=author_name,
        rating=review.rating,
        thoughts=review.thoughts,
        created_at=review.created_at,
        updated_at=review.updated_at,
    )


@handle_store_errors
def upsert_review(
    db: Session,
    book_id: int,
    user_id: int,
    rating: int | None,
    thoughts: str,
) -> Review:
    """
    Save the user's review of a book, creating it on first save.

    ``rating=None`` records an unrated text review. Saving the same values
    again leaves the single row unchanged.
    """
    if rating is not None and not 1 <= rating <= 5:
        raise ValidationError("Rating must be between 1 and 5.")
    thoughts = (thoughts or "").strip()
    if not thoughts:
        raise ValidationError("Thoughts are required.")
    book_service.get_book(db, book_id)

    review = upsert_unique(
        db,
        Review,
        key={"book_id": book_id, "user_id": user_id},
        values={"rating": rating, "thoughts": thoughts},
    )
    logger.info(
        "Review saved",
        extra={"extra_fields": {"review_id": review.id, "book_id": book_id, "rated": rating is not None}},
    )
    return review


def compute_aggregate(db: Session, book_id: int) -> RatingAggregate:
    """
    Average rating and review count, recomputed from the review rows.

    The count includes unrated reviews. The average only covers rated ones
    and is None when there are none.
    """
    book_service.get_book(db, book_id)

    count, average = (
        db.query(func.count(Review.id), func.avg(Review.rating))
        .filter(Review.book_id == book_id)
        .one()
    )
    return RatingAggregate(
        book_id=book_id,
        review_count=count or 0,
        average_rating=float(average) if average is not None else None,
    )


def list_reviews(db: Session, book_id: int) -> list[ReviewResponse]:
    """Reviews of a book, newest first, with author names."""
    book_service.get_book(db, book_id)

    reviews = (
        db.query(Review)
        .filter(Review.book_id == book_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )
    names = profile_service.labels_for(db, {r.user_id for r in reviews})
    return [to_response(r, names[r.user_id]) for r in reviews]


def get_review_detail(db: Session, review_id: int) -> ReviewResponse:
    review = get_review(db, review_id)
    names = profile_service.labels_for(db, {review.user_id})
    return to_response(review, names[review.user_id])
