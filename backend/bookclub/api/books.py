from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bookclub.core.database import get_db
from bookclub.schemas.book import BookResponse, RatingAggregate
from bookclub.schemas.reading_status import ReadingStatusResponse, ReadingStatusUpdate, WhoIsIn
from bookclub.schemas.review import ReviewResponse, ReviewUpsert
from bookclub.services import (
    auth_service,
    book_service,
    profile_service,
    reading_status_service,
    review_service,
)

router = APIRouter()


@router.get("/", response_model=list[BookResponse])
def list_shelf(
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    """The shelf: Current book first, then read books newest first."""
    return book_service.list_shelf(db)


@router.get("/current", response_model=BookResponse | None)
def get_current_book(
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    """The book the team is reading now, or null."""
    return book_service.get_current_book(db)


@router.get("/{book_id}", response_model=BookResponse)
def get_book(
    book_id: int,
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    return book_service.get_book(db, book_id)


@router.get("/{book_id}/rating", response_model=RatingAggregate)
def get_rating(
    book_id: int,
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Average rating (null when nobody rated) and review count."""
    return review_service.compute_aggregate(db, book_id)


@router.get("/{book_id}/reviews", response_model=list[ReviewResponse])
def list_reviews(
    book_id: int,
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    return review_service.list_reviews(db, book_id)


@router.put("/{book_id}/reviews/me", response_model=ReviewResponse)
def save_my_review(
    book_id: int,
    review: ReviewUpsert,
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Create or update the caller's review of a book."""
    saved = review_service.upsert_review(
        db, book_id, current_user.id, rating=review.rating, thoughts=review.thoughts
    )
    return review_service.to_response(saved, profile_service.display_label(current_user))


@router.put("/{book_id}/reading-status", response_model=ReadingStatusResponse)
def set_reading_status(
    book_id: int,
    update: ReadingStatusUpdate,
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    return reading_status_service.set_status(db, book_id, current_user.id, update.status)


@router.get("/{book_id}/whos-in", response_model=WhoIsIn)
def whos_in(
    book_id: int,
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Members who are in on a book, with a per-status breakdown."""
    return reading_status_service.who_is_in(db, book_id)
