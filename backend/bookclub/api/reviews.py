from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bookclub.core.database import get_db
from bookclub.models.enums import ReactionType
from bookclub.schemas.review import (
    CommentCreate,
    CommentResponse,
    ReactionCounts,
    ReactionToggleResult,
    ReviewResponse,
)
from bookclub.services import auth_service, comment_service, reaction_service, review_service

router = APIRouter()


@router.get("/{review_id}", response_model=ReviewResponse)
def get_review(
    review_id: int,
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    return review_service.get_review_detail(db, review_id)


@router.get("/{review_id}/reactions", response_model=ReactionCounts)
def get_reactions(
    review_id: int,
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    return reaction_service.counts_by_type(db, review_id, viewer_id=current_user.id)


@router.post("/{review_id}/reactions/{reaction_type}", response_model=ReactionToggleResult)
def toggle_reaction(
    review_id: int,
    reaction_type: ReactionType,
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Add the reaction, or remove it if the caller already reacted."""
    return reaction_service.toggle_reaction(db, review_id, current_user.id, reaction_type)


@router.get("/{review_id}/comments", response_model=list[CommentResponse])
def list_comments(
    review_id: int,
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    return comment_service.list_comments(db, review_id)


@router.post(
    "/{review_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def post_comment(
    review_id: int,
    comment: CommentCreate,
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Reply to a review; @Name mentions notify the named members."""
    return comment_service.post_comment(db, review_id, current_user.id, comment.body)
