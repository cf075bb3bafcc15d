"""
Review comments and the @mentions they carry.

A comment, its mentions and the mention notifications are written in one
transaction: either all of them land or none do.
"""

from sqlalchemy.orm import Session

from bookclub.core.exceptions import ValidationError
from bookclub.core.logging import get_logger
from bookclub.core.store import handle_store_errors
from bookclub.models.enums import NotificationType
from bookclub.models.review import Comment, Mention
from bookclub.schemas.review import CommentResponse
from bookclub.services import profile_service
from bookclub.services.mentions import extract_mention_tokens, resolve_mentions
from bookclub.services.notification_service import build_notification
from bookclub.services.review_service import get_review

logger = get_logger(__name__)


def _to_response(comment: Comment, author_name: str, mentioned: list[int]) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        review_id=comment.review_id,
        user_id=comment.user_id,
        author_name=author_name,
        body=comment.body,
        created_at=comment.created_at,
        mentioned_user_ids=mentioned,
    )


@handle_store_errors
def post_comment(db: Session, review_id: int, user_id: int, body: str) -> CommentResponse:
    """
    Add a comment to a review and notify everyone it mentions.

    Each distinct @name that equals a member's display name (ignoring case)
    yields one Mention and one notification, however often it repeats.
    Unknown names are left as plain text.
    """
    text = (body or "").strip()
    if not text:
        raise ValidationError("Write a comment first.")

    review = get_review(db, review_id)
    author = profile_service.get_profile(db, user_id)

    comment = Comment(review_id=review.id, user_id=author.id, body=text)
    db.add(comment)
    db.flush()

    tokens = extract_mention_tokens(text)
    targets = resolve_mentions(tokens, profile_service.list_profiles(db)) if tokens else []

    author_name = profile_service.display_label(author)
    for target in targets:
        db.add(Mention(comment_id=comment.id, mentioned_user_id=target.id))
        db.add(
            build_notification(
                recipient_id=target.id,
                type=NotificationType.MENTION,
                text=f"{author_name} mentioned you in a comment",
                book_id=review.book_id,
                review_id=review.id,
                comment_id=comment.id,
            )
        )

    db.commit()
    db.refresh(comment)

    mentioned = [t.id for t in targets]
    logger.info(
        "Comment posted",
        extra={
            "extra_fields": {
                "comment_id": comment.id,
                "review_id": review_id,
                "tokens": len(tokens),
                "mentioned": mentioned,
            }
        },
    )
    return _to_response(comment, author_name, mentioned)


def list_comments(db: Session, review_id: int) -> list[CommentResponse]:
    """Comments on a review, oldest first."""
    get_review(db, review_id)

    comments = (
        db.query(Comment)
        .filter(Comment.review_id == review_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .all()
    )
    if not comments:
        return []

    names = profile_service.labels_for(db, {c.user_id for c in comments})
    mentions: dict[int, list[int]] = {c.id: [] for c in comments}
    for mention in (
        db.query(Mention)
        .filter(Mention.comment_id.in_(mentions.keys()))
        .order_by(Mention.id)
        .all()
    ):
        mentions[mention.comment_id].append(mention.mentioned_user_id)

    return [_to_response(c, names[c.user_id], mentions[c.id]) for c in comments]
