from bookclub.models.book import Book
from bookclub.models.enums import (
    PARTICIPATING_STATUSES,
    BookStatus,
    NotificationType,
    ReactionType,
    ReadingStatusValue,
)
from bookclub.models.notification import Notification
from bookclub.models.profile import Profile
from bookclub.models.proposal import Proposal, Vote
from bookclub.models.reading_status import ReadingStatus
from bookclub.models.review import Comment, Mention, Reaction, Review

__all__ = [
    "Profile",
    "Book",
    "Proposal",
    "Vote",
    "Review",
    "Reaction",
    "Comment",
    "Mention",
    "ReadingStatus",
    "Notification",
    "BookStatus",
    "ReactionType",
    "ReadingStatusValue",
    "NotificationType",
    "PARTICIPATING_STATUSES",
]
