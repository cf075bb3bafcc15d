from bookclub.schemas.book import BookCreate, BookResponse, RatingAggregate
from bookclub.schemas.notification import Inbox, NotificationResponse
from bookclub.schemas.profile import ProfileResponse, ProfileSummary
from bookclub.schemas.proposal import (
    PromoteRequest,
    PromoteResult,
    ProposalCreate,
    ProposalResponse,
    RankedProposal,
    VoteResult,
)
from bookclub.schemas.reading_status import (
    Participant,
    ReadingStatusResponse,
    ReadingStatusUpdate,
    WhoIsIn,
)
from bookclub.schemas.review import (
    CommentCreate,
    CommentResponse,
    ReactionCounts,
    ReactionToggleResult,
    ReviewResponse,
    ReviewUpsert,
)
from bookclub.schemas.stats import ReviewerAverage, ReviewerCount, TeamStats

__all__ = [
    "BookCreate",
    "BookResponse",
    "RatingAggregate",
    "Inbox",
    "NotificationResponse",
    "ProfileResponse",
    "ProfileSummary",
    "PromoteRequest",
    "PromoteResult",
    "ProposalCreate",
    "ProposalResponse",
    "RankedProposal",
    "VoteResult",
    "Participant",
    "ReadingStatusResponse",
    "ReadingStatusUpdate",
    "WhoIsIn",
    "CommentCreate",
    "CommentResponse",
    "ReactionCounts",
    "ReactionToggleResult",
    "ReviewResponse",
    "ReviewUpsert",
    "ReviewerAverage",
    "ReviewerCount",
    "TeamStats",
]
