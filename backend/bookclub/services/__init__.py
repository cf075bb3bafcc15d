from bookclub.services import (
    auth_service,
    book_service,
    comment_service,
    notification_service,
    profile_service,
    proposal_service,
    reaction_service,
    reading_status_service,
    review_service,
    stats_service,
)
from bookclub.services.mentions import extract_mention_tokens, resolve_mentions

__all__ = [
    "auth_service",
    "book_service",
    "comment_service",
    "notification_service",
    "profile_service",
    "proposal_service",
    "reaction_service",
    "reading_status_service",
    "review_service",
    "stats_service",
    # Mentions
    "extract_mention_tokens",
    "resolve_mentions",
]
