from datetime import datetime

from pydantic import BaseModel, Field

from bookclub.models.enums import ReactionType


class ReviewUpsert(BaseModel):
    rating: int | None = Field(None, ge=1, le=5)
    thoughts: str


class ReviewResponse(BaseModel):
    id: int
    book_id: int
    user_id: int
    author_name: str
    rating: int | None
    thoughts: str
    created_at: datetime
    updated_at: datetime


class ReactionCounts(BaseModel):
    review_id: int
    counts: dict[ReactionType, int]
    mine: list[ReactionType] = []


class ReactionToggleResult(ReactionCounts):
    type: ReactionType
    active: bool


class CommentCreate(BaseModel):
    body: str


class CommentResponse(BaseModel):
    id: int
    review_id: int
    user_id: int
    author_name: str
    body: str
    created_at: datetime
    mentioned_user_ids: list[int] = []
