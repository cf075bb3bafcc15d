from datetime import datetime

from pydantic import BaseModel, Field

from bookclub.models.enums import BookStatus
from bookclub.schemas.book import BookResponse


class ProposalCreate(BaseModel):
    title: str = Field(..., max_length=500)
    author: str = Field(..., max_length=255)
    cover_url: str | None = Field(None, max_length=1000)
    why_read: str | None = None


class ProposalResponse(BaseModel):
    id: int
    title: str
    author: str
    cover_url: str | None
    why_read: str | None
    proposed_by: int
    created_at: datetime
    is_active: bool

    class Config:
        from_attributes = True


class RankedProposal(ProposalResponse):
    vote_count: int
    voted_by_me: bool = False


class VoteResult(BaseModel):
    proposal_id: int
    voted: bool
    vote_count: int


class PromoteRequest(BaseModel):
    status: BookStatus = BookStatus.CURRENT


class PromoteResult(BaseModel):
    book: BookResponse
    proposal_id: int
