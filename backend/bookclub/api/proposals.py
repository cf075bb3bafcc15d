from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from bookclub.core.config import get_settings
from bookclub.core.database import get_db
from bookclub.schemas.book import BookResponse
from bookclub.schemas.proposal import (
    PromoteRequest,
    PromoteResult,
    ProposalCreate,
    ProposalResponse,
    RankedProposal,
    VoteResult,
)
from bookclub.services import auth_service, proposal_service

router = APIRouter()


@router.get("/", response_model=list[RankedProposal])
def list_proposals(
    limit: int | None = Query(None, ge=1, le=100),
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Active proposals ranked by votes, newest first on ties."""
    return proposal_service.rank_proposals(db, user_id=current_user.id, limit=limit)


@router.get("/top", response_model=list[RankedProposal])
def top_proposals(
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    """The few most-voted proposals shown on the home page."""
    limit = get_settings().HOME_TOP_PROPOSALS
    return proposal_service.rank_proposals(db, user_id=current_user.id, limit=limit)


@router.post("/", response_model=ProposalResponse, status_code=status.HTTP_201_CREATED)
def propose(
    proposal: ProposalCreate,
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    return proposal_service.propose(
        db,
        title=proposal.title,
        author=proposal.author,
        cover_url=proposal.cover_url,
        why_read=proposal.why_read,
        proposer_id=current_user.id,
    )


@router.post("/{proposal_id}/vote", response_model=VoteResult)
def toggle_vote(
    proposal_id: int,
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Vote for a proposal, or take the vote back if already cast."""
    return proposal_service.toggle_vote(db, proposal_id, current_user.id)


@router.post("/{proposal_id}/promote", response_model=PromoteResult)
def promote(
    proposal_id: int,
    request: PromoteRequest | None = None,
    current_user=Depends(auth_service.require_admin),
    db: Session = Depends(get_db),
):
    """Turn a proposal into a book (Current by default) and close it."""
    target = request.status if request else PromoteRequest().status
    book = proposal_service.promote(db, proposal_id, target)
    return PromoteResult(book=BookResponse.model_validate(book), proposal_id=proposal_id)


@router.post("/{proposal_id}/withdraw", response_model=ProposalResponse)
def withdraw(
    proposal_id: int,
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    return proposal_service.withdraw(db, proposal_id, current_user)
