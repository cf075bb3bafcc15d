from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bookclub.core.database import get_db
from bookclub.schemas.stats import TeamStats
from bookclub.services import auth_service, stats_service

router = APIRouter()


@router.get("/", response_model=TeamStats)
def get_team_stats(
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Books read, team average and reviewer leaderboards."""
    return stats_service.team_stats(db)
