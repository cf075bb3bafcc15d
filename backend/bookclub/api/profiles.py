from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bookclub.core.database import get_db
from bookclub.schemas.profile import ProfileResponse, ProfileSummary
from bookclub.services import auth_service, profile_service

router = APIRouter()


@router.get("/me", response_model=ProfileResponse)
def get_me(current_user=Depends(auth_service.get_current_user)):
    """Get the signed-in member's profile."""
    return current_user


@router.get("/", response_model=list[ProfileSummary])
def list_profiles(
    current_user=Depends(auth_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Team directory, used for @mention autocomplete."""
    return profile_service.list_directory(db)
