from sqlalchemy import func
from sqlalchemy.orm import Session

from bookclub.core.exceptions import NotFoundError
from bookclub.models.profile import Profile
from bookclub.schemas.profile import ProfileSummary


def display_label(profile: Profile | None) -> str:
    """Name shown for a member: display name, else email local part."""
    if profile is None:
        return "someone"
    if profile.display_name and profile.display_name.strip():
        return profile.display_name.strip()
    if profile.email:
        return profile.email.split("@")[0]
    return "someone"


def get_profile(db: Session, profile_id: int) -> Profile:
    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if not profile:
        raise NotFoundError(f"Profile {profile_id} not found")
    return profile


def get_profile_by_email(db: Session, email: str) -> Profile | None:
    return db.query(Profile).filter(func.lower(Profile.email) == email.lower()).first()


def list_profiles(db: Session) -> list[Profile]:
    """All members, ordered by display name."""
    return db.query(Profile).order_by(Profile.display_name, Profile.id).all()


def list_directory(db: Session) -> list[ProfileSummary]:
    return [
        ProfileSummary(id=p.id, display_name=p.display_name, label=display_label(p))
        for p in list_profiles(db)
    ]


def labels_for(db: Session, profile_ids: set[int]) -> dict[int, str]:
    """Map profile ids to display labels in one query."""
    if not profile_ids:
        return {}
    profiles = db.query(Profile).filter(Profile.id.in_(profile_ids)).all()
    labels = {p.id: display_label(p) for p in profiles}
    return {pid: labels.get(pid, "someone") for pid in profile_ids}


def find_by_display_name(db: Session, name: str) -> list[Profile]:
    """Profiles whose display name equals ``name``, ignoring case."""
    wanted = name.strip().lower()
    if not wanted:
        return []
    return (
        db.query(Profile)
        .filter(func.lower(Profile.display_name) == wanted)
        .order_by(Profile.id)
        .all()
    )
