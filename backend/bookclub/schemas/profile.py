from pydantic import BaseModel, EmailStr


class ProfileResponse(BaseModel):
    id: int
    email: EmailStr
    display_name: str | None
    is_admin: bool

    class Config:
        from_attributes = True


class ProfileSummary(BaseModel):
    """Directory entry used for attribution and @mention autocomplete."""

    id: int
    display_name: str | None
    label: str  # display name, or the email's local part
