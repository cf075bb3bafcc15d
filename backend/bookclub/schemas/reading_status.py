from datetime import datetime

from pydantic import BaseModel

from bookclub.models.enums import ReadingStatusValue


class ReadingStatusUpdate(BaseModel):
    status: ReadingStatusValue


class ReadingStatusResponse(BaseModel):
    book_id: int
    user_id: int
    status: ReadingStatusValue
    updated_at: datetime

    class Config:
        from_attributes = True


class Participant(BaseModel):
    user_id: int
    name: str
    status: ReadingStatusValue
    updated_at: datetime


class WhoIsIn(BaseModel):
    book_id: int
    count: int
    participants: list[Participant]
    breakdown: dict[ReadingStatusValue, int]  # every status, participating or not
