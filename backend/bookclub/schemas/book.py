from datetime import datetime

from pydantic import BaseModel, Field

from bookclub.models.enums import BookStatus


class BookCreate(BaseModel):
    title: str = Field(..., max_length=500)
    author: str = Field(..., max_length=255)
    cover_url: str | None = Field(None, max_length=1000)
    status: BookStatus = BookStatus.READ


class BookResponse(BaseModel):
    id: int
    title: str
    author: str
    cover_url: str | None
    status: BookStatus
    date_added: datetime

    class Config:
        from_attributes = True


class RatingAggregate(BaseModel):
    book_id: int
    review_count: int
    # None means "no rating yet", never 0.0
    average_rating: float | None
