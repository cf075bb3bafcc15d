from pydantic import BaseModel


class ReviewerCount(BaseModel):
    name: str
    count: int


class ReviewerAverage(BaseModel):
    name: str
    avg: float
    count: int


class TeamStats(BaseModel):
    books_read: int
    team_average: float | None
    most_reviews: list[ReviewerCount]
    highest_average: list[ReviewerAverage]
    lowest_average: list[ReviewerAverage]
