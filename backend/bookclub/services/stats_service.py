from sqlalchemy import func
from sqlalchemy.orm import Session

from bookclub.core.config import get_settings
from bookclub.models.book import Book
from bookclub.models.enums import BookStatus
from bookclub.models.review import Review
from bookclub.schemas.stats import ReviewerAverage, ReviewerCount, TeamStats
from bookclub.services import profile_service


def team_stats(db: Session) -> TeamStats:
    """
    Team-wide reading stats, recomputed from raw rows.

    Only rated reviews feed the averages and leaderboards. The average
    leaderboards skip anyone with fewer than LEADERBOARD_MIN_RATINGS ratings.
    """
    settings = get_settings()

    books_read = (
        db.query(func.count(Book.id)).filter(Book.status == BookStatus.READ).scalar() or 0
    )

    per_user = (
        db.query(
            Review.user_id,
            func.count(Review.id).label("count"),
            func.sum(Review.rating).label("total"),
        )
        .filter(Review.rating.isnot(None))
        .group_by(Review.user_id)
        .all()
    )

    if not per_user:
        return TeamStats(
            books_read=books_read,
            team_average=None,
            most_reviews=[],
            highest_average=[],
            lowest_average=[],
        )

    rated_total = sum(row.total for row in per_user)
    rated_count = sum(row.count for row in per_user)
    names = profile_service.labels_for(db, {row.user_id for row in per_user})

    rows = [
        {
            "name": names[row.user_id],
            "count": row.count,
            "avg": row.total / row.count,
        }
        for row in per_user
    ]

    size = settings.LEADERBOARD_SIZE
    most = sorted(rows, key=lambda r: r["count"], reverse=True)[:size]
    eligible = [r for r in rows if r["count"] >= settings.LEADERBOARD_MIN_RATINGS]
    highest = sorted(eligible, key=lambda r: r["avg"], reverse=True)[:size]
    lowest = sorted(eligible, key=lambda r: r["avg"])[:size]

    return TeamStats(
        books_read=books_read,
        team_average=rated_total / rated_count,
        most_reviews=[ReviewerCount(name=r["name"], count=r["count"]) for r in most],
        highest_average=[
            ReviewerAverage(name=r["name"], avg=round(r["avg"], 2), count=r["count"])
            for r in highest
        ],
        lowest_average=[
            ReviewerAverage(name=r["name"], avg=round(r["avg"], 2), count=r["count"])
            for r in lowest
        ],
    )
