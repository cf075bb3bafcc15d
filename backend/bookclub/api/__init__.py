from fastapi import APIRouter

from bookclub.api import admin, books, notifications, profiles, proposals, reviews, stats

router = APIRouter()

router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
router.include_router(books.router, prefix="/books", tags=["books"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(proposals.router, prefix="/proposals", tags=["proposals"])
router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
router.include_router(stats.router, prefix="/stats", tags=["stats"])
