"""
Seed a local database with a few members, books and proposals.

Profiles normally come from the identity provider; this exists so the API
can be exercised locally. Prints a session token per member.
Usage: python -m scripts.seed_dev
"""

from bookclub.core.database import SessionLocal
from bookclub.models.enums import BookStatus
from bookclub.models.profile import Profile
from bookclub.services import auth_service, book_service, proposal_service

MEMBERS = [
    {"email": "alice@example.com", "display_name": "Alice", "is_admin": True},
    {"email": "bob@example.com", "display_name": "Bob", "is_admin": False},
    {"email": "carol@example.com", "display_name": "Carol-Ann", "is_admin": False},
]

BOOKS = [
    {"title": "The Left Hand of Darkness", "author": "Ursula K. Le Guin", "status": BookStatus.READ},
    {"title": "Piranesi", "author": "Susanna Clarke", "status": BookStatus.CURRENT},
]

PROPOSALS = [
    {
        "title": "The Dispossessed",
        "author": "Ursula K. Le Guin",
        "why_read": "We liked the last one.",
    },
    {"title": "Klara and the Sun", "author": "Kazuo Ishiguro", "why_read": None},
]


def seed_dev():
    db = SessionLocal()
    try:
        if db.query(Profile).count():
            print("Database already has profiles, skipping seed.")
            return

        profiles = [Profile(**member) for member in MEMBERS]
        db.add_all(profiles)
        db.commit()

        for book in BOOKS:
            book_service.create_book(
                db, book["title"], book["author"], initial_status=book["status"]
            )

        for proposal in PROPOSALS:
            proposal_service.propose(
                db,
                proposal["title"],
                proposal["author"],
                cover_url=None,
                why_read=proposal["why_read"],
                proposer_id=profiles[1].id,
            )

        for profile in profiles:
            db.refresh(profile)
            token = auth_service.create_access_token(profile.id, profile.email)
            print(f"{profile.display_name}: {token}")
    finally:
        db.close()


if __name__ == "__main__":
    seed_dev()
