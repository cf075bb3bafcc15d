"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Point the app at SQLite before any bookclub module reads settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ALLOWED_EMAIL_DOMAIN"] = ""

from datetime import datetime, timedelta  # noqa: E402
from typing import Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.exc import OperationalError  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import bookclub.models  # noqa: E402, F401
from bookclub.core.database import Base, get_db  # noqa: E402
from bookclub.main import app  # noqa: E402
from bookclub.models.book import Book  # noqa: E402
from bookclub.models.enums import BookStatus  # noqa: E402
from bookclub.models.profile import Profile  # noqa: E402
from bookclub.models.proposal import Proposal  # noqa: E402
from bookclub.models.review import Review  # noqa: E402
from bookclub.services.auth_service import create_access_token  # noqa: E402

# Create in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def _add_profile(db: Session, email: str, display_name: str | None, is_admin: bool = False) -> Profile:
    profile = Profile(email=email, display_name=display_name, is_admin=is_admin)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


@pytest.fixture
def alice(db: Session) -> Profile:
    """Admin member."""
    return _add_profile(db, "alice@example.com", "Alice", is_admin=True)


@pytest.fixture
def bob(db: Session) -> Profile:
    return _add_profile(db, "bob@example.com", "Bob")


@pytest.fixture
def carol(db: Session) -> Profile:
    return _add_profile(db, "carol@example.com", "Carol-Ann")


def headers_for(profile: Profile) -> dict:
    token = create_access_token(profile.id, profile.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(alice: Profile) -> dict:
    return headers_for(alice)


@pytest.fixture
def member_headers(bob: Profile) -> dict:
    return headers_for(bob)


@pytest.fixture
def test_books(db: Session) -> list[Book]:
    """One Current book and two Read books, oldest first."""
    base = datetime(2024, 1, 1)
    books = [
        Book(title="Piranesi", author="Susanna Clarke", status=BookStatus.READ, date_added=base),
        Book(
            title="The Left Hand of Darkness",
            author="Ursula K. Le Guin",
            status=BookStatus.READ,
            date_added=base + timedelta(days=1),
        ),
        Book(
            title="Project Hail Mary",
            author="Andy Weir",
            status=BookStatus.CURRENT,
            date_added=base + timedelta(days=2),
        ),
    ]
    db.add_all(books)
    db.commit()

    for book in books:
        db.refresh(book)

    return books


@pytest.fixture
def test_proposals(db: Session, bob: Profile) -> list[Proposal]:
    """Two active proposals, the second created later."""
    base = datetime(2024, 3, 1)
    proposals = [
        Proposal(
            title="The Dispossessed",
            author="Ursula K. Le Guin",
            why_read="More Le Guin",
            proposed_by=bob.id,
            created_at=base,
        ),
        Proposal(
            title="Klara and the Sun",
            author="Kazuo Ishiguro",
            proposed_by=bob.id,
            created_at=base + timedelta(hours=1),
        ),
    ]
    db.add_all(proposals)
    db.commit()

    for proposal in proposals:
        db.refresh(proposal)

    return proposals


@pytest.fixture
def test_review(db: Session, bob: Profile, test_books: list[Book]) -> Review:
    """Bob's review of the Current book."""
    review = Review(book_id=test_books[2].id, user_id=bob.id, rating=4, thoughts="Loved Rocky.")
    db.add(review)
    db.commit()
    db.refresh(review)
    return review


def current_count(db: Session) -> int:
    db.expire_all()
    return db.query(Book).filter(Book.status == BookStatus.CURRENT).count()


def failing_commit():
    """Stand-in for Session.commit when the database connection drops."""
    raise OperationalError("COMMIT", {}, Exception("server closed the connection unexpectedly"))
