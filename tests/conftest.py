"""
Pytest configuration and fixtures for MailHQ API tests.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mailhq.database import Base, get_db
from mailhq.limiter import limiter
from mailhq.main import app
from mailhq.models import (
    Campaign,
    CampaignAnalytics,
    EmailTemplate,
    Subscriber,
    User,
)
from mailhq.auth import get_password_hash, create_access_token

# Disable rate limiting for tests
limiter.enabled = False

# Use in-memory SQLite for tests with shared connection
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Global session for sharing across requests
_test_session = None


def get_test_db():
    """Get the shared test database session."""
    yield _test_session


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    global _test_session

    Base.metadata.create_all(bind=engine)
    _test_session = TestingSessionLocal()
    app.dependency_overrides[get_db] = get_test_db

    yield _test_session

    app.dependency_overrides.clear()
    _test_session.close()
    _test_session = None
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def test_user(db):
    """Create a test operator."""
    user = User(
        email="test@example.com",
        hashed_password=get_password_hash("testpassword123"),
        display_name="Test User",
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def auth_headers(test_user):
    """Get auth headers for the test operator."""
    token = create_access_token({"sub": str(test_user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_subscriber(db):
    """Insert a subscriber directly."""
    def _make(email, status="active", lists=None):
        subscriber = Subscriber(email=email, status=status, lists=lists or [])
        db.add(subscriber)
        db.commit()
        db.refresh(subscriber)
        return subscriber
    return _make


@pytest.fixture
def make_template(db):
    """Insert a template directly."""
    def _make(name="Welcome", subject="Hello", html_content="<p>Hi</p>", text_content="Hi"):
        template = EmailTemplate(name=name, subject=subject, html_content=html_content, text_content=text_content)
        db.add(template)
        db.commit()
        db.refresh(template)
        return template
    return _make


@pytest.fixture
def make_sent_campaign(db):
    """Insert a campaign already marked sent, with the given analytics counters."""
    def _make(name="Sent", sent_at=None, **counters):
        campaign = Campaign(
            name=name,
            subject=f"{name} subject",
            from_name="MailHQ",
            from_email="news@example.com",
            status="sent",
            sent_at=sent_at,
            lists=[],
        )
        db.add(campaign)
        db.flush()
        db.add(CampaignAnalytics(campaign_id=campaign.id, **counters))
        db.commit()
        db.refresh(campaign)
        return campaign
    return _make


@pytest.fixture
def campaign_payload():
    """Build a valid campaign create body."""
    def _payload(**overrides):
        payload = {
            "name": "Spring Sale",
            "subject": "Spring deals inside",
            "fromName": "MailHQ",
            "fromEmail": "news@example.com",
            "lists": [],
        }
        payload.update(overrides)
        return payload
    return _payload
