"""
Shared fixtures: in-memory SQLite database and a TestClient wired to it.
"""
import pytest
from datetime import datetime
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.api.deps import get_db
from app.db.base import Base
from app.db import models  # noqa: F401
from app.db.models.application import Application
from app.db.models.company import Company
from app.db.models.job import Job


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function", autouse=True)
def setup_db():
    """Create and drop tables for each test."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db():
    """Provide a database session for tests."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    """TestClient using the in-memory database (lifespan is not run)."""
    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def company(db):
    company = Company(
        id="company-1",
        name="Acme Corp",
        website="https://acme.example.com",
        location="Pune",
        industry="Software",
    )
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


@pytest.fixture
def job(db, company):
    """job-1, owned by Acme Corp."""
    job = Job(
        id="job-1",
        title="Backend Engineer",
        description="Build and run the job board API.",
        location="Pune",
        salary="10-14 LPA",
        skills="python,fastapi,sql",
        closing_date=datetime(2026, 12, 31),
        experience_level="experienced",
        experience_min=2,
        experience_max=5,
        company_id=company.id,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


@pytest.fixture
def other_job(db, company):
    job = Job(
        id="job-2",
        title="Frontend Intern",
        description="React work on the board UI.",
        location="Remote",
        skills="react,typescript",
        experience_level="fresher",
        company_id=company.id,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


@pytest.fixture
def application(db, job):
    """u1 has applied to job-1."""
    application = Application(id="app-1", user_id="u1", job_id=job.id)
    db.add(application)
    db.commit()
    db.refresh(application)
    return application


@pytest.fixture
def session_factory():
    """Open extra sessions on the test database (e.g. to simulate a second request)."""
    return TestSessionLocal
