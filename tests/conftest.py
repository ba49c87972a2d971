"""
Shared fixtures: a fresh in-memory SQLite database per test, users for each
role, and principals/tokens for them.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
import app.db.models  # noqa: F401
from app.db.models.user import User, UserProfile
from app.core.principal import Principal, Role
from app.core.security import create_token_for_user
from app.schemas.job import JobCreate
from app.services import job_service


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# Not used for login in most tests; hashing is slow
PLACEHOLDER_HASH = "$2b$12$" + "x" * 53


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=test_engine)
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def make_user(db):
    """Factory creating a user with an empty profile."""
    def _make_user(email: str, role: Role = Role.JOB_SEEKER, name: str = "Test User") -> User:
        user = User(
            email=email,
            name=name,
            password_hash=PLACEHOLDER_HASH,
            role=role.value,
        )
        user.profile = UserProfile(skills="Python")
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def employer(make_user):
    return make_user("employer@example.com", Role.EMPLOYER, "Owner Employer")


@pytest.fixture
def other_employer(make_user):
    return make_user("other.employer@example.com", Role.EMPLOYER, "Other Employer")


@pytest.fixture
def seeker(make_user):
    return make_user("seeker@example.com", Role.JOB_SEEKER, "Job Seeker")


@pytest.fixture
def other_seeker(make_user):
    return make_user("other.seeker@example.com", Role.JOB_SEEKER, "Other Seeker")


@pytest.fixture
def admin(make_user):
    return make_user("admin@example.com", Role.ADMIN, "Admin")


def principal_for(user: User) -> Principal:
    return Principal(subject_id=user.id, role=Role(user.role))


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_token_for_user(user)}"}


def job_data(**overrides) -> JobCreate:
    fields = {
        "title": "Backend Engineer",
        "description": "Build APIs with Python",
        "company": "Tech Corp",
        "location": "Berlin, Germany",
        "salary": "80k",
        "employment_type": "full-time",
        "category": "IT",
        "requirements": "3+ years Python",
        "benefits": "Remote friendly",
    }
    fields.update(overrides)
    return JobCreate(**fields)


@pytest.fixture
def job(db, employer):
    """An active job owned by `employer`."""
    return job_service.create_job(db, principal_for(employer), job_data())
