"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.

All models must be imported here to be included in database migrations and table creation.
"""
from app.db.models.user import User, UserProfile
from app.db.models.job import Job
from app.db.models.application import JobApplication

__all__ = [
    "User",
    "UserProfile",
    "Job",
    "JobApplication",
]
