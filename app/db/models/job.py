"""
Job model for postings created by employers.
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class Job(Base):
    """
    A job opening owned by the employer whose user id is `employer_id`.

    Deleting a job clears `is_active`; the row stays addressable by id.
    """
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    company = Column(String, nullable=False, index=True)
    location = Column(String, default="")
    salary = Column(String, default="")
    employment_type = Column(String, default="")  # full-time, part-time, contract
    category = Column(String, default="", index=True)
    requirements = Column(Text, default="")
    benefits = Column(Text, default="")
    employer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    employer = relationship("User")
    applications = relationship("JobApplication", back_populates="job")

    __table_args__ = (
        Index('idx_jobs_active_created', 'is_active', 'created_at'),
    )

    def __repr__(self):
        return f"<Job(id={self.id}, company='{self.company}', title='{self.title}')>"
