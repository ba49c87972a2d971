from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class JobApplication(Base):
    __tablename__ = "job_applications"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False, index=True)
    applicant_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String, nullable=False, default="pending")  # pending, accepted, rejected
    message = Column(Text, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    job = relationship("Job", back_populates="applications")
    applicant = relationship("User")

    # Losing writer of a concurrent duplicate submission hits this
    __table_args__ = (
        UniqueConstraint('job_id', 'applicant_id', name='uq_job_applications_job_applicant'),
    )

    def __repr__(self):
        return f"<JobApplication(id={self.id}, job_id={self.job_id}, applicant_id={self.applicant_id}, status='{self.status}')>"
