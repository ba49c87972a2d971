"""
Pydantic schemas for job application endpoints.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

from app.schemas.auth import UserWithProfileResponse
from app.schemas.job import JobResponse


class ApplicationCreate(BaseModel):
    job_id: int = Field(..., description="Job being applied for")
    message: str = Field("", description="Cover message")


class ApplicationStatusUpdate(BaseModel):
    # Validated by the lifecycle service so bad values surface as 400
    status: str = Field(..., description="pending, accepted or rejected")


class ApplicationResponse(BaseModel):
    id: int
    job_id: int
    applicant_id: int
    status: str
    message: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True


class ApplicationWithJobResponse(ApplicationResponse):
    """Applicant's view: the job, including its employer."""
    job: JobResponse


class ApplicationWithApplicantResponse(ApplicationResponse):
    """Employer/admin view: the job and the applicant with profile."""
    job: Optional[JobResponse] = None
    applicant: UserWithProfileResponse


class ApplicationEnvelope(BaseModel):
    application: ApplicationResponse


class ApplicationListResponse(BaseModel):
    applications: list[ApplicationWithJobResponse]


class EmployerApplicationListResponse(BaseModel):
    applications: list[ApplicationWithApplicantResponse]
