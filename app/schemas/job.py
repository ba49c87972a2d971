"""
Pydantic schemas for job endpoints.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

from app.schemas.auth import UserResponse


class JobBase(BaseModel):
    """Every mutable job field. Optional fields default to empty text."""
    title: str = Field(..., description="Job title", min_length=1, max_length=255)
    description: str = Field(..., description="Full job description", min_length=1)
    company: str = Field(..., description="Company name", min_length=1, max_length=255)
    location: str = Field("", description="Job location")
    salary: str = Field("", description="Salary, free text")
    employment_type: str = Field("", description="full-time, part-time, contract")
    category: str = Field("", description="Job category, e.g. IT")
    requirements: str = Field("", description="Requirements, free text")
    benefits: str = Field("", description="Benefits, free text")


class JobCreate(JobBase):
    """Schema for creating a new job."""
    pass


class JobUpdate(JobBase):
    """
    Schema for updating an existing job.

    This is a full replacement: omitted optional fields are stored as empty
    text rather than left unchanged.
    """
    pass


class JobResponse(JobBase):
    """Schema for job response."""
    id: int = Field(..., description="Job ID")
    employer_id: int = Field(..., description="User ID of the owning employer")
    is_active: bool = Field(..., description="False once the job is deleted")
    created_at: Optional[datetime] = Field(None, description="Job creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Job last update timestamp")
    employer: Optional[UserResponse] = None
    
    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "title": "Senior Backend Engineer",
                "description": "Build and run our APIs.",
                "company": "Tech Corp",
                "location": "Berlin",
                "salary": "80k-100k EUR",
                "employment_type": "full-time",
                "category": "IT",
                "requirements": "5+ years Python",
                "benefits": "Remote friendly",
                "employer_id": 2,
                "is_active": True,
                "created_at": "2026-01-15T09:00:00Z",
                "updated_at": "2026-01-15T10:00:00Z"
            }
        }


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListResponse(BaseModel):
    """Schema for a page of jobs."""
    jobs: list[JobResponse] = Field(..., description="List of jobs")
    total: int = Field(..., description="Number of matching jobs before pagination")
    page: int = Field(1, description="Current page number")
    limit: int = Field(10, description="Number of items per page")


class JobFilter(BaseModel):
    """Filters for the public job listing. All optional, combined with AND."""
    category: Optional[str] = Field(None, description="Exact category")
    location: Optional[str] = Field(None, description="Case-insensitive location substring")
    employment_type: Optional[str] = Field(None, description="Exact employment type")
    search: Optional[str] = Field(None, description="Case-insensitive substring of title or description")
