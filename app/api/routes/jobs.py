"""
Job endpoints.

Listing and reads of active jobs are public; creation is for employers;
update and delete are for the owning employer or an admin.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_db, get_current_principal, get_optional_principal
from app.core.principal import Principal
from app.schemas.job import (
    JobCreate,
    JobUpdate,
    JobFilter,
    JobEnvelope,
    JobListResponse,
    JobResponse,
)
from app.services import job_service

router = APIRouter(prefix="/api/jobs", tags=["Jobs"])


@router.get("", response_model=JobListResponse)
def list_jobs(
    category: Optional[str] = Query(None, description="Exact category"),
    location: Optional[str] = Query(None, description="Location substring, case-insensitive"),
    employment_type: Optional[str] = Query(None, description="Exact employment type"),
    search: Optional[str] = Query(None, description="Search in title and description"),
    page: Optional[int] = Query(None, description="Page number, defaults to 1"),
    limit: Optional[int] = Query(None, description="Items per page, defaults to 10"),
    db: Session = Depends(get_db)
):
    """List active jobs, newest first. Non-positive page/limit fall back to defaults."""
    page, limit = job_service.normalize_pagination(page, limit)
    filters = JobFilter(
        category=category,
        location=location,
        employment_type=employment_type,
        search=search,
    )
    jobs, total = job_service.list_jobs(db, filters, page, limit)

    return JobListResponse(
        jobs=[JobResponse.model_validate(job) for job in jobs],
        total=total,
        page=page,
        limit=limit,
    )


# Declared before /{job_id} so "all" is not parsed as an id
@router.get("/all")
def list_all_jobs(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    jobs = job_service.list_all_jobs(db, principal)
    return {"jobs": [JobResponse.model_validate(job) for job in jobs]}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(
    job_id: int,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db)
):
    """Public for active jobs. A deleted job is visible to its owner and admins only."""
    job = job_service.get_job(db, job_id, principal)
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=JobEnvelope)
def create_job(
    job_data: JobCreate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    job = job_service.create_job(db, principal, job_data)
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.put("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    job_data: JobUpdate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    """
    Replace a job's fields.

    Fields left out of the body are cleared, not kept.
    """
    job = job_service.update_job(db, job_id, job_data, principal)
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.delete("/{job_id}")
def delete_job(
    job_id: int,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    job_service.delete_job(db, job_id, principal)
    return {"message": "Job deleted successfully"}
