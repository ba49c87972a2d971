"""
Job application endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_db, get_current_principal
from app.core.principal import Principal
from app.schemas.application import (
    ApplicationCreate,
    ApplicationStatusUpdate,
    ApplicationEnvelope,
    ApplicationListResponse,
    ApplicationResponse,
    ApplicationWithApplicantResponse,
    ApplicationWithJobResponse,
    EmployerApplicationListResponse,
)
from app.services import application_service

router = APIRouter(prefix="/api/applications", tags=["Applications"])


# ✅ APPLY TO A JOB
@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApplicationEnvelope)
def create_application(
    payload: ApplicationCreate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    application = application_service.submit(db, principal, payload.job_id, payload.message)
    return ApplicationEnvelope(application=ApplicationResponse.model_validate(application))


# ✅ APPLICATIONS I MADE
@router.get("/my", response_model=ApplicationListResponse)
def list_my_applications(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    applications = application_service.list_for_applicant(db, principal.subject_id)
    return ApplicationListResponse(
        applications=[ApplicationWithJobResponse.model_validate(a) for a in applications]
    )


# ✅ APPLICATIONS TO MY JOBS
@router.get("/employer", response_model=EmployerApplicationListResponse)
def list_employer_applications(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    applications = application_service.list_for_employer(db, principal)
    return EmployerApplicationListResponse(
        applications=[ApplicationWithApplicantResponse.model_validate(a) for a in applications]
    )


# ✅ EVERY APPLICATION (ADMIN)
@router.get("/all", response_model=EmployerApplicationListResponse)
def list_all_applications(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    applications = application_service.list_all(db, principal)
    return EmployerApplicationListResponse(
        applications=[ApplicationWithApplicantResponse.model_validate(a) for a in applications]
    )


# ✅ APPLICATIONS TO ONE JOB
@router.get("/job/{job_id}", response_model=EmployerApplicationListResponse)
def list_job_applications(
    job_id: int,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    applications = application_service.list_for_job(db, job_id, principal)
    return EmployerApplicationListResponse(
        applications=[ApplicationWithApplicantResponse.model_validate(a) for a in applications]
    )


# ✅ ACCEPT / REJECT
@router.put("/{application_id}/status", response_model=ApplicationEnvelope)
def update_application_status(
    application_id: int,
    payload: ApplicationStatusUpdate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    application = application_service.set_status(db, application_id, payload.status, principal)
    return ApplicationEnvelope(application=ApplicationResponse.model_validate(application))
