"""
Job application lifecycle.

An application starts as `pending` and moves to `accepted` or `rejected`
through `set_status`. Transitions are not restricted beyond ownership:
an accepted or rejected application can be set back to any status.

At most one application exists per (job, applicant). The pre-insert lookup
catches the common case; the table's unique constraint catches concurrent
duplicates and both surface as Conflict.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.authorization import Action, require
from app.core.errors import Conflict, InvalidArgument, NotFound
from app.core.principal import Principal
from app.db.models.application import JobApplication
from app.db.models.job import Job
from app.db.models.user import User
from app.db.session import storable_id, store_operation

logger = logging.getLogger(__name__)

STATUS_PENDING = "pending"
STATUS_ACCEPTED = "accepted"
STATUS_REJECTED = "rejected"

APPLICATION_STATUSES = frozenset({STATUS_PENDING, STATUS_ACCEPTED, STATUS_REJECTED})
TERMINAL_STATUSES = frozenset({STATUS_ACCEPTED, STATUS_REJECTED})


def _newest_first(query):
    return query.order_by(JobApplication.created_at.desc(), JobApplication.id.desc())


def find_application(db: Session, job_id: int, applicant_id: int) -> Optional[JobApplication]:
    return db.query(JobApplication).filter(
        JobApplication.job_id == job_id,
        JobApplication.applicant_id == applicant_id
    ).first()


def submit(db: Session, principal: Principal, job_id: int, message: str = "") -> JobApplication:
    """
    Apply to a job as the calling job seeker.

    Raises:
        Forbidden: caller is not a job seeker
        NotFound: job does not exist or has been deleted
        Conflict: caller already applied to this job
    """
    require(principal, Action.CREATE_APPLICATION)
    applicant_id = principal.subject_id

    if not storable_id(job_id):
        raise NotFound("Job not found")

    with store_operation(db, "create application"):
        job = db.query(Job).filter(Job.id == job_id, Job.is_active.is_(True)).first()
        if not job:
            raise NotFound("Job not found")

        if find_application(db, job_id, applicant_id):
            raise Conflict("You have already applied for this job")

        application = JobApplication(
            job_id=job_id,
            applicant_id=applicant_id,
            message=message or "",
            status=STATUS_PENDING,
        )
        db.add(application)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.info(f"Duplicate application rejected by constraint: job_id={job_id}, applicant_id={applicant_id}")
            raise Conflict("You have already applied for this job") from e
        db.refresh(application)

    logger.info(f"Application submitted: application_id={application.id}, job_id={job_id}, applicant_id={applicant_id}")
    return application


def get_application(db: Session, application_id: int) -> JobApplication:
    if not storable_id(application_id):
        raise NotFound("Application not found")

    with store_operation(db, "get application"):
        application = (
            db.query(JobApplication)
            .options(joinedload(JobApplication.job))
            .filter(JobApplication.id == application_id)
            .first()
        )

    if not application:
        raise NotFound("Application not found")
    return application


def set_status(db: Session, application_id: int, new_status: str, principal: Principal) -> JobApplication:
    """
    Set an application's status.

    Allowed for the employer owning the job and for admins. Any status may be
    set from any status, including re-setting a terminal one.

    Raises:
        NotFound: application does not exist
        InvalidArgument: status is not pending, accepted or rejected
        Forbidden: caller does not own the job and is not an admin
    """
    application = get_application(db, application_id)

    if new_status not in APPLICATION_STATUSES:
        raise InvalidArgument(
            f"Invalid status '{new_status}', expected one of: {', '.join(sorted(APPLICATION_STATUSES))}"
        )

    require(principal, Action.UPDATE_APPLICATION_STATUS, application.job.employer_id)

    previous = application.status
    if previous in TERMINAL_STATUSES and previous != new_status:
        logger.info(f"Reopening decided application: application_id={application.id}, was {previous}")

    application.status = new_status
    application.updated_at = datetime.now(timezone.utc)

    with store_operation(db, "update application status"):
        db.commit()
        db.refresh(application)

    logger.info(
        f"Application status changed: application_id={application.id}, "
        f"{previous} -> {new_status}, by subject_id={principal.subject_id}"
    )
    return application


def list_for_applicant(db: Session, applicant_id: int) -> List[JobApplication]:
    """Applications made by `applicant_id`, each with its job and the job's employer."""
    with store_operation(db, "list applicant applications"):
        return _newest_first(
            db.query(JobApplication)
            .options(joinedload(JobApplication.job).joinedload(Job.employer))
            .filter(JobApplication.applicant_id == applicant_id)
        ).all()


def list_for_employer(db: Session, principal: Principal) -> List[JobApplication]:
    """Applications to any job owned by the calling employer."""
    require(principal, Action.LIST_EMPLOYER_APPLICATIONS)

    with store_operation(db, "list employer applications"):
        return _newest_first(
            db.query(JobApplication)
            .join(Job, JobApplication.job_id == Job.id)
            .options(
                joinedload(JobApplication.job),
                joinedload(JobApplication.applicant).joinedload(User.profile),
            )
            .filter(Job.employer_id == principal.subject_id)
        ).all()


def list_for_job(db: Session, job_id: int, principal: Principal) -> List[JobApplication]:
    """
    Applications to one job. Owner or admin only.

    Raises:
        NotFound: job does not exist
        Forbidden: caller does not own the job and is not an admin
    """
    if not storable_id(job_id):
        raise NotFound("Job not found")

    with store_operation(db, "list job applications"):
        job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise NotFound("Job not found")

    require(principal, Action.VIEW_JOB_APPLICATIONS, job.employer_id)

    with store_operation(db, "list job applications"):
        return _newest_first(
            db.query(JobApplication)
            .options(joinedload(JobApplication.applicant).joinedload(User.profile))
            .filter(JobApplication.job_id == job_id)
        ).all()


def list_all(db: Session, principal: Principal) -> List[JobApplication]:
    """Every application. Admin only."""
    require(principal, Action.LIST_ALL_APPLICATIONS)

    with store_operation(db, "list all applications"):
        return _newest_first(
            db.query(JobApplication)
            .options(
                joinedload(JobApplication.job),
                joinedload(JobApplication.applicant).joinedload(User.profile),
            )
        ).all()
