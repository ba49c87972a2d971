"""
Job service: public listing, admin listing, and owner-guarded mutation.

Every function takes the request's Session explicitly. Authorization is
delegated to app.core.authorization; database failures surface as
Unavailable.
"""
import logging
from typing import List, Optional, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from app.core import config
from app.core.authorization import Action, Decision, authorize, require
from app.core.errors import InvalidArgument, NotFound
from app.core.principal import Principal
from app.db.models.job import Job
from app.db.session import storable_id, store_operation
from app.schemas.job import JobCreate, JobUpdate, JobFilter

logger = logging.getLogger(__name__)

# Replaced wholesale on update
MUTABLE_FIELDS = (
    "title",
    "description",
    "company",
    "location",
    "salary",
    "employment_type",
    "category",
    "requirements",
    "benefits",
)


def normalize_pagination(page: Optional[int], limit: Optional[int]) -> Tuple[int, int]:
    """
    Clamp pagination input.

    Missing or non-positive values fall back to page 1 / the default limit;
    limit is capped at MAX_PAGE_LIMIT.

    Raises:
        InvalidArgument: the page starts beyond the largest offset the store accepts
    """
    if not page or page < 1:
        page = 1
    if not limit or limit < 1:
        limit = config.DEFAULT_PAGE_LIMIT
    limit = min(limit, config.MAX_PAGE_LIMIT)
    if (page - 1) * limit > config.STORE_INT_MAX:
        raise InvalidArgument("Page is out of range")
    return page, limit


def _newest_first(query):
    # id breaks ties between rows created in the same second
    return query.order_by(Job.created_at.desc(), Job.id.desc())


def _apply_filters(query, filters: JobFilter):
    if filters.category:
        query = query.filter(Job.category == filters.category)

    if filters.location:
        query = query.filter(Job.location.ilike(f"%{filters.location}%"))

    if filters.employment_type:
        query = query.filter(Job.employment_type == filters.employment_type)

    if filters.search:
        search_term = f"%{filters.search}%"
        query = query.filter(
            or_(
                Job.title.ilike(search_term),
                Job.description.ilike(search_term)
            )
        )

    return query


def list_jobs(
    db: Session,
    filters: Optional[JobFilter] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> Tuple[List[Job], int]:
    """
    List active jobs matching `filters`, newest first.

    Returns:
        (jobs on the requested page, total matches before pagination)
    """
    filters = filters or JobFilter()
    page, limit = normalize_pagination(page, limit)

    with store_operation(db, "list jobs"):
        query = _apply_filters(db.query(Job).filter(Job.is_active.is_(True)), filters)
        total = query.count()

        offset = (page - 1) * limit
        jobs = (
            _newest_first(query.options(joinedload(Job.employer)))
            .offset(offset)
            .limit(limit)
            .all()
        )

    logger.debug(f"Jobs listed: filters={filters.model_dump(exclude_none=True)}, total={total}, page={page}")
    return jobs, total


def list_all_jobs(db: Session, principal: Principal) -> List[Job]:
    """Every job including inactive ones. Admin only."""
    require(principal, Action.LIST_ALL_JOBS)

    with store_operation(db, "list all jobs"):
        return _newest_first(db.query(Job).options(joinedload(Job.employer))).all()


def load_job(db: Session, job_id: int) -> Job:
    """Fetch a job by id, active or not. Raises NotFound."""
    if not storable_id(job_id):
        raise NotFound("Job not found")

    with store_operation(db, "get job"):
        job = db.query(Job).filter(Job.id == job_id).first()

    if not job:
        raise NotFound("Job not found")
    return job


def get_job(db: Session, job_id: int, principal: Optional[Principal] = None) -> Job:
    """
    Fetch a job by id.

    Active jobs are public. A deleted job is returned only to its owner or an
    admin; anyone else gets NotFound.

    Raises:
        NotFound: no job with this id, or the job is deleted and hidden from the caller
    """
    job = load_job(db, job_id)

    if not job.is_active:
        if principal is None or authorize(principal, Action.VIEW_INACTIVE_JOB, job.employer_id) is Decision.DENY:
            raise NotFound("Job not found")
    return job


def create_job(db: Session, principal: Principal, data: JobCreate) -> Job:
    """Create a job owned by the calling employer."""
    require(principal, Action.CREATE_JOB)

    job = Job(
        employer_id=principal.subject_id,
        is_active=True,
        **{field: getattr(data, field) for field in MUTABLE_FIELDS},
    )

    with store_operation(db, "create job"):
        db.add(job)
        db.commit()
        db.refresh(job)

    logger.info(f"Job created: job_id={job.id}, employer_id={job.employer_id}, company={job.company}")
    return job


def update_job(db: Session, job_id: int, data: JobUpdate, principal: Principal) -> Job:
    """
    Replace every mutable field of a job.

    Raises:
        NotFound: job does not exist
        Forbidden: caller is neither the owner nor an admin
    """
    job = load_job(db, job_id)
    require(principal, Action.UPDATE_JOB, job.employer_id)

    for field in MUTABLE_FIELDS:
        setattr(job, field, getattr(data, field))

    with store_operation(db, "update job"):
        db.commit()
        db.refresh(job)

    logger.info(f"Job updated: job_id={job.id}, by subject_id={principal.subject_id}")
    return job


def delete_job(db: Session, job_id: int, principal: Principal) -> Job:
    """
    Soft-delete a job by clearing `is_active`.

    Raises:
        NotFound: job does not exist
        Forbidden: caller is neither the owner nor an admin
    """
    job = load_job(db, job_id)
    require(principal, Action.DELETE_JOB, job.employer_id)

    job.is_active = False

    with store_operation(db, "delete job"):
        db.commit()
        db.refresh(job)

    logger.info(f"Job deactivated: job_id={job.id}, by subject_id={principal.subject_id}")
    return job
