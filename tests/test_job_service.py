"""
Unit tests for the job service: listing, pagination, and guarded mutation.
"""
import pytest

from app.core.errors import Forbidden, InvalidArgument, NotFound
from app.schemas.job import JobFilter, JobUpdate
from app.services import job_service

from conftest import job_data, principal_for


@pytest.fixture
def it_catalog(db, employer):
    """8 IT jobs and 2 non-IT jobs, created in order."""
    principal = principal_for(employer)
    it_jobs = [
        job_service.create_job(db, principal, job_data(title=f"IT job {i}", category="IT"))
        for i in range(8)
    ]
    other_jobs = [
        job_service.create_job(db, principal, job_data(title=f"Sales job {i}", category="Sales"))
        for i in range(2)
    ]
    return it_jobs, other_jobs


def test_pagination_returns_page_and_pre_pagination_total(db, it_catalog):
    """Page 2 with limit 3 over 8 IT jobs returns items 4-6 of the newest-first order."""
    it_jobs, _ = it_catalog
    expected_order = sorted(it_jobs, key=lambda j: j.id, reverse=True)

    jobs, total = job_service.list_jobs(db, JobFilter(category="IT"), page=2, limit=3)

    assert total == 8
    assert [j.id for j in jobs] == [j.id for j in expected_order[3:6]]


def test_total_independent_of_page(db, it_catalog):
    _, total_first = job_service.list_jobs(db, JobFilter(category="IT"), page=1, limit=2)
    jobs_last, total_last = job_service.list_jobs(db, JobFilter(category="IT"), page=4, limit=3)

    assert total_first == total_last == 8
    assert jobs_last == []


def test_default_pagination(db, it_catalog):
    jobs, total = job_service.list_jobs(db)

    assert total == 10
    assert len(jobs) == 10


@pytest.mark.parametrize("page,limit,expected", [
    (None, None, (1, 10)),
    (0, 0, (1, 10)),
    (-3, -1, (1, 10)),
    (2, 5, (2, 5)),
    (1, 1000, (1, 100)),
])
def test_normalize_pagination(page, limit, expected):
    assert job_service.normalize_pagination(page, limit) == expected


@pytest.mark.parametrize("page", [2**31, 10**19])
def test_page_beyond_store_offset_is_invalid(db, it_catalog, page):
    with pytest.raises(InvalidArgument):
        job_service.list_jobs(db, None, page=page, limit=10)


def test_last_storable_page_is_empty_not_an_error(db, it_catalog):
    jobs, total = job_service.list_jobs(db, None, page=(2**31 - 1) // 100 + 1, limit=100)
    assert jobs == []
    assert total == 10


def test_inactive_jobs_excluded_from_public_listing(db, employer, admin):
    owner = principal_for(employer)
    kept = job_service.create_job(db, owner, job_data(title="Kept"))
    removed = job_service.create_job(db, owner, job_data(title="Removed"))
    job_service.delete_job(db, removed.id, owner)

    jobs, total = job_service.list_jobs(db)
    assert [j.id for j in jobs] == [kept.id]
    assert total == 1

    all_jobs = job_service.list_all_jobs(db, principal_for(admin))
    assert {j.id for j in all_jobs} == {kept.id, removed.id}


def test_list_all_jobs_requires_admin(db, employer):
    with pytest.raises(Forbidden):
        job_service.list_all_jobs(db, principal_for(employer))


def test_location_filter_is_case_insensitive_substring(db, employer):
    owner = principal_for(employer)
    berlin = job_service.create_job(db, owner, job_data(location="Berlin, Germany"))
    job_service.create_job(db, owner, job_data(location="Paris, France"))

    jobs, total = job_service.list_jobs(db, JobFilter(location="berLIN"))

    assert total == 1
    assert jobs[0].id == berlin.id


def test_search_matches_title_or_description(db, employer):
    owner = principal_for(employer)
    by_title = job_service.create_job(db, owner, job_data(title="Django Developer", description="Web"))
    by_description = job_service.create_job(db, owner, job_data(title="Engineer", description="Uses DJANGO daily"))
    job_service.create_job(db, owner, job_data(title="Accountant", description="Numbers"))

    jobs, total = job_service.list_jobs(db, JobFilter(search="django"))

    assert total == 2
    assert {j.id for j in jobs} == {by_title.id, by_description.id}


def test_filters_combine_with_and(db, employer):
    owner = principal_for(employer)
    match = job_service.create_job(
        db, owner, job_data(title="Python Dev", category="IT", employment_type="contract", location="Remote")
    )
    job_service.create_job(
        db, owner, job_data(title="Python Dev", category="IT", employment_type="full-time", location="Remote")
    )
    job_service.create_job(
        db, owner, job_data(title="Python Dev", category="Sales", employment_type="contract", location="Remote")
    )

    jobs, total = job_service.list_jobs(
        db,
        JobFilter(category="IT", employment_type="contract", location="remote", search="python"),
    )

    assert total == 1
    assert jobs[0].id == match.id


def test_category_filter_is_exact(db, employer):
    job_service.create_job(db, principal_for(employer), job_data(category="IT Support"))

    _, total = job_service.list_jobs(db, JobFilter(category="IT"))
    assert total == 0


def test_create_then_get_round_trip(db, employer):
    data = job_data()
    created = job_service.create_job(db, principal_for(employer), data)

    fetched = job_service.get_job(db, created.id)

    for field in job_service.MUTABLE_FIELDS:
        assert getattr(fetched, field) == getattr(data, field)
    assert fetched.employer_id == employer.id
    assert fetched.is_active is True
    assert fetched.created_at is not None


def test_create_job_requires_employer(db, seeker):
    with pytest.raises(Forbidden):
        job_service.create_job(db, principal_for(seeker), job_data())


def test_get_missing_job(db):
    with pytest.raises(NotFound):
        job_service.get_job(db, 999)


@pytest.mark.parametrize("job_id", [0, -1, 2**31, 10**19])
def test_unstorable_job_id_is_not_found(db, employer, job_id):
    with pytest.raises(NotFound):
        job_service.get_job(db, job_id)
    with pytest.raises(NotFound):
        job_service.update_job(db, job_id, JobUpdate(**job_data().model_dump()), principal_for(employer))
    with pytest.raises(NotFound):
        job_service.delete_job(db, job_id, principal_for(employer))


def test_update_replaces_all_fields(db, employer, job):
    """Omitted optional fields are cleared, not preserved."""
    update = JobUpdate(title="New title", description="New description", company="New Co")

    updated = job_service.update_job(db, job.id, update, principal_for(employer))

    assert updated.title == "New title"
    assert updated.company == "New Co"
    assert updated.location == ""
    assert updated.salary == ""
    assert updated.category == ""
    assert updated.benefits == ""


def test_update_by_other_employer_forbidden(db, job, other_employer):
    with pytest.raises(Forbidden):
        job_service.update_job(db, job.id, job_data(title="Hijacked"), principal_for(other_employer))

    assert job_service.get_job(db, job.id).title == "Backend Engineer"


def test_update_by_admin_allowed(db, job, admin):
    updated = job_service.update_job(db, job.id, JobUpdate(**job_data(title="Admin edit").model_dump()), principal_for(admin))
    assert updated.title == "Admin edit"


def test_update_missing_job_is_not_found_before_authorization(db, seeker):
    """A missing job reports NotFound even to a caller who could never own it."""
    with pytest.raises(NotFound):
        job_service.update_job(db, 999, JobUpdate(**job_data().model_dump()), principal_for(seeker))


def test_delete_is_soft(db, employer, job):
    job_service.delete_job(db, job.id, principal_for(employer))

    fetched = job_service.get_job(db, job.id, principal_for(employer))
    assert fetched.is_active is False


def test_deleted_job_visible_to_owner_and_admin_only(db, employer, other_employer, seeker, admin, job):
    job_service.delete_job(db, job.id, principal_for(employer))

    assert job_service.get_job(db, job.id, principal_for(admin)).is_active is False
    assert job_service.get_job(db, job.id, principal_for(employer)).id == job.id

    with pytest.raises(NotFound):
        job_service.get_job(db, job.id)
    for user in (other_employer, seeker):
        with pytest.raises(NotFound):
            job_service.get_job(db, job.id, principal_for(user))


def test_deleted_job_can_still_be_updated_by_owner(db, employer, job):
    job_service.delete_job(db, job.id, principal_for(employer))

    updated = job_service.update_job(db, job.id, JobUpdate(**job_data(title="Revived").model_dump()), principal_for(employer))
    assert updated.title == "Revived"
    assert updated.is_active is False


def test_delete_by_seeker_forbidden(db, job, seeker):
    with pytest.raises(Forbidden):
        job_service.delete_job(db, job.id, principal_for(seeker))


def test_delete_by_admin_allowed(db, job, admin):
    deleted = job_service.delete_job(db, job.id, principal_for(admin))
    assert deleted.is_active is False
