from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from joblit.exceptions import InvalidInputError
from joblit.routes.dependencies import (
    get_application_service,
    get_job_service,
    require_employer
)
from joblit.schema.job_schema import JobCreate, JobRead, JobUpdate
from joblit.schema.user_schema import UserAccount
from joblit.services.application_service import ApplicationService
from joblit.services.job_service import JobService
from joblit.utils.validators import parse_salary

router = APIRouter(prefix="/jobs", tags=["jobs"])


def _own_job(job_id: int, employer: UserAccount, jobs: JobService) -> JobRead:
    job = jobs.get_job(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    if job.employer_id != employer.id:
        raise HTTPException(status_code=403, detail="Unauthorized")
    return job


@router.get("", response_model=List[JobRead])
def list_jobs(
    q: Optional[str] = Query(None, description="keyword search: title/description/location"),
    jobs: JobService = Depends(get_job_service)
):
    if q and q.strip():
        return jobs.search(q.strip())
    return jobs.list_all()


@router.get("/mine", response_model=List[JobRead])
def list_my_jobs(
    employer: UserAccount = Depends(require_employer),
    jobs: JobService = Depends(get_job_service)
):
    return jobs.list_by_employer(employer.id)


@router.get("/{job_id}", response_model=JobRead)
def get_job(job_id: int, jobs: JobService = Depends(get_job_service)):
    job = jobs.get_job(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.post("", response_model=JobRead, status_code=201)
def post_job(
    job_in: JobCreate,
    employer: UserAccount = Depends(require_employer),
    jobs: JobService = Depends(get_job_service)
):
    try:
        job = jobs.post_job(
            employer_id=employer.id,
            title=job_in.title,
            description=job_in.description,
            location=job_in.location,
            salary=job_in.salary,
            company_name=employer.profile.company_name,
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not job:
        raise HTTPException(status_code=500, detail="Failed to post job. Please try again.")
    return job


@router.put("/{job_id}", response_model=JobRead)
def update_job(
    job_id: int,
    job_in: JobUpdate,
    employer: UserAccount = Depends(require_employer),
    jobs: JobService = Depends(get_job_service)
):
    job = _own_job(job_id, employer, jobs)
    changes = job_in.model_dump(exclude_none=True)
    if "salary" in changes:
        # JobRead wants a number; the service clamps it again
        changes["salary"] = parse_salary(changes["salary"])

    try:
        updated = jobs.update_job(job.model_copy(update=changes))
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not updated:
        raise HTTPException(status_code=400, detail="Failed to update job.")
    return jobs.get_job(job_id)


@router.delete("/{job_id}")
def delete_job(
    job_id: int,
    employer: UserAccount = Depends(require_employer),
    jobs: JobService = Depends(get_job_service)
):
    _own_job(job_id, employer, jobs)
    if not jobs.delete_job(job_id):
        raise HTTPException(status_code=400, detail="Failed to delete job posting.")
    return {"message": "Job posting deleted successfully."}


@router.get("/{job_id}/applicants", response_model=List[UserAccount])
def list_applicants(
    job_id: int,
    employer: UserAccount = Depends(require_employer),
    jobs: JobService = Depends(get_job_service),
    applications: ApplicationService = Depends(get_application_service)
):
    _own_job(job_id, employer, jobs)
    return applications.list_applicants(job_id)
