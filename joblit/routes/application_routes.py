from typing import List

from fastapi import APIRouter, Depends, HTTPException

from joblit.routes.dependencies import get_application_service, get_job_service, require_seeker
from joblit.schema.job_schema import JobRead
from joblit.schema.user_schema import UserAccount
from joblit.services.application_service import ApplicationService
from joblit.services.job_service import JobService

router = APIRouter(prefix="/applications", tags=["applications"])


@router.post("/{job_id}", status_code=201)
def apply_to_job(
    job_id: int,
    seeker: UserAccount = Depends(require_seeker),
    jobs: JobService = Depends(get_job_service),
    applications: ApplicationService = Depends(get_application_service)
):
    """Job seeker applies to a job"""
    if not jobs.get_job(job_id):
        raise HTTPException(status_code=404, detail="Job not found")

    if not applications.apply(seeker.id, job_id):
        raise HTTPException(
            status_code=409,
            detail="Could not submit application. You might have already applied."
        )
    return {"message": "Application submitted successfully!"}


@router.delete("/{job_id}")
def withdraw_application(
    job_id: int,
    seeker: UserAccount = Depends(require_seeker),
    applications: ApplicationService = Depends(get_application_service)
):
    if not applications.withdraw(seeker.id, job_id):
        raise HTTPException(status_code=404, detail="Application not found")
    return {"message": "Application withdrawn successfully."}


@router.get("/mine", response_model=List[JobRead])
def my_applied_jobs(
    seeker: UserAccount = Depends(require_seeker),
    applications: ApplicationService = Depends(get_application_service)
):
    return applications.list_applied_jobs(seeker.id)
