# ========================================
# visacenter/routes/admin_jobs.py - ADMIN JOB MANAGEMENT
# ========================================

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from bson import ObjectId

from visacenter.config import Settings
from visacenter.dependencies import get_job_repository, get_settings
from visacenter.repositories import JobRepository
from visacenter.routes.job import load_jobs
from visacenter.schemas.job import AdminJobListResponse, JobForm, JobResponse
from visacenter.utils.auth import require_admin
from visacenter.utils.jobs import distinct_values, filter_jobs, job_stats, with_recent_flag

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin - Jobs"], dependencies=[Depends(require_admin)])


def check_job_id(job_id: str):
    if not ObjectId.is_valid(job_id):
        raise HTTPException(status_code=400, detail="Invalid job ID")


# ✅ 1. LIST JOBS WITH SEARCH, FILTERS AND STATS
@router.get("/jobs", response_model=AdminJobListResponse)
async def list_jobs(
    search: Optional[str] = Query(None, description="Search in title, country, location or job type"),
    country: Optional[str] = Query(None, description="Filter by country"),
    job_type: Optional[str] = Query(None, description="Filter by job type"),
    jobs: JobRepository = Depends(get_job_repository),
    settings: Settings = Depends(get_settings),
):
    all_jobs = await load_jobs(jobs)
    now = datetime.now(timezone.utc)
    filtered = filter_jobs(all_jobs, search=search, country=country, job_type=job_type)

    return {
        "jobs": [with_recent_flag(job, now, settings.recent_days) for job in filtered],
        "total": len(filtered),
        "countries": distinct_values(all_jobs, "country"),
        "job_types": distinct_values(all_jobs, "job_type"),
        "stats": job_stats(all_jobs, now),
    }


# ✅ 2. POST A JOB
@router.post("/jobs", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    job: JobForm,
    jobs: JobRepository = Depends(get_job_repository),
    settings: Settings = Depends(get_settings),
):
    """Create a job posting; the posted date is the time of submission."""

    new_job = job.to_document()
    new_job["posted_date"] = datetime.now(timezone.utc)

    try:
        created = await jobs.insert(new_job)
    except Exception as e:
        logger.error("Creating job '%s' failed: %s", job.title, e)
        raise HTTPException(status_code=500, detail=f"Creating job failed: {str(e)}")

    logger.info("Job %s created: %s (%s)", created["id"], created["title"], created["country"])
    return with_recent_flag(created, window_days=settings.recent_days)


# ✅ 3. UPDATE/EDIT JOB
@router.put("/jobs/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    job: JobForm,
    jobs: JobRepository = Depends(get_job_repository),
    settings: Settings = Depends(get_settings),
):
    """Replace a job's fields. Its id and original posted date are kept."""

    check_job_id(job_id)

    try:
        updated = await jobs.update(job_id, job.to_document())
    except Exception as e:
        logger.error("Updating job %s failed: %s", job_id, e)
        raise HTTPException(status_code=500, detail=f"Updating job failed: {str(e)}")

    if not updated:
        raise HTTPException(status_code=404, detail="Job not found")

    logger.info("Job %s updated", job_id)
    return with_recent_flag(updated, window_days=settings.recent_days)


# ✅ 4. DELETE JOB
@router.delete("/jobs/{job_id}")
async def delete_job(
    job_id: str,
    confirm: bool = Query(False, description="Must be true; the dashboard asks the admin first"),
    jobs: JobRepository = Depends(get_job_repository),
):
    """Delete a job posting. Applications already made for it are kept."""

    check_job_id(job_id)

    if not confirm:
        raise HTTPException(
            status_code=400,
            detail="Are you sure you want to delete this job posting? Repeat the request with confirm=true"
        )

    try:
        deleted = await jobs.delete(job_id)
    except Exception as e:
        logger.error("Deleting job %s failed: %s", job_id, e)
        raise HTTPException(status_code=500, detail=f"Deleting job failed: {str(e)}")

    if not deleted:
        raise HTTPException(status_code=404, detail="Job not found")

    logger.info("Job %s deleted", job_id)
    return {"message": "Job deleted successfully", "job_id": job_id}
