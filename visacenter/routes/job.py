# ========================================
# visacenter/routes/job.py - PUBLIC JOB BOARD
# ========================================

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from bson import ObjectId

from visacenter.config import Settings
from visacenter.dependencies import get_job_repository, get_settings
from visacenter.repositories import JobRepository
from visacenter.schemas.job import JobListResponse, JobResponse
from visacenter.utils.jobs import (
    distinct_values,
    filter_jobs,
    is_recent,
    most_recent_job,
    with_recent_flag,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def load_jobs(jobs: JobRepository):
    """All jobs, newest first; a database failure becomes a 500."""
    try:
        return await jobs.list_jobs()
    except Exception as e:
        logger.error("Loading jobs failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Loading jobs failed: {str(e)}")


# ✅ 1. GET ALL JOBS WITH SEARCH AND FILTERS (Public)
@router.get("/jobs", response_model=JobListResponse)
async def get_all_jobs(
    search: Optional[str] = Query(None, description="Search in title, country, location or job type"),
    country: Optional[str] = Query(None, description="Filter by country"),
    job_type: Optional[str] = Query(None, description="Filter by job type"),
    jobs: JobRepository = Depends(get_job_repository),
    settings: Settings = Depends(get_settings),
):
    """Job board listing with the filter options and the "new jobs" banner target."""

    all_jobs = await load_jobs(jobs)
    now = datetime.now(timezone.utc)

    filtered = filter_jobs(all_jobs, search=search, country=country, job_type=job_type)

    # The banner shows when anything is recent and points at the newest posting
    window = settings.recent_days
    has_recent = any(is_recent(job["posted_date"], now, window) for job in all_jobs)
    recent_job = most_recent_job(all_jobs) if has_recent else None

    return {
        "jobs": [with_recent_flag(job, now, window) for job in filtered],
        "total": len(filtered),
        "countries": distinct_values(all_jobs, "country"),
        "job_types": distinct_values(all_jobs, "job_type"),
        "has_recent": has_recent,
        "recent_job": with_recent_flag(recent_job, now, window) if recent_job else None,
    }


# ✅ 2. GET SINGLE JOB (Public) - selecting a job for the application form
@router.get("/jobs/{job_id}", response_model=JobResponse)
async def get_job_details(
    job_id: str,
    jobs: JobRepository = Depends(get_job_repository),
    settings: Settings = Depends(get_settings),
):
    if not ObjectId.is_valid(job_id):
        raise HTTPException(status_code=400, detail="Invalid job ID")

    job = await jobs.get(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    return with_recent_flag(job, window_days=settings.recent_days)
