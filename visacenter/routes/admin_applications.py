# ========================================
# visacenter/routes/admin_applications.py - SUBMITTED APPLICATIONS & DASHBOARD
# ========================================

import asyncio
import io
import logging
from pathlib import PurePath
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from bson import ObjectId

from visacenter.dependencies import (
    get_application_repository,
    get_document_storage,
    get_job_repository,
)
from visacenter.repositories import ApplicationRepository, DocumentStorage, JobRepository
from visacenter.schemas.application import ApplicationResponse, DashboardResponse
from visacenter.utils.auth import require_admin
from visacenter.utils.jobs import job_stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin - Applications"], dependencies=[Depends(require_admin)])

RECENT_APPLICATIONS = 5


def matches_application(application: dict, term: str) -> bool:
    term = term.lower()
    return any(
        term in str(application.get(field) or "").lower()
        for field in ("full_name", "email", "job_title", "job_interest")
    )


# ✅ 1. LIST SUBMITTED APPLICATIONS (newest first)
@router.get("/applications", response_model=List[ApplicationResponse])
async def list_applications(
    search: Optional[str] = Query(None, description="Search by applicant name, email or job title"),
    applications: ApplicationRepository = Depends(get_application_repository),
):
    try:
        result = await applications.list_applications()
    except Exception as e:
        logger.error("Loading applications failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Loading applications failed: {str(e)}")

    if search:
        result = [app for app in result if matches_application(app, search)]
    return result


# ✅ 2. DOWNLOAD AN APPLICANT DOCUMENT
@router.get("/applications/{application_id}/documents/{kind}")
async def download_document(
    application_id: str,
    kind: Literal["passport", "cv", "certificates"],
    applications: ApplicationRepository = Depends(get_application_repository),
    storage: DocumentStorage = Depends(get_document_storage),
):
    if not ObjectId.is_valid(application_id):
        raise HTTPException(status_code=400, detail="Invalid application ID")

    application = await applications.get(application_id)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")

    path = application.get(f"{kind}_path")
    if not path:
        raise HTTPException(status_code=404, detail=f"No {kind} document attached")

    try:
        contents, content_type = await storage.download(path)
    except Exception as e:
        logger.error("Downloading %s failed: %s", path, e)
        raise HTTPException(status_code=500, detail=f"Download failed: {str(e)}")

    return StreamingResponse(
        io.BytesIO(contents),
        media_type=content_type,
        headers={"Content-Disposition": f'attachment; filename="{PurePath(path).name}"'},
    )


# ✅ 3. DASHBOARD OVERVIEW
@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    jobs: JobRepository = Depends(get_job_repository),
    applications: ApplicationRepository = Depends(get_application_repository),
):
    """Stats cards and the latest applications; jobs and applications load concurrently."""

    try:
        all_jobs, all_applications = await asyncio.gather(
            jobs.list_jobs(),
            applications.list_applications(),
        )
    except Exception as e:
        logger.error("Loading dashboard failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Loading dashboard failed: {str(e)}")

    return {
        "stats": {**job_stats(all_jobs), "total_applications": len(all_applications)},
        "recent_applications": all_applications[:RECENT_APPLICATIONS],
    }
