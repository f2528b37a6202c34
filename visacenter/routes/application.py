# ========================================
# visacenter/routes/application.py - APPLICATION FORM
# ========================================

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from pydantic import ValidationError

from visacenter.config import Settings
from visacenter.dependencies import (
    get_application_repository,
    get_document_storage,
    get_job_repository,
    get_settings,
)
from visacenter.errors import ApplicationValidationError, JobNotFound, StorageError
from visacenter.repositories import ApplicationRepository, DocumentStorage, JobRepository
from visacenter.schemas.application import ApplicationForm, ApplicationSubmitted
from visacenter.services.applications import Attachment, submit_application

router = APIRouter(tags=["Applications"])


def describe_errors(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in error.errors()
    )


async def read_attachment(upload: Optional[UploadFile]) -> Optional[Attachment]:
    # Browsers send an empty part for a file input left blank
    if upload is None or not upload.filename:
        return None
    contents = await upload.read()
    if not contents:
        return None
    return Attachment(filename=upload.filename, content=contents, content_type=upload.content_type)


# ✅ 1. APPLY FOR A JOB (Public)
@router.post("/applications", response_model=ApplicationSubmitted, status_code=status.HTTP_201_CREATED)
async def apply_job(
    full_name: str = Form(...),
    email: str = Form(...),
    phone: str = Form(...),
    country: str = Form(...),
    job_id: Optional[str] = Form(None),
    job_interest: Optional[str] = Form(None),
    passport: Optional[UploadFile] = File(None),
    cv: Optional[UploadFile] = File(None),
    certificates: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings),
    jobs: JobRepository = Depends(get_job_repository),
    applications: ApplicationRepository = Depends(get_application_repository),
    storage: DocumentStorage = Depends(get_document_storage),
):
    """Submit an application for the selected job with optional documents (5MB each)."""

    try:
        form = ApplicationForm(
            full_name=full_name,
            email=email,
            phone=phone,
            country=country,
            job_id=job_id or None,
            job_interest=job_interest,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=describe_errors(e))

    attachments = {
        "passport": await read_attachment(passport),
        "cv": await read_attachment(cv),
        "certificates": await read_attachment(certificates),
    }

    try:
        application = await submit_application(
            form,
            attachments,
            jobs=jobs,
            applications=applications,
            storage=storage,
            max_upload_bytes=settings.max_upload_bytes,
        )
    except ApplicationValidationError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    except JobNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    return {
        "message": "Application submitted successfully! We will contact you soon.",
        "application": application,
    }
