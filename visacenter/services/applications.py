"""
Application submission: validate the form and attachments, store the
documents, then record the application with a snapshot of the job.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Dict, Optional

from bson import ObjectId

from visacenter.errors import ApplicationValidationError, JobNotFound, StorageError
from visacenter.repositories import ApplicationRepository, DocumentStorage, JobRepository
from visacenter.schemas.application import ApplicationForm

logger = logging.getLogger(__name__)

# form field -> label used in messages; order is the upload order
DOCUMENT_FIELDS = {
    "passport": "Passport",
    "cv": "CV",
    "certificates": "Certificates",
}


@dataclass
class Attachment:
    filename: str
    content: bytes
    content_type: Optional[str] = None


def document_path(field: str, filename: str, now: datetime) -> str:
    """Storage name for an uploaded document; the random part keeps same-millisecond uploads apart."""
    stamp = int(now.timestamp() * 1000)
    return f"{field}/{stamp}_{uuid.uuid4().hex}_{field}{PurePath(filename or '').suffix.lower()}"


def check_attachments(attachments: Dict[str, Optional[Attachment]], max_bytes: int) -> None:
    limit_mb = max_bytes // (1024 * 1024)
    for field, label in DOCUMENT_FIELDS.items():
        attachment = attachments.get(field)
        if attachment is not None and len(attachment.content) > max_bytes:
            raise ApplicationValidationError(f"{label} file exceeds the {limit_mb}MB limit", status_code=413)


async def submit_application(
    form: ApplicationForm,
    attachments: Dict[str, Optional[Attachment]],
    jobs: JobRepository,
    applications: ApplicationRepository,
    storage: DocumentStorage,
    max_upload_bytes: int,
    now: Optional[datetime] = None,
) -> dict:
    if not form.job_id:
        raise ApplicationValidationError("Please select a job before submitting your application")
    if not ObjectId.is_valid(form.job_id):
        raise ApplicationValidationError("Invalid Job ID")

    check_attachments(attachments, max_upload_bytes)

    job = await jobs.get(form.job_id)
    if job is None:
        raise JobNotFound("Job not found")

    now = now or datetime.now(timezone.utc)

    # Uploads run one after another; a failure stops here and earlier
    # uploads stay in the bucket.
    paths = {}
    for field in DOCUMENT_FIELDS:
        attachment = attachments.get(field)
        if attachment is None:
            paths[field] = None
            continue
        path = document_path(field, attachment.filename, now)
        try:
            paths[field] = await storage.upload(path, attachment.content, attachment.content_type)
        except Exception as e:
            logger.error("Uploading %s for job %s failed: %s", field, job["id"], e)
            raise StorageError(f"Upload failed: {e}") from e

    application_data = {
        "full_name": form.full_name,
        "email": form.email,
        "phone": form.phone,
        "country": form.country,
        "job_interest": job["title"],
        "job_id": job["id"],
        "job_title": job["title"],
        "job_country": job["country"],
        "job_location": job["location"],
        "job_type": job["job_type"],
        "job_salary": job["salary"],
        "passport_path": paths["passport"],
        "cv_path": paths["cv"],
        "certificates_path": paths["certificates"],
        "created_at": now,
    }

    try:
        application = await applications.insert(application_data)
    except Exception as e:
        logger.error("Saving application for job %s failed: %s", job["id"], e)
        raise StorageError(f"Saving application failed: {e}") from e

    logger.info(
        "Application %s received for job %s (%d documents)",
        application["id"], job["id"], sum(1 for path in paths.values() if path),
    )
    return application
