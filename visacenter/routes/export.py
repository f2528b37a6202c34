# ========================================
# visacenter/routes/export.py - CSV EXPORT OF APPLICATIONS
# ========================================

import logging

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from visacenter.dependencies import get_application_repository
from visacenter.repositories import ApplicationRepository
from visacenter.utils.auth import require_admin
from visacenter.utils.export import (
    create_csv_response_headers,
    export_applications_to_csv,
    export_filename,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Export"])


@router.get("/export-applications", dependencies=[Depends(require_admin)])
async def export_applications(applications: ApplicationRepository = Depends(get_application_repository)):
    """Download every application, newest first, as a CSV file."""

    try:
        rows = await applications.list_applications()
        csv_string = export_applications_to_csv(rows)
    except Exception as e:
        # details stay in the server log
        logger.exception("Error exporting applications: %s", e)
        return JSONResponse(status_code=500, content={"error": "Failed to export applications"})

    logger.info("Exported %d applications", len(rows))
    return Response(
        content=csv_string,
        media_type="text/csv",
        headers=create_csv_response_headers(export_filename()),
    )
