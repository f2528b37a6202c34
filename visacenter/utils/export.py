"""
Utility functions for exporting application data to CSV format.
Used by the admin dashboard's "Export" button.
"""

import csv
import io
from typing import List, Dict, Any, Optional
from datetime import datetime, date, timezone

from visacenter.utils.jobs import as_utc

# (CSV header, application field) in column order
APPLICATION_COLUMNS = [
    ("Full Name", "full_name"),
    ("Email", "email"),
    ("Phone", "phone"),
    ("Country", "country"),
    ("Job Interest", "job_interest"),
    ("Job ID", "job_id"),
    ("Job Title", "job_title"),
    ("Job Country", "job_country"),
    ("Job Location", "job_location"),
    ("Job Type", "job_type"),
    ("Job Salary", "job_salary"),
    ("Submission Date", "created_at"),
]


def one_line(value: str) -> str:
    """Collapse line breaks and whitespace runs into single spaces."""
    return " ".join(value.split())


def format_timestamp(value: Optional[datetime]) -> str:
    """ISO-8601 UTC with milliseconds, e.g. 2024-05-01T09:30:00.000Z"""
    if not isinstance(value, datetime):
        return ""
    value = as_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def export_applications_to_csv(applications: List[Dict[str, Any]]) -> str:
    """
    Export applications data to CSV format.

    Args:
        applications: Application documents, already in the desired order

    Returns:
        CSV string with a header row followed by one line per application;
        line breaks inside values are flattened to spaces
    """

    output = io.StringIO()

    fieldnames = [header for header, _ in APPLICATION_COLUMNS]
    writer = csv.DictWriter(output, fieldnames=fieldnames, lineterminator="\n")
    writer.writeheader()

    for app in applications:
        row = {}
        for header, field in APPLICATION_COLUMNS:
            value = app.get(field)
            if field == "created_at":
                value = format_timestamp(value)
            elif isinstance(value, str):
                value = one_line(value)
            row[header] = "" if value is None else value
        writer.writerow(row)

    csv_string = output.getvalue()
    output.close()

    return csv_string


def export_filename(today: Optional[date] = None) -> str:
    today = today or datetime.now(timezone.utc).date()
    return f"applications-{today.isoformat()}"


def create_csv_response_headers(filename: str) -> Dict[str, str]:
    """
    Create headers for CSV file download response.

    Args:
        filename: Name of the CSV file (without .csv extension)

    Returns:
        Dictionary of headers for FastAPI Response
    """

    return {
        "Content-Disposition": f"attachment; filename={filename}.csv",
        "Content-Type": "text/csv"
    }
