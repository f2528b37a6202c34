"""Tests for the CSV export of applications."""

import csv
import io
from datetime import date, datetime, timedelta, timezone

from bson import ObjectId

from visacenter.utils.export import export_applications_to_csv, export_filename, format_timestamp

HEADER = [
    "Full Name", "Email", "Phone", "Country", "Job Interest", "Job ID", "Job Title",
    "Job Country", "Job Location", "Job Type", "Job Salary", "Submission Date",
]


def application(name, created_at):
    return {
        "id": str(ObjectId()),
        "full_name": name,
        "email": f"{name.lower()}@example.com",
        "phone": "555-0100",
        "country": "Nepal",
        "job_interest": "Electrician",
        "job_id": "665f1c2e9b1e8a0012345678",
        "job_title": "Electrician",
        "job_country": "Malaysia",
        "job_location": "Kuala Lumpur",
        "job_type": "Electrician",
        "job_salary": "MYR 3,500 - 4,500 per month",
        "passport_path": None,
        "cv_path": None,
        "certificates_path": None,
        "created_at": created_at,
    }


class TestCsvFormatting:

    def test_header_and_one_line_per_row(self):
        created = datetime(2024, 5, 1, 9, 30, 0, 123456, tzinfo=timezone.utc)
        rows = [application("Asha", created), application("Bikash", created)]

        lines = export_applications_to_csv(rows).splitlines()

        assert len(lines) == 3
        assert lines[0].split(",") == HEADER

    def test_line_breaks_in_values_stay_on_one_line(self):
        created = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)
        row = application("Asha", created)
        row["full_name"] = "Asha\nRai"
        row["job_location"] = "Kuala\r\nLumpur"

        lines = export_applications_to_csv([row, application("Bikash", created)]).splitlines()

        assert len(lines) == 3
        assert lines[1].startswith("Asha Rai,")
        assert "Kuala Lumpur" in lines[1]

    def test_column_values_in_order(self):
        created = datetime(2024, 5, 1, 9, 30, 0, 123456, tzinfo=timezone.utc)

        parsed = list(csv.reader(io.StringIO(export_applications_to_csv([application("Asha", created)]))))

        assert parsed[1] == [
            "Asha", "asha@example.com", "555-0100", "Nepal", "Electrician",
            "665f1c2e9b1e8a0012345678", "Electrician", "Malaysia", "Kuala Lumpur",
            "Electrician", "MYR 3,500 - 4,500 per month", "2024-05-01T09:30:00.123Z",
        ]

    def test_empty_export_is_header_only(self):
        assert export_applications_to_csv([]).splitlines() == [",".join(HEADER)]

    def test_timestamp_format(self):
        assert format_timestamp(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05.000Z"
        offset = timezone(timedelta(hours=5, minutes=45))
        assert format_timestamp(datetime(2024, 1, 2, 8, 49, 5, tzinfo=offset)) == "2024-01-02T03:04:05.000Z"
        assert format_timestamp(None) == ""

    def test_filename(self):
        assert export_filename(date(2024, 5, 1)) == "applications-2024-05-01"


class TestExportEndpoint:

    def test_requires_admin(self, client):
        assert client.get("/export-applications").status_code == 401

    def test_download(self, client, admin_headers, application_repo):
        now = datetime.now(timezone.utc)
        for i, name in enumerate(["Older", "Middle", "Newest"]):
            row = application(name, now - timedelta(hours=3 - i))
            application_repo.applications[row["id"]] = row

        response = client.get("/export-applications", headers=admin_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        today = datetime.now(timezone.utc).date().isoformat()
        assert response.headers["content-disposition"] == f"attachment; filename=applications-{today}.csv"

        lines = response.text.splitlines()
        assert len(lines) == 4
        assert [line.split(",")[0] for line in lines[1:]] == ["Newest", "Middle", "Older"]

    def test_failure_is_generic_500(self, client, admin_headers, application_repo):
        application_repo.fail = True

        response = client.get("/export-applications", headers=admin_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to export applications"}
