"""Tests for the public job board endpoints."""

from datetime import datetime, timedelta, timezone

from bson import ObjectId


def days_ago(days):
    return datetime.now(timezone.utc) - timedelta(days=days)


class TestJobListing:

    def test_search_example(self, client, add_job):
        """A job posted 3 days ago matches "elect" and drives the banner."""
        job = add_job(title="Electrician", country="Malaysia", posted_date=days_ago(3))

        response = client.get("/jobs", params={"search": "elect"})

        assert response.status_code == 200
        data = response.json()
        assert [j["id"] for j in data["jobs"]] == [job["id"]]
        assert data["jobs"][0]["is_recent"] is True
        assert data["has_recent"] is True
        assert data["recent_job"]["id"] == job["id"]

    def test_jobs_newest_first_with_filter_options(self, client, add_job):
        old = add_job(title="Factory Worker", country="Japan", location="Osaka",
                      job_type="Factory Worker", posted_date=days_ago(15))
        new = add_job(posted_date=days_ago(2))

        data = client.get("/jobs").json()

        assert [j["id"] for j in data["jobs"]] == [new["id"], old["id"]]
        assert data["total"] == 2
        assert sorted(data["countries"]) == ["Japan", "Malaysia"]
        assert sorted(data["job_types"]) == ["Electrician", "Factory Worker"]

    def test_country_and_type_filters(self, client, add_job):
        add_job(country="Malaysia", job_type="Electrician")
        japan = add_job(title="Factory Worker", country="Japan", job_type="Factory Worker")

        data = client.get("/jobs", params={"country": "Japan", "job_type": "Factory Worker"}).json()

        assert [j["id"] for j in data["jobs"]] == [japan["id"]]

    def test_no_matches(self, client, add_job):
        add_job()

        data = client.get("/jobs", params={"search": "pilot"}).json()

        assert data["jobs"] == []
        assert data["total"] == 0
        # filter options still come from the full list so the UI can reset
        assert data["countries"] == ["Malaysia"]

    def test_no_banner_without_recent_jobs(self, client, add_job):
        add_job(posted_date=days_ago(10))

        data = client.get("/jobs").json()

        assert data["has_recent"] is False
        assert data["recent_job"] is None
        assert data["jobs"][0]["is_recent"] is False

    def test_banner_points_at_newest_job_even_when_filtered_out(self, client, add_job):
        add_job(title="Welder", posted_date=days_ago(8))
        newest = add_job(title="Driver", country="UAE", posted_date=days_ago(1))

        data = client.get("/jobs", params={"search": "welder"}).json()

        assert data["recent_job"]["id"] == newest["id"]

    def test_recent_window_comes_from_settings(self, client, settings, add_job):
        settings.recent_days = 3
        job = add_job(posted_date=days_ago(5))

        data = client.get("/jobs").json()

        assert data["jobs"][0]["is_recent"] is False
        assert data["has_recent"] is False
        assert client.get(f"/jobs/{job['id']}").json()["is_recent"] is False

    def test_database_failure(self, client, job_repo):
        job_repo.fail = True

        response = client.get("/jobs")

        assert response.status_code == 500
        assert "database unavailable" in response.json()["detail"]


class TestJobDetails:

    def test_get_job(self, client, add_job):
        job = add_job()

        response = client.get(f"/jobs/{job['id']}")

        assert response.status_code == 200
        assert response.json()["title"] == "Electrician"
        assert response.json()["requirements"] == job["requirements"]

    def test_invalid_id(self, client):
        assert client.get("/jobs/not-an-id").status_code == 400

    def test_missing_job(self, client):
        assert client.get(f"/jobs/{ObjectId()}").status_code == 404
