"""
Shared fixtures for the API tests.

The Mongo-backed repositories and the documents bucket are replaced through
``app.dependency_overrides`` with the in-memory doubles below, so no database
is needed. The TestClient is not used as a context manager, which keeps the
startup hook (Mongo connection) from running.
"""

from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from visacenter.config import Settings
from visacenter.dependencies import (
    get_admin_repository,
    get_application_repository,
    get_document_storage,
    get_job_repository,
    get_token_repository,
)
from visacenter.main import create_app
from visacenter.utils.security import get_password_hash

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct horse battery staple"


class FakeJobRepository:
    def __init__(self):
        self.jobs = {}
        self.fail = False

    def _check(self):
        if self.fail:
            raise RuntimeError("database unavailable")

    async def list_jobs(self):
        self._check()
        return sorted(
            (dict(job) for job in self.jobs.values()),
            key=lambda job: job["posted_date"],
            reverse=True,
        )

    async def get(self, job_id):
        self._check()
        job = self.jobs.get(job_id)
        return dict(job) if job else None

    async def insert(self, job):
        self._check()
        doc = dict(job, id=str(ObjectId()))
        self.jobs[doc["id"]] = doc
        return dict(doc)

    async def insert_many(self, jobs):
        for job in jobs:
            await self.insert(job)
        return len(jobs)

    async def update(self, job_id, fields):
        self._check()
        if job_id not in self.jobs:
            return None
        self.jobs[job_id].update(fields)
        return dict(self.jobs[job_id])

    async def delete(self, job_id):
        self._check()
        return self.jobs.pop(job_id, None) is not None

    async def count(self):
        return len(self.jobs)


class FakeApplicationRepository:
    def __init__(self):
        self.applications = {}
        self.fail = False

    async def insert(self, application):
        if self.fail:
            raise RuntimeError("insert rejected")
        doc = dict(application, id=str(ObjectId()))
        self.applications[doc["id"]] = doc
        return dict(doc)

    async def list_applications(self, limit=None):
        if self.fail:
            raise RuntimeError("database unavailable")
        rows = sorted(self.applications.values(), key=lambda app: app["created_at"], reverse=True)
        return [dict(row) for row in rows][:limit]

    async def get(self, application_id):
        app = self.applications.get(application_id)
        return dict(app) if app else None


class FakeAdminRepository:
    def __init__(self):
        self.users = {}

    async def find_by_username(self, username):
        user = self.users.get(username)
        return dict(user) if user else None

    async def create(self, username, password_hash, role="admin"):
        user = {
            "id": str(ObjectId()),
            "username": username,
            "password": password_hash,
            "role": role,
            "created_at": datetime.now(timezone.utc),
        }
        self.users[username] = user
        return dict(user)


class FakeTokenRepository:
    def __init__(self):
        self.revoked = {}

    async def revoke(self, jti, expires_at):
        self.revoked[jti] = expires_at

    async def is_revoked(self, jti):
        return jti in self.revoked


class FakeDocumentStorage:
    def __init__(self):
        self.files = {}
        self.fail_on = None  # path prefix whose upload should fail

    async def upload(self, path, data, content_type=None):
        if self.fail_on and path.startswith(self.fail_on):
            raise RuntimeError("bucket is full")
        self.files[path] = (data, content_type or "application/octet-stream")
        return path

    async def download(self, path):
        return self.files[path]


@pytest.fixture
def settings():
    return Settings(
        mongo_uri="mongodb://localhost:27017",
        database_name="visacenter_test",
        secret_key="test-secret-key",
        admin_username=ADMIN_USERNAME,
        admin_password=ADMIN_PASSWORD,
        max_upload_mb=5,
    )


@pytest.fixture
def job_repo():
    return FakeJobRepository()


@pytest.fixture
def application_repo():
    return FakeApplicationRepository()


@pytest.fixture
def admin_repo():
    repo = FakeAdminRepository()
    repo.users[ADMIN_USERNAME] = {
        "id": str(ObjectId()),
        "username": ADMIN_USERNAME,
        "password": get_password_hash(ADMIN_PASSWORD),
        "role": "admin",
    }
    return repo


@pytest.fixture
def token_repo():
    return FakeTokenRepository()


@pytest.fixture
def storage():
    return FakeDocumentStorage()


@pytest.fixture
def app(settings, job_repo, application_repo, admin_repo, token_repo, storage):
    app = create_app(settings)
    app.dependency_overrides[get_job_repository] = lambda: job_repo
    app.dependency_overrides[get_application_repository] = lambda: application_repo
    app.dependency_overrides[get_admin_repository] = lambda: admin_repo
    app.dependency_overrides[get_token_repository] = lambda: token_repo
    app.dependency_overrides[get_document_storage] = lambda: storage
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def admin_token(client):
    response = client.post("/admin/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return response.json()["access_token"]


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


def make_job(**overrides):
    job = {
        "title": "Electrician",
        "country": "Malaysia",
        "location": "Kuala Lumpur",
        "job_type": "Electrician",
        "duration": "2 years",
        "posted_date": datetime.now(timezone.utc) - timedelta(days=3),
        "description": "Commercial and residential electrical work.",
        "requirements": ["Minimum 3 years experience", "Electrical certification"],
        "salary": "MYR 3,500 - 4,500 per month",
    }
    job.update(overrides)
    return job


@pytest.fixture
def add_job(job_repo):
    """Store a job directly in the fake repository and return it with its id."""

    def _add(**overrides):
        job = make_job(**overrides)
        job["id"] = str(ObjectId())
        job_repo.jobs[job["id"]] = job
        return dict(job)

    return _add
