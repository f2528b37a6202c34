from fastapi import Request

from visacenter.config import Settings
from visacenter.repositories import (
    AdminRepository,
    ApplicationRepository,
    DocumentStorage,
    JobRepository,
    TokenRepository,
)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_job_repository(request: Request) -> JobRepository:
    return JobRepository(request.app.state.database.db)


def get_application_repository(request: Request) -> ApplicationRepository:
    return ApplicationRepository(request.app.state.database.db)


def get_admin_repository(request: Request) -> AdminRepository:
    return AdminRepository(request.app.state.database.db)


def get_token_repository(request: Request) -> TokenRepository:
    return TokenRepository(request.app.state.database.db)


def get_document_storage(request: Request) -> DocumentStorage:
    return DocumentStorage(request.app.state.database.fs_bucket)
