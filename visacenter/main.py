# ========================================
# visacenter/main.py
# ========================================

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from visacenter.config import Settings
from visacenter.database import Database
from visacenter.errors import NotAuthenticated
from visacenter.repositories import AdminRepository, JobRepository
from visacenter.services.seed import ensure_admin_user, seed_default_jobs

# ===========================
# IMPORT ALL ROUTERS
# ===========================

# Public site
from visacenter.routes.content import router as content_router
from visacenter.routes.job import router as job_router
from visacenter.routes.application import router as application_router

# Admin
from visacenter.routes.admin_auth import router as admin_auth_router
from visacenter.routes.admin_jobs import router as admin_jobs_router
from visacenter.routes.admin_applications import router as admin_applications_router
from visacenter.routes.export import router as export_router

logger = logging.getLogger(__name__)

LOGIN_PATH = "/admin/login"


def configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Visa Center Jobs API",
        description="Job board, application form and admin dashboard for the Visa Center website",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.settings = settings
    app.state.database = Database(settings)

    # ===========================
    # CORS MIDDLEWARE
    # ===========================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ===========================
    # DATABASE EVENTS
    # ===========================

    @app.on_event("startup")
    async def start_db():
        """Connect to MongoDB and seed the admin account (and sample jobs if enabled)"""
        settings.check_required()
        database = app.state.database
        await database.connect()
        await ensure_admin_user(settings, AdminRepository(database.db))
        if settings.seed_default_jobs:
            await seed_default_jobs(JobRepository(database.db))

    @app.on_event("shutdown")
    async def stop_db():
        await app.state.database.close()

    # ===========================
    # ADMIN GUARD
    # ===========================

    @app.exception_handler(NotAuthenticated)
    async def not_authenticated_handler(request: Request, exc: NotAuthenticated):
        # Browsers go to the login view; API clients get a 401
        if "text/html" in request.headers.get("accept", ""):
            return RedirectResponse(url=LOGIN_PATH, status_code=303)
        return JSONResponse(
            status_code=401,
            content={"detail": exc.detail},
            headers={"WWW-Authenticate": "Bearer"},
        )

    # ===========================
    # REGISTER ROUTERS
    # ===========================

    app.include_router(content_router)
    app.include_router(job_router, tags=["Jobs"])
    app.include_router(application_router)

    app.include_router(admin_auth_router)
    app.include_router(admin_jobs_router)
    app.include_router(admin_applications_router)
    app.include_router(export_router)

    # ===========================
    # ROOT ENDPOINTS
    # ===========================

    @app.get("/")
    async def root():
        """API root endpoint with feature summary"""
        return {
            "status": "Visa Center Jobs API running",
            "version": "1.0.0",
            "documentation": "/docs",
            "endpoints": {
                "public": [
                    "/jobs (GET with search, country, job_type)",
                    "/jobs/{job_id}",
                    "/applications (POST multipart)",
                    "/content/translations",
                    "/content/navigation",
                ],
                "admin": [
                    "/admin/login",
                    "/admin/logout",
                    "/admin/session",
                    "/admin/jobs (GET/POST/PUT/DELETE)",
                    "/admin/applications",
                    "/admin/applications/{id}/documents/{kind}",
                    "/admin/dashboard",
                    "/export-applications",
                ],
            },
        }

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": "1.0.0"}

    return app


app = create_app()
