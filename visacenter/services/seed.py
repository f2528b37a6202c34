"""Startup seeding: the bootstrap admin account and the sample job postings."""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from visacenter.config import Settings
from visacenter.repositories import AdminRepository, JobRepository
from visacenter.utils.security import get_password_hash

logger = logging.getLogger(__name__)


def default_jobs(now: Optional[datetime] = None) -> List[dict]:
    now = now or datetime.now(timezone.utc)
    return [
        {
            "title": "Electrician",
            "country": "Malaysia",
            "location": "Kuala Lumpur",
            "job_type": "Electrician",
            "duration": "2 years",
            "posted_date": now - timedelta(days=5),
            "description": (
                "We are looking for experienced electricians to work on commercial and residential "
                "projects in Kuala Lumpur. The position includes installation, maintenance, and "
                "repair of electrical systems."
            ),
            "requirements": [
                "Minimum 3 years experience",
                "Electrical certification",
                "English communication skills",
                "Ability to read electrical plans",
            ],
            "salary": "MYR 3,500 - 4,500 per month",
        },
        {
            "title": "Factory Worker",
            "country": "Japan",
            "location": "Osaka",
            "job_type": "Factory Worker",
            "duration": "3 years",
            "posted_date": now - timedelta(days=20),
            "description": (
                "Assembly line workers needed for electronics manufacturing plant in Osaka. "
                "Training will be provided, including Japanese language lessons."
            ),
            "requirements": [
                "Good manual dexterity",
                "Ability to stand for long periods",
                "Basic English",
                "Willingness to learn Japanese",
            ],
            "salary": "JPY 180,000 - 220,000 per month",
        },
    ]


async def ensure_admin_user(settings: Settings, admins: AdminRepository) -> bool:
    """Create the configured admin account if it does not exist yet."""
    if not settings.admin_username or not settings.admin_password:
        logger.warning("ADMIN_USERNAME/ADMIN_PASSWORD not set; no admin account seeded")
        return False

    if await admins.find_by_username(settings.admin_username):
        return False

    await admins.create(settings.admin_username, get_password_hash(settings.admin_password))
    logger.info("Seeded admin account '%s'", settings.admin_username)
    return True


async def seed_default_jobs(jobs: JobRepository) -> int:
    if await jobs.count() > 0:
        return 0
    inserted = await jobs.insert_many(default_jobs())
    logger.info("Seeded %d default jobs", inserted)
    return inserted
