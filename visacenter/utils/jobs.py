"""
Job listing helpers shared by the public board and the admin dashboard:
filtering, the "recent" rule and requirement parsing.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

RECENT_DAYS = 10
DAY = timedelta(days=1)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def days_since(posted_date: datetime, now: Optional[datetime] = None) -> int:
    now = as_utc(now or datetime.now(timezone.utc))
    return (now - as_utc(posted_date)) // DAY


def is_recent(posted_date: datetime, now: Optional[datetime] = None, window_days: int = RECENT_DAYS) -> bool:
    """A job is recent while fewer than ``window_days`` whole days have passed."""
    return days_since(posted_date, now) < window_days


def matches_search(job: Dict[str, Any], term: str) -> bool:
    term = term.lower()
    return any(
        term in str(job.get(field) or "").lower()
        for field in ("title", "country", "location", "job_type")
    )


def filter_jobs(
    jobs: Iterable[Dict[str, Any]],
    search: Optional[str] = None,
    country: Optional[str] = None,
    job_type: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Keep the jobs matching every filter that was given, in their original order."""
    result = list(jobs)
    if country:
        result = [job for job in result if job.get("country") == country]
    if job_type:
        result = [job for job in result if job.get("job_type") == job_type]
    if search:
        result = [job for job in result if matches_search(job, search)]
    return result


def most_recent_job(jobs: Iterable[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    jobs = list(jobs)
    if not jobs:
        return None
    return max(jobs, key=lambda job: as_utc(job["posted_date"]))


def distinct_values(jobs: Iterable[Dict[str, Any]], field: str) -> List[str]:
    """Unique values of ``field`` in first-seen order (filter dropdown options)."""
    seen = []
    for job in jobs:
        value = job.get(field)
        if value and value not in seen:
            seen.append(value)
    return seen


def parse_requirements(text: str) -> List[str]:
    """One requirement per line; lines are trimmed and blank ones dropped."""
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def with_recent_flag(
    job: Dict[str, Any], now: Optional[datetime] = None, window_days: int = RECENT_DAYS
) -> Dict[str, Any]:
    return {**job, "is_recent": is_recent(job["posted_date"], now, window_days)}


def job_stats(jobs: List[Dict[str, Any]], now: Optional[datetime] = None) -> Dict[str, int]:
    now = as_utc(now or datetime.now(timezone.utc))
    week_ago = now - timedelta(days=7)
    return {
        "total_jobs": len(jobs),
        "countries": len(distinct_values(jobs, "country")),
        "posted_this_week": sum(1 for job in jobs if as_utc(job["posted_date"]) >= week_ago),
    }
