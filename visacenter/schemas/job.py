# ========================================
# visacenter/schemas/job.py
# ========================================

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

from visacenter.utils.jobs import parse_requirements


# 1. Input: What the admin submits from the job form (create and edit)
class JobForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    job_type: str = Field(..., min_length=1)  # Electrician, Factory Worker, ...
    duration: str = ""
    description: str = ""
    requirements: str = ""  # one requirement per line
    salary: str = Field(..., min_length=1)

    def to_document(self) -> dict:
        """Form fields as stored on the job, requirements split into a list."""
        data = self.model_dump()
        data["requirements"] = parse_requirements(self.requirements)
        return data


# 2. Output: A job as shown on the listing and the dashboard
class JobResponse(BaseModel):
    id: str
    title: str
    country: str
    location: str
    job_type: str
    duration: str = ""
    posted_date: datetime
    description: str = ""
    requirements: List[str] = []
    salary: str
    is_recent: bool = False


# 3. Output: Public listing with filter options and the "new jobs" banner
class JobListResponse(BaseModel):
    jobs: List[JobResponse]
    total: int
    countries: List[str]
    job_types: List[str]
    has_recent: bool = False
    recent_job: Optional[JobResponse] = None


# 4. Output: Dashboard statistics cards
class JobStats(BaseModel):
    total_jobs: int
    countries: int
    posted_this_week: int


# 5. Output: Admin listing
class AdminJobListResponse(BaseModel):
    jobs: List[JobResponse]
    total: int
    countries: List[str]
    job_types: List[str]
    stats: JobStats
