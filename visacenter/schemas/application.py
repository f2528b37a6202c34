# ========================================
# visacenter/schemas/application.py
# ========================================

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import List, Optional
from datetime import datetime

from visacenter.utils.export import one_line


# 1. Input: Applicant fields from the application form
class ApplicationForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    job_id: Optional[str] = None  # the selected job; required on submit
    job_interest: Optional[str] = None  # locked to the job title once a job is chosen

    @field_validator("full_name", "phone", "country", "job_interest")
    @classmethod
    def single_line(cls, value):
        # stored values never span lines
        return value if value is None else one_line(value)


# 2. Output: A stored application with its job snapshot
class ApplicationResponse(BaseModel):
    id: str
    full_name: str
    email: str
    phone: str
    country: str
    job_interest: str

    # Job as it was when the applicant applied
    job_id: str
    job_title: str
    job_country: str
    job_location: str
    job_type: str
    job_salary: str

    passport_path: Optional[str] = None
    cv_path: Optional[str] = None
    certificates_path: Optional[str] = None
    created_at: datetime


# 3. Output: Result of a successful submission
class ApplicationSubmitted(BaseModel):
    message: str
    application: ApplicationResponse


# 4. Output: Dashboard overview
class DashboardStats(BaseModel):
    total_jobs: int
    countries: int
    posted_this_week: int
    total_applications: int


class DashboardResponse(BaseModel):
    stats: DashboardStats
    recent_applications: List[ApplicationResponse]
