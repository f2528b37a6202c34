import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

# .env sits next to the package directory
ENV_PATH = Path(__file__).resolve().parents[1] / ".env"


class Settings(BaseModel):
    mongo_uri: Optional[str] = None
    database_name: str = "visacenter"
    secret_key: Optional[str] = None
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    allowed_origins: List[str] = []
    admin_username: Optional[str] = None
    admin_password: Optional[str] = None
    documents_bucket: str = "applicant-documents"
    max_upload_mb: int = 5
    recent_days: int = 10
    seed_default_jobs: bool = False
    log_level: str = "INFO"

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment (and .env if present)."""
        if ENV_PATH.exists():
            load_dotenv(dotenv_path=ENV_PATH)
        else:
            load_dotenv()

        raw_origins = os.getenv("ALLOWED_ORIGINS", "")
        return cls(
            mongo_uri=os.getenv("MONGO_URI"),
            database_name=os.getenv("DATABASE_NAME", "visacenter"),
            secret_key=os.getenv("SECRET_KEY"),
            access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60)),
            allowed_origins=[o.strip() for o in raw_origins.split(",") if o.strip()],
            admin_username=os.getenv("ADMIN_USERNAME"),
            admin_password=os.getenv("ADMIN_PASSWORD"),
            documents_bucket=os.getenv("DOCUMENTS_BUCKET", "applicant-documents"),
            max_upload_mb=int(os.getenv("MAX_UPLOAD_MB", 5)),
            recent_days=int(os.getenv("RECENT_DAYS", 10)),
            seed_default_jobs=os.getenv("SEED_DEFAULT_JOBS", "false").lower() in ("1", "true", "yes"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def check_required(self) -> None:
        """Raise if a setting the running service cannot do without is missing."""
        if not self.mongo_uri:
            raise ValueError("MONGO_URI environment variable is not set! Check your .env file.")
        if not self.secret_key:
            raise ValueError("SECRET_KEY environment variable is not set! Check your .env file.")
