from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from the environment or a local .env file."""
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    PROJECT_NAME: str = "Enrollment Attendance Engine"
    API_V1_STR: str = "/api/v1"

    # Database
    DATABASE_URL: str
    SQL_ECHO: bool = False

    # Bearer tokens (issued by the external identity provider, verified here)
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Optional[str] = None

    # Reject marks for dates the enrollment is not eligible for
    ENFORCE_ELIGIBILITY_ON_MARK: bool = True


settings = Settings()
