from functools import lru_cache

from pydantic_settings import BaseSettings

# Google Apps Script web app bound to the submissions sheet.
# DEV ONLY: the real deployment URL and password come from env vars / .env.
DEFAULT_SCRIPT_URL = "https://script.google.com/macros/s/CHANGE-ME/exec"


class Settings(BaseSettings):
    PROJECT_NAME: str = "EduSubmit"

    # Remote spreadsheet endpoint
    SCRIPT_URL: str = DEFAULT_SCRIPT_URL
    HTTP_TIMEOUT_SECONDS: float = 60.0

    # Static teacher password (compared as-is, no accounts)
    TEACHER_PASSWORD: str = "teacher1234"

    # File upload settings
    MAX_UPLOAD_MB: int = 10
    ACCEPTED_FILE_TYPES: str = ".pdf,.jpg,.jpeg,.png,.doc,.docx,.xls,.xlsx"

    SESSION_COOKIE_NAME: str = "edusubmit_session"
    SESSION_MAX_IDLE_MINUTES: int = 12 * 60

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
