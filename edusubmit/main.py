import logging

from fastapi import Depends, FastAPI

from edusubmit.core.config import Settings, get_settings
from edusubmit.core.deps import get_app_state
from edusubmit.core.logging_middleware import LoggingMiddleware
from edusubmit.core.reference_data import SUBJECTS
from edusubmit.routers.auth import router as auth_router
from edusubmit.routers.grading import router as grading_router
from edusubmit.routers.overlay import overlay_read, router as overlay_router
from edusubmit.routers.student import router as student_router
from edusubmit.routers.teacher import router as teacher_router
from edusubmit.schemas.session import SessionRead
from edusubmit.services.app_state import AppState

logging.basicConfig(level=logging.INFO)

app = FastAPI(title=get_settings().PROJECT_NAME)

# Middleware
app.add_middleware(LoggingMiddleware)


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/session", response_model=SessionRead)
def session(
    state: AppState = Depends(get_app_state),
    settings: Settings = Depends(get_settings),
):
    return SessionRead(
        role=state.role,
        overlay=overlay_read(state),
        subjects=SUBJECTS,
        accepted_file_types=settings.ACCEPTED_FILE_TYPES,
        max_upload_mb=settings.MAX_UPLOAD_MB,
    )


# Include routers
app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(student_router, prefix="/student", tags=["student"])
app.include_router(teacher_router, prefix="/teacher", tags=["teacher"])
app.include_router(grading_router, prefix="/grading", tags=["grading"])
app.include_router(overlay_router, prefix="/overlay", tags=["overlay"])
