from fastapi import Depends, HTTPException, status

from edusubmit.core.deps import get_app_state
from edusubmit.schemas.session import UserRole
from edusubmit.services.app_state import AppState


def require_student(state: AppState = Depends(get_app_state)) -> AppState:
    if state.role != UserRole.STUDENT:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Student role required",
        )
    return state


def require_teacher(state: AppState = Depends(get_app_state)) -> AppState:
    if state.role != UserRole.TEACHER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Teacher role required",
        )
    return state
