from fastapi import APIRouter, Depends, HTTPException, status

from edusubmit.core.deps import get_app_state
from edusubmit.schemas.session import OverlayRead
from edusubmit.services.app_state import AppState, OverlayBusyError

router = APIRouter()


def overlay_read(state: AppState) -> OverlayRead:
    return OverlayRead(status=state.overlay, message=state.status_message)


@router.get("", response_model=OverlayRead)
def get_overlay(state: AppState = Depends(get_app_state)):
    return overlay_read(state)


@router.post(
    "/acknowledge",
    response_model=OverlayRead,
    responses={
        409: {"description": "Submission still in progress"},
    },
)
def acknowledge(state: AppState = Depends(get_app_state)):
    try:
        state.acknowledge()
    except OverlayBusyError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A submission is still in progress")
    return overlay_read(state)
