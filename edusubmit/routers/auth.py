from fastapi import APIRouter, Depends, HTTPException, Response, status

from edusubmit.core.config import Settings, get_settings
from edusubmit.core.deps import get_app_state, get_session_store
from edusubmit.forms.base import FormValidationError
from edusubmit.schemas.session import LoginRequest, UserRole
from edusubmit.services.app_state import AlreadyLoggedInError, AppState, SessionStore

router = APIRouter()


@router.post(
    "/login",
    responses={
        401: {"description": "Wrong teacher password"},
        409: {"description": "Already logged in"},
    },
)
def login(
    payload: LoginRequest,
    response: Response,
    state: AppState = Depends(get_app_state),
    store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
):
    if payload.role == UserRole.GUEST:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Choose student or teacher")

    try:
        state.login(payload.role, payload.password, settings.TEACHER_PASSWORD)
    except AlreadyLoggedInError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Log out before switching role")
    except FormValidationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)

    # the session is stored only once a login succeeds
    if state.session_id is None:
        session_id = store.add(state)
        response.set_cookie(settings.SESSION_COOKIE_NAME, session_id, httponly=True, samesite="lax")

    return {"role": state.role}


@router.post("/logout")
def logout(
    response: Response,
    state: AppState = Depends(get_app_state),
    store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
):
    state.logout()
    store.discard(state.session_id)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"role": state.role}
