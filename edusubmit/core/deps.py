from fastapi import Depends, Request

from edusubmit.core.config import Settings, get_settings
from edusubmit.services.app_state import AppState, SessionStore
from edusubmit.services.sheet_client import SheetApiClient

session_store = SessionStore(max_idle_seconds=get_settings().SESSION_MAX_IDLE_MINUTES * 60)


def get_session_store() -> SessionStore:
    return session_store


# the caller's stored AppState, or a throwaway guest one; only login stores a session.
def get_app_state(
    request: Request,
    store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
) -> AppState:
    state = store.get(request.cookies.get(settings.SESSION_COOKIE_NAME))
    if state is None:
        state = AppState()
    request.state.role = state.role.value
    return state


def get_sheet_client(settings: Settings = Depends(get_settings)) -> SheetApiClient:
    return SheetApiClient(settings.SCRIPT_URL, timeout=settings.HTTP_TIMEOUT_SECONDS)
