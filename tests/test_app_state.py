import asyncio

import pytest

from edusubmit.forms.base import FormValidationError
from edusubmit.schemas.api import ApiResponse
from edusubmit.schemas.session import OverlayStatus, UserRole
from edusubmit.schemas.submission import SubmissionRecord
from edusubmit.services.app_state import (
    FAILURE_MESSAGE,
    SUCCESS_MESSAGE,
    UNEXPECTED_MESSAGE,
    AlreadyLoggedInError,
    AppState,
    OverlayBusyError,
    SessionStore,
)

RECORD = SubmissionRecord(role="STUDENT", subject="Cloud Computing", timestamp="2025-06-01T08:00:00.000Z")


class ReplyClient:
    def __init__(self, reply=None, exc=None, gate=None):
        self.reply = reply
        self.exc = exc
        self.gate = gate

    async def submit(self, record):
        if self.gate is not None:
            await self.gate.wait()
        if self.exc is not None:
            raise self.exc
        return self.reply


def logged_in(role=UserRole.STUDENT) -> AppState:
    state = AppState()
    state.login(role, "pw", "pw")
    return state


def test_starts_as_guest():
    state = AppState()
    assert state.role == UserRole.GUEST
    assert state.overlay == OverlayStatus.IDLE


def test_login_builds_role_screen():
    student = logged_in(UserRole.STUDENT)
    assert student.student_form is not None and student.teacher_form is None

    teacher = logged_in(UserRole.TEACHER)
    assert teacher.teacher_form is not None and teacher.student_form is None


def test_wrong_password_stays_guest():
    state = AppState()
    with pytest.raises(FormValidationError):
        state.login(UserRole.TEACHER, "wrong", "pw")
    assert state.role == UserRole.GUEST


def test_success_uses_backend_message_or_default():
    state = logged_in()
    asyncio.run(state.submit(RECORD, ReplyClient(ApiResponse(status="success", message="ได้รับงานแล้ว"))))
    assert state.overlay == OverlayStatus.SUCCESS
    assert state.status_message == "ได้รับงานแล้ว"

    state.reset_overlay()
    asyncio.run(state.submit(RECORD, ReplyClient(ApiResponse(status="success", message=""))))
    assert state.status_message == SUCCESS_MESSAGE


def test_error_response_shows_error():
    state = logged_in()
    asyncio.run(state.submit(RECORD, ReplyClient(ApiResponse(status="error", message=""))))
    assert state.overlay == OverlayStatus.ERROR
    assert state.status_message == FAILURE_MESSAGE


def test_unexpected_exception_is_contained():
    state = logged_in()
    result = asyncio.run(state.submit(RECORD, ReplyClient(exc=RuntimeError("boom"))))
    assert result.status == "error"
    assert state.overlay == OverlayStatus.ERROR
    assert state.status_message == UNEXPECTED_MESSAGE


def test_second_submission_refused_until_acknowledged():
    state = logged_in()
    client = ReplyClient(ApiResponse(status="success", message="ok"))
    asyncio.run(state.submit(RECORD, client))

    with pytest.raises(OverlayBusyError):
        asyncio.run(state.submit(RECORD, client))

    state.acknowledge()
    asyncio.run(state.submit(RECORD, client))
    assert state.overlay == OverlayStatus.SUCCESS


def test_submission_in_flight_blocks_another():
    async def scenario():
        state = logged_in()
        gate = asyncio.Event()
        client = ReplyClient(ApiResponse(status="success", message="ok"), gate=gate)

        first = asyncio.create_task(state.submit(RECORD, client))
        await asyncio.sleep(0)
        assert state.overlay == OverlayStatus.SUBMITTING

        with pytest.raises(OverlayBusyError):
            await state.submit(RECORD, client)

        gate.set()
        await first
        assert state.overlay == OverlayStatus.SUCCESS

    asyncio.run(scenario())


def test_logout_resets_overlay_and_forms():
    state = logged_in()
    asyncio.run(state.submit(RECORD, ReplyClient(ApiResponse(status="error", message="bad"))))

    state.logout()

    assert state.role == UserRole.GUEST
    assert state.overlay == OverlayStatus.IDLE
    assert state.status_message == ""
    assert state.student_form is None


def test_result_arriving_after_logout_is_dropped():
    async def scenario():
        state = logged_in()
        gate = asyncio.Event()
        client = ReplyClient(ApiResponse(status="success", message="late"), gate=gate)

        task = asyncio.create_task(state.submit(RECORD, client))
        await asyncio.sleep(0)
        state.logout()
        gate.set()
        await task

        assert state.overlay == OverlayStatus.IDLE
        assert state.status_message == ""

    asyncio.run(scenario())


def test_acknowledge_refused_while_submitting():
    async def scenario():
        state = logged_in()
        gate = asyncio.Event()
        client = ReplyClient(ApiResponse(status="success", message="ok"), gate=gate)

        first = asyncio.create_task(state.submit(RECORD, client))
        await asyncio.sleep(0)

        with pytest.raises(OverlayBusyError):
            state.acknowledge()
        assert state.overlay == OverlayStatus.SUBMITTING
        with pytest.raises(OverlayBusyError):
            await state.submit(RECORD, client)

        gate.set()
        await first
        assert state.overlay == OverlayStatus.SUCCESS

    asyncio.run(scenario())


def test_login_from_logged_in_role_is_refused():
    state = logged_in(UserRole.STUDENT)
    form = state.student_form

    with pytest.raises(AlreadyLoggedInError):
        state.login(UserRole.TEACHER, "pw", "pw")

    assert state.role == UserRole.STUDENT
    assert state.student_form is form
    assert state.teacher_form is None


def test_role_switch_drops_previous_role_result():
    async def scenario():
        state = logged_in(UserRole.STUDENT)
        gate = asyncio.Event()
        client = ReplyClient(ApiResponse(status="error", message="late"), gate=gate)

        task = asyncio.create_task(state.submit(RECORD, client))
        await asyncio.sleep(0)
        state.logout()
        state.login(UserRole.TEACHER, "pw", "pw")
        gate.set()
        await task

        assert state.role == UserRole.TEACHER
        assert state.overlay == OverlayStatus.IDLE
        assert state.status_message == ""

    asyncio.run(scenario())


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_idle_session_expires():
    clock = FakeClock()
    store = SessionStore(max_idle_seconds=60, clock=clock)
    state = logged_in()
    session_id = store.add(state)

    clock.now = 30
    assert store.get(session_id) is state
    clock.now = 89
    assert store.get(session_id) is state

    clock.now = 200
    assert store.get(session_id) is None
    assert len(store) == 0
    assert state.session_id is None


def test_add_prunes_idle_sessions():
    clock = FakeClock()
    store = SessionStore(max_idle_seconds=60, clock=clock)
    store.add(logged_in())
    store.add(logged_in())

    clock.now = 100
    fresh = store.add(logged_in())

    assert len(store) == 1
    assert store.get(fresh) is not None


def test_discard_forgets_session():
    store = SessionStore()
    state = logged_in()
    session_id = store.add(state)

    store.discard(session_id)
    store.discard(None)

    assert store.get(session_id) is None
    assert state.session_id is None
