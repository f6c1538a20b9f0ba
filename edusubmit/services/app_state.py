import logging
import time
import uuid
from typing import Callable, Optional

from edusubmit.forms.login import authenticate
from edusubmit.forms.student_form import StudentForm
from edusubmit.forms.teacher_form import TeacherForm
from edusubmit.schemas.api import ApiResponse
from edusubmit.schemas.session import OverlayStatus, UserRole
from edusubmit.schemas.submission import SubmissionRecord
from edusubmit.services.grading_view import GradingView
from edusubmit.services.sheet_client import SheetApiClient

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "ส่งข้อมูลสำเร็จ!"
FAILURE_MESSAGE = "เกิดข้อผิดพลาดในการส่งข้อมูล"
UNEXPECTED_MESSAGE = "เกิดข้อผิดพลาดที่ไม่คาดคิด"


class OverlayBusyError(Exception):
    pass


class AlreadyLoggedInError(Exception):
    pass


class AppState:
    """
    Everything one browser session knows: who is logged in, the result
    overlay, and the buffers of the screen for that role.

    Role: GUEST -> STUDENT | TEACHER -> (logout) -> GUEST.
    Overlay: idle -> submitting -> success | error -> (acknowledge) -> idle.
    """

    def __init__(self):
        self.session_id: Optional[str] = None
        self.role = UserRole.GUEST
        self.overlay = OverlayStatus.IDLE
        self.status_message = ""

        self.student_form: Optional[StudentForm] = None
        self.teacher_form: Optional[TeacherForm] = None
        self.grading: Optional[GradingView] = None

        # bumped on logout so a submission that finishes afterwards is dropped
        self._epoch = 0

    def login(self, role: UserRole, password: str, teacher_password: str) -> None:
        # switching role goes through logout
        if self.role != UserRole.GUEST:
            raise AlreadyLoggedInError()

        self.role = authenticate(role, password, teacher_password)
        self.grading = None
        if self.role == UserRole.STUDENT:
            self.student_form, self.teacher_form = StudentForm(), None
        else:
            self.student_form, self.teacher_form = None, TeacherForm()
        logger.info("logged in as %s", self.role.value)

    def logout(self) -> None:
        self.role = UserRole.GUEST
        self.student_form = None
        self.teacher_form = None
        self.grading = None
        self.reset_overlay()
        self._epoch += 1

    def reset_overlay(self) -> None:
        self.overlay = OverlayStatus.IDLE
        self.status_message = ""

    def acknowledge(self) -> None:
        if self.overlay == OverlayStatus.SUBMITTING:
            raise OverlayBusyError()
        self.reset_overlay()

    def grading_view(self, client: SheetApiClient) -> GradingView:
        if self.grading is None:
            self.grading = GradingView(client)
        else:
            self.grading.client = client
        return self.grading

    async def submit(self, record: SubmissionRecord, client: SheetApiClient) -> ApiResponse:
        if self.overlay != OverlayStatus.IDLE:
            raise OverlayBusyError()

        epoch = self._epoch
        self.overlay = OverlayStatus.SUBMITTING
        self.status_message = ""

        try:
            result = await client.submit(record)
        except Exception:
            logger.exception("unexpected error while submitting")
            result = ApiResponse.error(UNEXPECTED_MESSAGE)

        if epoch != self._epoch:
            return result

        if result.ok:
            self.overlay = OverlayStatus.SUCCESS
            self.status_message = result.message or SUCCESS_MESSAGE
        else:
            self.overlay = OverlayStatus.ERROR
            self.status_message = result.message or FAILURE_MESSAGE
        logger.info("%s submission -> %s", record.role, self.overlay.value)
        return result


class SessionStore:
    """
    In-memory sessions keyed by cookie value; gone on restart.

    Only logged-in sessions are stored. Logout removes the entry and sessions
    idle longer than `max_idle_seconds` are dropped on the next add.
    """

    def __init__(self, max_idle_seconds: float = 12 * 60 * 60, clock: Callable[[], float] = time.monotonic):
        self.max_idle_seconds = max_idle_seconds
        self._clock = clock
        self._sessions: dict[str, AppState] = {}
        self._last_seen: dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: Optional[str]) -> Optional[AppState]:
        if not session_id or session_id not in self._sessions:
            return None
        now = self._clock()
        if now - self._last_seen[session_id] > self.max_idle_seconds:
            self.discard(session_id)
            return None
        self._last_seen[session_id] = now
        return self._sessions[session_id]

    def add(self, state: AppState) -> str:
        self.prune()
        session_id = uuid.uuid4().hex
        state.session_id = session_id
        self._sessions[session_id] = state
        self._last_seen[session_id] = self._clock()
        return session_id

    def discard(self, session_id: Optional[str]) -> None:
        if session_id is None:
            return
        state = self._sessions.pop(session_id, None)
        self._last_seen.pop(session_id, None)
        if state is not None:
            state.session_id = None

    def prune(self) -> None:
        cutoff = self._clock() - self.max_idle_seconds
        for session_id in [sid for sid, seen in self._last_seen.items() if seen < cutoff]:
            self.discard(session_id)

    def clear(self) -> None:
        self._sessions.clear()
        self._last_seen.clear()
