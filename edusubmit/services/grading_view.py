import logging
from typing import Optional

from edusubmit.core.reference_data import SUBJECTS, roster_groups
from edusubmit.schemas.api import ApiResponse, StoredSubmission
from edusubmit.services.sheet_client import SheetApiClient

logger = logging.getLogger(__name__)


class UnknownRowError(LookupError):
    pass


class GradingView:
    """
    Teacher-side grading state for one session.

    `grades` holds the unsaved score/feedback per row id, seeded from the last
    fetch. Saves run per row and are tracked in `saving`, so a slow save on
    one row never blocks or resets another.
    """

    def __init__(self, client: SheetApiClient):
        self.client = client
        self.submissions: list[StoredSubmission] = []
        self.grades: dict[int, dict[str, str]] = {}
        self.saving: set[int] = set()

        self.loaded = False
        self.loading = False
        self.load_error: Optional[str] = None

    async def fetch(self) -> None:
        self.loading = True
        try:
            result = await self.client.get_submissions()
        finally:
            self.loading = False

        if result.ok:
            self.submissions = list(result.data or [])
            self.load_error = None
        else:
            # degrade to an empty list but keep the reason visible
            logger.warning("fetching submissions failed: %s", result.message)
            self.submissions = []
            self.load_error = result.message

        self.grades = {
            s.row_id: {"score": s.score or "", "feedback": s.feedback or ""}
            for s in self.submissions
        }
        self.loaded = True

    async def ensure_loaded(self) -> None:
        if not self.loaded:
            await self.fetch()

    def row(self, row_id: int) -> StoredSubmission:
        for s in self.submissions:
            if s.row_id == row_id:
                return s
        raise UnknownRowError(row_id)

    def edit(self, row_id: int, score: Optional[str] = None, feedback: Optional[str] = None) -> None:
        self.row(row_id)
        buffer = self.grades.setdefault(row_id, {"score": "", "feedback": ""})
        if score is not None:
            buffer["score"] = score
        if feedback is not None:
            buffer["feedback"] = feedback

    async def save_row(self, row_id: int) -> ApiResponse:
        self.row(row_id)
        # snapshot: edits typed while the request is in flight stay unsaved
        saved = dict(self.grades.get(row_id, {"score": "", "feedback": ""}))

        self.saving.add(row_id)
        try:
            result = await self.client.submit_grade(row_id, saved["score"], saved["feedback"])
        finally:
            self.saving.discard(row_id)

        if result.ok:
            self.submissions = [
                s.model_copy(update={"score": saved["score"], "feedback": saved["feedback"]})
                if s.row_id == row_id
                else s
                for s in self.submissions
            ]
        return result

    def filtered(self, group: str = "", subject: str = "") -> list[StoredSubmission]:
        result = self.submissions
        if group:
            result = [s for s in result if s.group == group]
        if subject:
            result = [s for s in result if s.subject == subject]
        return result

    def group_options(self) -> list[str]:
        groups = set(roster_groups())
        groups.update(s.group for s in self.submissions if s.group)
        return sorted(groups)

    def subject_options(self) -> list[str]:
        subjects = set(SUBJECTS)
        subjects.update(s.subject for s in self.submissions if s.subject)
        return sorted(subjects)

    def buffer(self, row_id: int) -> dict[str, str]:
        return self.grades.get(row_id, {"score": "", "feedback": ""})
