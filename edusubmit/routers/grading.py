from fastapi import APIRouter, Depends, HTTPException

from edusubmit.core.deps import get_sheet_client
from edusubmit.core.permissions import require_teacher
from edusubmit.schemas.session import GradeEdit, GradeSaveRead, GradingListRead, GradingRowRead
from edusubmit.services.app_state import AppState
from edusubmit.services.grading_view import GradingView, UnknownRowError
from edusubmit.services.sheet_client import SheetApiClient

router = APIRouter()


def _row_read(view: GradingView, row_id: int) -> GradingRowRead:
    submission = view.row(row_id)
    buffer = view.buffer(row_id)
    return GradingRowRead(
        submission=submission,
        score=buffer["score"],
        feedback=buffer["feedback"],
        saving=row_id in view.saving,
    )


def _list_read(view: GradingView, group: str, subject: str) -> GradingListRead:
    rows = [_row_read(view, s.row_id) for s in view.filtered(group, subject)]
    return GradingListRead(
        loading=view.loading,
        load_error=view.load_error,
        total=len(rows),
        rows=rows,
        group_options=view.group_options(),
        subject_options=view.subject_options(),
    )


@router.get("", response_model=GradingListRead)
async def list_submissions(
    group: str = "",
    subject: str = "",
    state: AppState = Depends(require_teacher),
    client: SheetApiClient = Depends(get_sheet_client),
):
    view = state.grading_view(client)
    await view.ensure_loaded()
    return _list_read(view, group, subject)


@router.post("/refresh", response_model=GradingListRead)
async def refresh(
    group: str = "",
    subject: str = "",
    state: AppState = Depends(require_teacher),
    client: SheetApiClient = Depends(get_sheet_client),
):
    view = state.grading_view(client)
    await view.fetch()
    return _list_read(view, group, subject)


@router.put("/{row_id}", response_model=GradingRowRead)
def edit_grade(
    row_id: int,
    payload: GradeEdit,
    state: AppState = Depends(require_teacher),
    client: SheetApiClient = Depends(get_sheet_client),
):
    view = state.grading_view(client)
    try:
        view.edit(row_id, score=payload.score, feedback=payload.feedback)
    except UnknownRowError:
        raise HTTPException(status_code=404, detail="Submission not found")
    return _row_read(view, row_id)


@router.post("/{row_id}/save", response_model=GradeSaveRead)
async def save_grade(
    row_id: int,
    state: AppState = Depends(require_teacher),
    client: SheetApiClient = Depends(get_sheet_client),
):
    view = state.grading_view(client)
    try:
        result = await view.save_row(row_id)
    except UnknownRowError:
        raise HTTPException(status_code=404, detail="Submission not found")

    message = "บันทึกคะแนนเรียบร้อย" if result.ok else f"เกิดข้อผิดพลาด: {result.message}"
    return GradeSaveRead(status=result.status, message=message, row=_row_read(view, row_id))
