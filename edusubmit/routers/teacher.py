from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from edusubmit.core.config import Settings, get_settings
from edusubmit.core.deps import get_sheet_client
from edusubmit.core.permissions import require_teacher
from edusubmit.core.reference_data import LEVELS, ROOMS
from edusubmit.forms.base import FormValidationError
from edusubmit.forms.teacher_form import TeacherForm
from edusubmit.routers.overlay import overlay_read
from edusubmit.routers.student import attached_file_read
from edusubmit.schemas.session import OverlayRead, TeacherFormRead, TeacherFormUpdate
from edusubmit.services.app_state import AppState, OverlayBusyError
from edusubmit.services.file_encoder import encode_upload
from edusubmit.services.sheet_client import SheetApiClient

router = APIRouter()


def _form_read(form: TeacherForm) -> TeacherFormRead:
    return TeacherFormRead(
        level=form.level,
        year=form.year,
        room=form.room,
        target_group=form.target_group,
        level_options=LEVELS,
        year_options=form.year_options,
        room_options=ROOMS,
        subject=form.subject,
        topic=form.topic,
        due_date=form.due_date,
        file=attached_file_read(form),
    )


@router.get("/form", response_model=TeacherFormRead)
def get_form(state: AppState = Depends(require_teacher)):
    return _form_read(state.teacher_form)


@router.put("/form", response_model=TeacherFormRead)
def update_form(payload: TeacherFormUpdate, state: AppState = Depends(require_teacher)):
    form = state.teacher_form
    try:
        form.select(level=payload.level, year=payload.year, room=payload.room)
    except FormValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    if payload.subject is not None:
        form.subject = payload.subject
    if payload.topic is not None:
        form.topic = payload.topic
    if payload.due_date is not None:
        form.due_date = payload.due_date
    return _form_read(form)


@router.post("/file", response_model=TeacherFormRead)
async def attach_file(
    file: UploadFile = File(...),
    state: AppState = Depends(require_teacher),
    settings: Settings = Depends(get_settings),
):
    encoded = await encode_upload(file, settings.MAX_UPLOAD_MB)
    try:
        state.teacher_form.attach(encoded)
    except FormValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return _form_read(state.teacher_form)


@router.delete("/file", response_model=TeacherFormRead)
def clear_file(state: AppState = Depends(require_teacher)):
    state.teacher_form.clear_file()
    return _form_read(state.teacher_form)


@router.post("/submit", response_model=OverlayRead)
async def submit(
    state: AppState = Depends(require_teacher),
    client: SheetApiClient = Depends(get_sheet_client),
):
    try:
        record = state.teacher_form.build_record()
    except FormValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    try:
        await state.submit(record, client)
    except OverlayBusyError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A submission is already in progress")

    return overlay_read(state)
