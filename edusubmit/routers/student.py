from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from edusubmit.core.config import Settings, get_settings
from edusubmit.core.deps import get_sheet_client
from edusubmit.core.permissions import require_student
from edusubmit.forms.base import FileSlot, FormValidationError
from edusubmit.forms.student_form import MAX_MEMBERS, StudentForm
from edusubmit.routers.overlay import overlay_read
from edusubmit.schemas.session import (
    AddMemberRequest,
    AttachedFileRead,
    FilterUpdate,
    OverlayRead,
    StudentFormRead,
    StudentFormUpdate,
)
from edusubmit.services.app_state import AppState, OverlayBusyError
from edusubmit.services.file_encoder import encode_upload
from edusubmit.services.sheet_client import SheetApiClient

router = APIRouter()


def attached_file_read(slot: FileSlot) -> AttachedFileRead | None:
    if slot.file is None:
        return None
    return AttachedFileRead(
        name=slot.file.name,
        type=slot.file.type,
        size=slot.file.size,
        preview=slot.file_preview,
    )


def _form_read(form: StudentForm) -> StudentFormRead:
    return StudentFormRead(
        subject=form.subject,
        assignment_title=form.assignment_title,
        link=form.link,
        members=form.members,
        max_members=MAX_MEMBERS,
        group=form.group,
        filter_group=form.filter_group,
        group_options=form.group_options(),
        student_options=form.student_options(),
        file=attached_file_read(form),
    )


def _bad_request(e: FormValidationError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.get("/form", response_model=StudentFormRead)
def get_form(state: AppState = Depends(require_student)):
    return _form_read(state.student_form)


@router.put("/form", response_model=StudentFormRead)
def update_form(payload: StudentFormUpdate, state: AppState = Depends(require_student)):
    form = state.student_form
    if payload.subject is not None:
        form.subject = payload.subject
    if payload.assignment_title is not None:
        form.assignment_title = payload.assignment_title
    if payload.link is not None:
        form.link = payload.link
    return _form_read(form)


@router.put("/filter", response_model=StudentFormRead)
def set_filter(payload: FilterUpdate, state: AppState = Depends(require_student)):
    state.student_form.set_filter_group(payload.group)
    return _form_read(state.student_form)


@router.post("/members", response_model=StudentFormRead, status_code=status.HTTP_201_CREATED)
def add_member(payload: AddMemberRequest, state: AppState = Depends(require_student)):
    try:
        state.student_form.add_member(payload.student_id)
    except FormValidationError as e:
        raise _bad_request(e)
    return _form_read(state.student_form)


@router.delete("/members/{index}", response_model=StudentFormRead)
def remove_member(index: int, state: AppState = Depends(require_student)):
    try:
        state.student_form.remove_member(index)
    except FormValidationError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return _form_read(state.student_form)


@router.post("/file", response_model=StudentFormRead)
async def attach_file(
    file: UploadFile = File(...),
    state: AppState = Depends(require_student),
    settings: Settings = Depends(get_settings),
):
    encoded = await encode_upload(file, settings.MAX_UPLOAD_MB)
    try:
        state.student_form.attach(encoded)
    except FormValidationError as e:
        raise _bad_request(e)
    return _form_read(state.student_form)


@router.delete("/file", response_model=StudentFormRead)
def clear_file(state: AppState = Depends(require_student)):
    state.student_form.clear_file()
    return _form_read(state.student_form)


@router.post("/submit", response_model=OverlayRead)
async def submit(
    state: AppState = Depends(require_student),
    client: SheetApiClient = Depends(get_sheet_client),
):
    try:
        record = state.student_form.build_record()
    except FormValidationError as e:
        raise _bad_request(e)

    try:
        await state.submit(record, client)
    except OverlayBusyError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A submission is already in progress")

    return overlay_read(state)
