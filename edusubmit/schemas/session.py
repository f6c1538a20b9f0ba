from enum import Enum
from typing import Optional

from pydantic import BaseModel

from edusubmit.schemas.api import StoredSubmission
from edusubmit.schemas.submission import Member


class UserRole(str, Enum):
    GUEST = "GUEST"
    STUDENT = "STUDENT"
    TEACHER = "TEACHER"


class OverlayStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class LoginRequest(BaseModel):
    role: UserRole
    password: str = ""


class OverlayRead(BaseModel):
    status: OverlayStatus
    message: str = ""


class SessionRead(BaseModel):
    role: UserRole
    overlay: OverlayRead
    subjects: list[str]
    accepted_file_types: str
    max_upload_mb: int


# --- student form ---

class StudentFormUpdate(BaseModel):
    subject: Optional[str] = None
    assignment_title: Optional[str] = None
    link: Optional[str] = None


class FilterUpdate(BaseModel):
    group: str = ""


class AddMemberRequest(BaseModel):
    student_id: str


class AttachedFileRead(BaseModel):
    name: str
    type: str
    size: int
    preview: Optional[str] = None


class StudentFormRead(BaseModel):
    subject: str
    assignment_title: str
    link: str
    members: list[Member]
    max_members: int
    group: str
    filter_group: str
    group_options: list[str]
    student_options: list[dict]
    file: Optional[AttachedFileRead] = None


# --- teacher form ---

class TeacherFormUpdate(BaseModel):
    level: Optional[str] = None
    year: Optional[str] = None
    room: Optional[str] = None
    subject: Optional[str] = None
    topic: Optional[str] = None
    due_date: Optional[str] = None


class TeacherFormRead(BaseModel):
    level: str
    year: str
    room: str
    target_group: str
    level_options: list[str]
    year_options: list[str]
    room_options: list[str]
    subject: str
    topic: str
    due_date: str
    file: Optional[AttachedFileRead] = None


# --- grading ---

class GradeEdit(BaseModel):
    score: Optional[str] = None
    feedback: Optional[str] = None


class GradingRowRead(BaseModel):
    submission: StoredSubmission
    score: str
    feedback: str
    saving: bool = False


class GradingListRead(BaseModel):
    loading: bool
    load_error: Optional[str] = None
    total: int
    rows: list[GradingRowRead]
    group_options: list[str]
    subject_options: list[str]


class GradeSaveRead(BaseModel):
    status: str
    message: str
    row: GradingRowRead
