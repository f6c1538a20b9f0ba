from typing import Literal, Optional

from pydantic import BaseModel, Field

Role = Literal["STUDENT", "TEACHER"]
Action = Literal["SUBMIT", "GET_SUBMISSIONS", "UPDATE_GRADE"]


class Member(BaseModel):
    id: str
    name: str
    group: Optional[str] = None

    class Config:
        coerce_numbers_to_str = True


class FilePayload(BaseModel):
    name: str
    type: str
    size: int
    base64: str


class SubmissionRecord(BaseModel):
    role: Role
    action: Optional[Action] = None
    timestamp: str

    file_data: Optional[FilePayload] = Field(default=None, alias="fileData")

    # student
    group: Optional[str] = None
    subject: Optional[str] = None
    members: Optional[list[Member]] = None
    assignment_title: Optional[str] = Field(default=None, alias="assignmentTitle")
    link: Optional[str] = None

    # teacher
    level: Optional[str] = None
    year: Optional[str] = None
    room: Optional[str] = None
    target_group: Optional[str] = Field(default=None, alias="targetGroup")
    topic: Optional[str] = None
    due_date: Optional[str] = Field(default=None, alias="dueDate")

    class Config:
        populate_by_name = True

    def to_wire(self) -> dict:
        # absent fields are left out entirely, never sent as null
        return self.model_dump(by_alias=True, exclude_none=True)


class GradeUpdate(BaseModel):
    row_id: int = Field(alias="rowId")
    score: str
    feedback: str

    class Config:
        populate_by_name = True
