from typing import Literal, Optional

from pydantic import BaseModel, Field

from edusubmit.schemas.submission import Member


class StoredSubmission(BaseModel):
    row_id: int = Field(alias="rowId")
    timestamp: str
    group: str = ""
    subject: str = ""
    assignment_title: str = Field(default="", alias="assignmentTitle")
    members: list[Member] = []

    link: Optional[str] = None
    file_url: Optional[str] = Field(default=None, alias="fileUrl")
    file_name: Optional[str] = Field(default=None, alias="fileName")

    # the sheet may hand scores back as numbers
    score: Optional[str] = None
    feedback: Optional[str] = None

    class Config:
        populate_by_name = True
        coerce_numbers_to_str = True


class ApiResponse(BaseModel):
    status: Literal["success", "error"]
    message: str = ""
    file_url: Optional[str] = Field(default=None, alias="fileUrl")
    data: Optional[list[StoredSubmission]] = None

    class Config:
        populate_by_name = True

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @classmethod
    def error(cls, message: str) -> "ApiResponse":
        return cls(status="error", message=message)
