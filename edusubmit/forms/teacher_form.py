from datetime import datetime
from typing import Optional

from edusubmit.core.reference_data import LEVEL_VOCATIONAL, LEVELS, ROOMS, YEARS_BY_LEVEL
from edusubmit.forms.base import FileSlot, FormValidationError, utc_timestamp
from edusubmit.schemas.submission import SubmissionRecord

DEFAULT_YEAR = "1"


class TeacherForm(FileSlot):
    def __init__(self):
        super().__init__()
        self.level = LEVEL_VOCATIONAL
        self.year = DEFAULT_YEAR
        self.room = "1"

        self.subject = ""
        self.topic = ""
        self.due_date = ""

    @property
    def year_options(self) -> list[str]:
        return YEARS_BY_LEVEL[self.level]

    @property
    def target_group(self) -> str:
        return f"{self.level} {self.year}/{self.room}"

    def select(
        self,
        level: Optional[str] = None,
        year: Optional[str] = None,
        room: Optional[str] = None,
    ) -> None:
        """Apply a selector change all at once; nothing changes if any part is invalid."""
        new_level = self.level if level is None else level
        if new_level not in LEVELS:
            raise FormValidationError("ระดับชั้นไม่ถูกต้อง")

        valid_years = YEARS_BY_LEVEL[new_level]
        if year is None:
            # ปวส. only has two years
            new_year = self.year if self.year in valid_years else DEFAULT_YEAR
        elif year in valid_years:
            new_year = year
        else:
            raise FormValidationError("ชั้นปีไม่ถูกต้อง")

        new_room = self.room if room is None else room
        if new_room not in ROOMS:
            raise FormValidationError("ห้องไม่ถูกต้อง")

        self.level, self.year, self.room = new_level, new_year, new_room

    def set_level(self, level: str) -> None:
        self.select(level=level)

    def set_year(self, year: str) -> None:
        self.select(year=year)

    def set_room(self, room: str) -> None:
        self.select(room=room)

    def build_record(self, now: Optional[datetime] = None) -> SubmissionRecord:
        if not self.subject:
            raise FormValidationError("กรุณาเลือกวิชา")
        if not self.topic.strip():
            raise FormValidationError("กรุณากรอกหัวข้อเรื่อง")
        if not self.due_date:
            raise FormValidationError("กรุณาเลือกกำหนดส่ง")

        return SubmissionRecord(
            role="TEACHER",
            action="SUBMIT",
            level=self.level,
            year=self.year,
            room=self.room,
            target_group=self.target_group,
            subject=self.subject,
            topic=self.topic,
            due_date=self.due_date,
            file_data=self.file,
            timestamp=utc_timestamp(now),
        )
