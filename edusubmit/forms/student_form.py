from datetime import datetime
from typing import Optional

from edusubmit.core.reference_data import STUDENT_ROSTER, UNKNOWN_GROUP
from edusubmit.forms.base import FileSlot, FormValidationError, utc_timestamp
from edusubmit.schemas.submission import Member, SubmissionRecord

MAX_MEMBERS = 5


class StudentForm(FileSlot):
    def __init__(self, roster: Optional[dict] = None):
        super().__init__()
        self.roster = STUDENT_ROSTER if roster is None else roster

        self.subject = ""
        self.assignment_title = ""
        self.link = ""
        self.members: list[Member] = []

        # member picker
        self.filter_group = ""

    def group_options(self) -> list[str]:
        return sorted({info["group"] for info in self.roster.values()})

    def student_options(self) -> list[dict]:
        if not self.filter_group:
            return []
        options = [
            {"value": sid, "label": f"{sid} - {info['name']}"}
            for sid, info in self.roster.items()
            if info["group"] == self.filter_group
        ]
        return sorted(options, key=lambda o: o["value"])

    def set_filter_group(self, group: str) -> None:
        self.filter_group = group

    def add_member(self, student_id: str) -> Member:
        if len(self.members) >= MAX_MEMBERS:
            raise FormValidationError(f"เพิ่มสมาชิกได้สูงสุด {MAX_MEMBERS} คน")
        if not student_id:
            raise FormValidationError("กรุณาเลือกรายชื่อ")

        if any(m.id == student_id for m in self.members):
            raise FormValidationError("รายชื่อนี้ถูกเพิ่มไปแล้ว")

        info = self.roster.get(student_id)
        if info is None:
            raise FormValidationError("ไม่พบรายชื่อนักศึกษา")

        member = Member(id=student_id, name=info["name"], group=info.get("group"))
        self.members.append(member)
        return member

    def remove_member(self, index: int) -> None:
        if index < 0 or index >= len(self.members):
            raise FormValidationError("ไม่พบสมาชิกที่ต้องการลบ")
        del self.members[index]

    @property
    def group(self) -> str:
        if not self.members:
            return UNKNOWN_GROUP
        return self.members[0].group or UNKNOWN_GROUP

    def build_record(self, now: Optional[datetime] = None) -> SubmissionRecord:
        if not self.subject:
            raise FormValidationError("กรุณาเลือกวิชา")
        if not self.members:
            raise FormValidationError("กรุณาเพิ่มสมาชิกอย่างน้อย 1 คน")
        if not self.assignment_title.strip():
            raise FormValidationError("กรุณากรอกหัวข้องาน")

        return SubmissionRecord(
            role="STUDENT",
            group=self.group,
            subject=self.subject,
            members=list(self.members),
            assignment_title=self.assignment_title,
            link=self.link,
            file_data=self.file,
            timestamp=utc_timestamp(now),
        )
