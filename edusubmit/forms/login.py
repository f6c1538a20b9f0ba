import secrets

from edusubmit.forms.base import FormValidationError
from edusubmit.schemas.session import UserRole


def authenticate(role: UserRole, password: str, teacher_password: str) -> UserRole:
    if role == UserRole.STUDENT:
        return role
    if role == UserRole.TEACHER:
        if secrets.compare_digest(password.encode("utf-8"), teacher_password.encode("utf-8")):
            return role
        raise FormValidationError("รหัสผ่านไม่ถูกต้อง")
    raise FormValidationError("บทบาทไม่ถูกต้อง")
