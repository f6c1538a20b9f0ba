from datetime import datetime, timezone
from typing import Optional

from edusubmit.schemas.submission import FilePayload
from edusubmit.services.file_encoder import EncodedFile


class FormValidationError(Exception):
    """Inline validation failure; `message` is shown to the user as-is."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def utc_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class FileSlot:
    """Holds the optional attachment of a form."""

    def __init__(self):
        self.file: Optional[FilePayload] = None
        self.file_preview: Optional[str] = None
        self.file_error: Optional[str] = None

    def attach(self, encoded: EncodedFile) -> None:
        if not encoded.ok:
            # a rejected pick keeps whatever was attached before
            self.file_error = encoded.error
            raise FormValidationError(encoded.error or "")
        self.file = encoded.payload
        self.file_preview = encoded.preview
        self.file_error = None

    def clear_file(self) -> None:
        self.file = None
        self.file_preview = None
        self.file_error = None
