import base64
import logging
import mimetypes
from dataclasses import dataclass
from typing import Optional

from fastapi import UploadFile

from edusubmit.schemas.submission import FilePayload

logger = logging.getLogger(__name__)

READ_ERROR_MESSAGE = "ไม่สามารถอ่านไฟล์ได้"


@dataclass
class EncodedFile:
    payload: Optional[FilePayload] = None
    preview: Optional[str] = None  # data URL, images only
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.payload is not None


def size_limit_message(max_size_mb: int) -> str:
    return f"ขนาดไฟล์ต้องไม่เกิน {max_size_mb}MB"


def _max_bytes(max_size_mb: int) -> int:
    return max_size_mb * 1024 * 1024


def _mime_type(filename: str, content_type: Optional[str]) -> str:
    if content_type and content_type != "application/octet-stream":
        return content_type
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or content_type or ""


def encode_bytes(
    filename: str,
    content_type: Optional[str],
    data: bytes,
    max_size_mb: int = 10,
) -> EncodedFile:
    if len(data) > _max_bytes(max_size_mb):
        return EncodedFile(error=size_limit_message(max_size_mb))

    mime = _mime_type(filename, content_type)
    content = base64.b64encode(data).decode("ascii")
    payload = FilePayload(name=filename, type=mime, size=len(data), base64=content)

    preview = None
    if mime.startswith("image/"):
        preview = f"data:{mime};base64,{content}"

    return EncodedFile(payload=payload, preview=preview)


async def encode_upload(upload: UploadFile, max_size_mb: int = 10) -> EncodedFile:
    """
    Turn an uploaded file into the base64 payload the sheet script expects.

    The declared size is checked before reading when the server knows it, so
    an oversized upload is rejected without being loaded. Read failures come
    back as an error result, never as an exception.
    """
    filename = upload.filename or "file"

    if upload.size is not None and upload.size > _max_bytes(max_size_mb):
        return EncodedFile(error=size_limit_message(max_size_mb))

    try:
        data = await upload.read()
    except (OSError, RuntimeError) as exc:
        logger.warning("could not read upload %s: %r", filename, exc)
        return EncodedFile(error=READ_ERROR_MESSAGE)

    return encode_bytes(filename, upload.content_type, data, max_size_mb)
