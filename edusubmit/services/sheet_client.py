import json
import logging
import time
from typing import Optional

import httpx

from edusubmit.schemas.api import ApiResponse
from edusubmit.schemas.submission import GradeUpdate, SubmissionRecord

logger = logging.getLogger(__name__)

CONTENT_TYPE = "text/plain;charset=utf-8"

GENERIC_ERROR_MESSAGE = "เกิดข้อผิดพลาดในการเชื่อมต่อ"
CONNECTIVITY_ERROR_MESSAGE = (
    "การเชื่อมต่อล้มเหลว (Failed to fetch)\n\n"
    "สาเหตุที่เป็นไปได้:\n"
    "1. อินเทอร์เน็ตไม่เสถียร\n"
    "2. สคริปต์ Google Sheet ยังไม่อัปเดต\n"
    "3. ไฟล์ใหญ่เกินไป"
)


class SheetApiError(Exception):
    """Raised inside the client for non-2xx responses; never leaves it."""


def service_error_message(exc: Exception) -> str:
    if isinstance(exc, httpx.TransportError):
        return CONNECTIVITY_ERROR_MESSAGE
    detail = str(exc)
    if detail:
        return f"เกิดข้อผิดพลาด: {detail}"
    return GENERIC_ERROR_MESSAGE


class SheetApiClient:
    """
    Client for the spreadsheet web app.

    Every call is a single POST to the same URL; the `action` field in the
    JSON body selects submit / fetch-all / update-grade. The body is sent as
    text/plain so the browser-facing script does not need a CORS preflight,
    and redirects are followed because Apps Script answers with a 302 to the
    content host.

    Failures never propagate: they come back as ApiResponse(status="error").
    """

    def __init__(
        self,
        url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    def url_with_cache_bust(self) -> str:
        separator = "&" if "?" in self.url else "?"
        return f"{self.url}{separator}t={int(time.time() * 1000)}"

    async def _post(self, body: dict) -> ApiResponse:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            response = await client.post(
                self.url_with_cache_bust(),
                content=json.dumps(body, ensure_ascii=False).encode("utf-8"),
                headers={"Content-Type": CONTENT_TYPE},
            )

        if not response.is_success:
            raise SheetApiError(f"Server responded with status: {response.status_code}")

        return ApiResponse.model_validate(response.json())

    async def _call(self, body: dict) -> ApiResponse:
        action = body.get("action")
        try:
            result = await self._post(body)
        except (httpx.HTTPError, SheetApiError, ValueError) as exc:
            # ValueError covers both a non-JSON body and a schema mismatch
            logger.error("%s request failed: %r", action, exc)
            return ApiResponse.error(service_error_message(exc))

        logger.info("%s -> %s", action, result.status)
        return result

    async def submit(self, record: SubmissionRecord) -> ApiResponse:
        body = record.to_wire()
        body["action"] = "SUBMIT"
        return await self._call(body)

    async def get_submissions(self) -> ApiResponse:
        return await self._call({"action": "GET_SUBMISSIONS"})

    async def submit_grade(self, row_id: int, score: str, feedback: str) -> ApiResponse:
        update = GradeUpdate(row_id=row_id, score=score, feedback=feedback)
        body = {"action": "UPDATE_GRADE", **update.model_dump(by_alias=True)}
        return await self._call(body)
