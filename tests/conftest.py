import json

import httpx
import pytest
from fastapi.testclient import TestClient

from edusubmit.core.config import Settings, get_settings
from edusubmit.core.deps import get_sheet_client, session_store
from edusubmit.main import app
from edusubmit.services.sheet_client import SheetApiClient

SHEET_URL = "https://sheet.test/macros/s/abc/exec"
TEACHER_PASSWORD = "secret-pass"


def stored_rows():
    return [
        {
            "rowId": 2,
            "timestamp": "2025-06-01T08:00:00.000Z",
            "group": "ปวช. 1/1",
            "subject": "Cloud Computing",
            "assignmentTitle": "Lab 1: Cloud Introduction",
            "members": [{"id": "66001", "name": "นายกิตติพงษ์ ใจดี", "group": "ปวช. 1/1"}],
            "link": "https://example.com/lab1",
            "score": "",
            "feedback": "",
        },
        {
            "rowId": 3,
            "timestamp": "2025-06-02T09:30:00.000Z",
            "group": "ปวส. 1/1",
            "subject": "Database Systems",
            "assignmentTitle": "ER Diagram",
            "members": [{"id": 67101, "name": "นายวีรภัทร สายบุญ", "group": "ปวส. 1/1"}],
            "fileUrl": "https://drive.example.com/file/xyz",
            "fileName": "er.pdf",
            "score": 8,
            "feedback": "ดีมาก",
        },
        {
            "rowId": 4,
            "timestamp": "2025-06-03T10:00:00.000Z",
            "group": "ปวช. 3/2",
            "subject": "Mobile Apps",
            "assignmentTitle": "Prototype",
            "members": [],
        },
    ]


class FakeSheet:
    """Stand-in for the spreadsheet web app, served through httpx.MockTransport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.bodies: list[dict] = []
        self.rows = stored_rows()
        self.status_code = 200
        self.raw_body = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content.decode("utf-8"))
        self.requests.append(request)
        self.bodies.append(body)

        if self.status_code != 200:
            return httpx.Response(self.status_code, text="Internal Server Error")
        if self.raw_body is not None:
            return httpx.Response(200, text=self.raw_body)

        action = body.get("action")
        if action == "SUBMIT":
            file_url = "https://drive.example.com/new" if body.get("fileData") else None
            reply = {"status": "success", "message": "บันทึกข้อมูลเรียบร้อย"}
            if file_url:
                reply["fileUrl"] = file_url
            return httpx.Response(200, json=reply)
        if action == "GET_SUBMISSIONS":
            return httpx.Response(200, json={"status": "success", "message": "ok", "data": self.rows})
        if action == "UPDATE_GRADE":
            for row in self.rows:
                if row["rowId"] == body["rowId"]:
                    row["score"] = body["score"]
                    row["feedback"] = body["feedback"]
                    return httpx.Response(200, json={"status": "success", "message": "updated"})
            return httpx.Response(200, json={"status": "error", "message": "Row not found"})
        return httpx.Response(200, json={"status": "error", "message": "Unknown action"})

    def actions(self) -> list[str]:
        return [b.get("action") for b in self.bodies]

    def client(self) -> SheetApiClient:
        return SheetApiClient(SHEET_URL, transport=httpx.MockTransport(self.handler))


@pytest.fixture()
def sheet():
    return FakeSheet()


@pytest.fixture(autouse=True)
def clear_sessions():
    session_store.clear()
    yield
    session_store.clear()


@pytest.fixture()
def client(sheet):
    """Test client wired to the fake sheet and a known teacher password."""
    app.dependency_overrides[get_sheet_client] = sheet.client
    app.dependency_overrides[get_settings] = lambda: Settings(
        SCRIPT_URL=SHEET_URL,
        TEACHER_PASSWORD=TEACHER_PASSWORD,
    )
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
