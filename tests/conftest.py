"""
Shared fixtures: an in-memory stand-in for the GitHub contents API.

FakeGitHubHost implements the two requests.Session methods the store
uses (get and put) with the host's version-token rules, so the store,
repositories and services can be exercised end to end without a network.
"""

import base64
import hashlib
import json
import threading
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import unquote

import pytest

from academy.repositories import (
    ClassRepository,
    PaymentRepository,
    StudentRepository,
    TeacherRepository,
)
from academy.storage import GitHubFileStore
from academy.utils.config import SecureString


TEST_TOKEN = "ghp_testtoken1234567890"
TEST_REPO = "sogon-academy/data"


class FakeResponse:
    """Minimal requests.Response look-alike."""

    def __init__(self, status_code: int, body: Any = None, reason: str = ""):
        self.status_code = status_code
        self._body = body
        self.reason = reason
        self.text = json.dumps(body, ensure_ascii=False) if body is not None else ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeGitHubHost:
    """
    In-memory repository contents endpoint.

    Attributes:
        enforce_sha: Reject overwrites whose sha is missing or stale (409),
            as the real host does; when False the last write wins
        get_status / put_status: Force every GET / PUT to answer this status
        get_barrier: Optional barrier every GET waits on after reading its snapshot
        calls: (method, path, kwargs) for every request received
    """

    def __init__(self, enforce_sha: bool = True):
        self.enforce_sha = enforce_sha
        self.files: Dict[str, Tuple[str, str]] = {}
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []
        self.get_status: Optional[int] = None
        self.put_status: Optional[int] = None
        self.get_barrier: Optional[threading.Barrier] = None
        self._revision = 0
        self._lock = threading.Lock()

    @staticmethod
    def _path(url: str) -> str:
        return unquote(url.split("/contents/", 1)[1])

    def _next_sha(self, text: str) -> str:
        self._revision += 1
        return hashlib.sha1(f"{self._revision}:{text}".encode("utf-8")).hexdigest()

    def put_document(self, path: str, content: Any) -> str:
        """Seed a document directly; returns its sha."""
        text = json.dumps(content, ensure_ascii=False, indent=2)
        with self._lock:
            sha = self._next_sha(text)
            self.files[path] = (text, sha)
        return sha

    def document(self, path: str) -> Any:
        """Parsed content currently stored at path."""
        return json.loads(self.files[path][0])

    def sha(self, path: str) -> Optional[str]:
        entry = self.files.get(path)
        return entry[1] if entry else None

    def get(self, url, headers=None, params=None, timeout=None):
        path = self._path(url)
        self.calls.append(("GET", path, {"headers": headers, "params": params, "timeout": timeout}))

        with self._lock:
            entry = self.files.get(path)

        # Concurrent readers all answer with the version they saw before any write
        if self.get_barrier is not None:
            self.get_barrier.wait()

        if self.get_status is not None:
            return FakeResponse(self.get_status, {"message": "Forced failure"}, reason="Forced")

        if entry is None:
            return FakeResponse(404, {"message": "Not Found"}, reason="Not Found")

        text, sha = entry
        encoded = base64.encodebytes(text.encode("utf-8")).decode("ascii")
        return FakeResponse(200, {
            "type": "file",
            "path": path,
            "sha": sha,
            "encoding": "base64",
            "content": encoded,
        }, reason="OK")

    def put(self, url, headers=None, json=None, timeout=None):
        path = self._path(url)
        self.calls.append(("PUT", path, {"headers": headers, "json": json, "timeout": timeout}))

        if self.put_status is not None:
            return FakeResponse(self.put_status, {"message": "Forced failure"}, reason="Forced")

        body = json or {}
        text = base64.b64decode(body["content"]).decode("utf-8")

        with self._lock:
            current = self.files.get(path)
            if self.enforce_sha and current is not None and body.get("sha") != current[1]:
                return FakeResponse(409, {"message": f"{path} does not match"}, reason="Conflict")

            sha = self._next_sha(text)
            self.files[path] = (text, sha)

        status = 200 if current is not None else 201
        return FakeResponse(status, {"content": {"path": path, "sha": sha}, "commit": {}})

    def requests_for(self, method: str) -> List[Tuple[str, str, Dict[str, Any]]]:
        return [c for c in self.calls if c[0] == method]


@pytest.fixture
def host():
    """Fake contents API enforcing version tokens."""
    return FakeGitHubHost()


@pytest.fixture
def store(host):
    """GitHubFileStore talking to the fake host."""
    return GitHubFileStore(
        token=SecureString(TEST_TOKEN),
        repo=TEST_REPO,
        session=host,
    )


@pytest.fixture
def unconfigured_store(host):
    """Store with no token or repository set."""
    return GitHubFileStore(token=None, repo=None, session=host)


@pytest.fixture
def student_repo(store):
    return StudentRepository(store)


@pytest.fixture
def teacher_repo(store):
    return TeacherRepository(store)


@pytest.fixture
def class_repo(store):
    return ClassRepository(store)


@pytest.fixture
def payment_repo(store):
    return PaymentRepository(store)


@pytest.fixture
def seeded_host(host):
    """Fake host holding a small academy."""
    host.put_document("data/students.json", {"students": [
        {"id": 1, "name": "김민지", "instrument": "피아노", "phone": "010-1111-2222"},
        {"id": 2, "name": "이서준", "instrument": "바이올린", "phone": "010-3333-4444"},
    ]})
    host.put_document("data/teachers.json", {"teachers": [
        {"id": 1, "name": "박선생", "instrument": "피아노", "phone": "010-5555-6666",
         "bankAccount": "국민 123-456-789"},
    ]})
    host.put_document("data/classes.json", {"classes": [
        {"id": 1, "date": "2024-03-15", "dayOfWeek": "금", "time": "15:00",
         "studentId": 1, "teacherId": 1, "instrument": "피아노",
         "duration": "60분", "content": "하농 1-5번"},
        {"id": 2, "date": "2024-03-16", "dayOfWeek": "토", "time": "11:00",
         "studentId": 2, "teacherId": 1, "instrument": "바이올린",
         "duration": "50분", "content": ""},
    ]})
    host.put_document("data/payments.json", {"payments": [
        {"id": 1, "date": "2024-02-25", "studentId": 1, "amount": 150000,
         "method": "카드", "status": "완료", "memo": "2월분"},
        {"id": 2, "date": "2024-03-02", "studentId": 1, "amount": 180000,
         "method": "계좌이체", "status": "완료", "memo": "3월분"},
        {"id": 3, "date": "2024-03-05", "studentId": 2, "amount": 200000,
         "method": "현금", "status": "대기", "memo": ""},
    ]})
    return host
