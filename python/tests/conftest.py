"""Shared fixtures: an in-process fake Immich backend behind httpx.MockTransport."""

import json
from typing import Dict, List, Optional

import httpx
import pytest

from core.config import DetectSettings, ImmichSettings
from infrastructure.immich_client import ImmichClient
from repositories.train_repo import TrainRepository
from services.immich import ImmichDetector


def make_face(
    face_id: str = "face-1",
    box=(0, 0, 50, 50),
    person_name: Optional[str] = None,
    person_id: str = "person-1",
) -> dict:
    x1, y1, x2, y2 = box
    return {
        "id": face_id,
        "imageWidth": 640,
        "imageHeight": 480,
        "boundingBoxX1": x1,
        "boundingBoxY1": y1,
        "boundingBoxX2": x2,
        "boundingBoxY2": y2,
        "sourceType": "machine-learning",
        "person": None if person_name is None else {
            "id": person_id,
            "name": person_name,
            "isHidden": False,
        },
    }


class FakeImmich:
    """
    Minimal stateful Immich API.

    ``job_reads`` holds the isActive values returned by successive
    GET /api/jobs reads per job; the last value repeats once exhausted.
    ``failing`` holds operation names answered with HTTP 500.
    """

    JOBS = ("faceDetection", "facialRecognition", "library")

    def __init__(self):
        self.asset_id = "asset-1"
        self.upload_status = "created"
        self.faces: List[dict] = []
        self.people: List[dict] = []
        self.job_reads: Dict[str, List[bool]] = {}
        self.start_active: Dict[str, bool] = {}
        self.failing = set()
        self.calls: List[tuple] = []
        self.uploads: List[bytes] = []
        self.deleted: List[dict] = []
        self.assigned: List[tuple] = []

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def operations(self) -> List[str]:
        return [op for op, _ in self.calls]

    def count(self, operation: str) -> int:
        return self.operations().count(operation)

    def handle(self, request: httpx.Request) -> httpx.Response:
        request.read()
        method, path = request.method, request.url.path
        operation, detail = self._route(method, path, request)
        self.calls.append((operation, detail))

        if operation in self.failing:
            return httpx.Response(500, json={"message": "boom"})
        return getattr(self, f"_{operation}")(request, detail)

    def _route(self, method: str, path: str, request: httpx.Request):
        if path == "/api/assets":
            return ("upload" if method == "POST" else "delete"), None
        if path == "/api/faces" and method == "GET":
            return "faces", request.url.params.get("id")
        if path.startswith("/api/faces/") and method == "PUT":
            return "assign", path.rsplit("/", 1)[1]
        if path == "/api/search/person":
            return "search", request.url.params.get("name")
        if path == "/api/people":
            return "create", None
        if path == "/api/jobs":
            return "jobs", None
        if path.startswith("/api/jobs/"):
            return "start", path.rsplit("/", 1)[1]
        return "unknown", path

    # --- handlers ---

    def _upload(self, request, _):
        self.uploads.append(request.content)
        return httpx.Response(201, json={"id": self.asset_id, "status": self.upload_status})

    def _delete(self, request, _):
        self.deleted.append(json.loads(request.content))
        return httpx.Response(204)

    def _faces(self, request, asset_id):
        return httpx.Response(200, json=self.faces)

    def _assign(self, request, person_id):
        face_id = json.loads(request.content)["id"]
        self.assigned.append((face_id, person_id))
        return httpx.Response(200, json={"id": face_id, "person": {"id": person_id}})

    def _search(self, request, name):
        found = [p for p in self.people if name.lower() in (p["name"] or "").lower()]
        return httpx.Response(200, json=found)

    def _create(self, request, _):
        body = json.loads(request.content)
        person = {"id": f"person-{len(self.people) + 1}", "name": body["name"], "isHidden": False}
        self.people.append(person)
        return httpx.Response(201, json=person)

    def _jobs(self, request, _):
        payload = {}
        for name in self.JOBS:
            reads = self.job_reads.get(name, [False])
            active = reads.pop(0) if len(reads) > 1 else reads[0]
            payload[name] = {
                "jobCounts": {"active": int(active), "waiting": 0},
                "queueStatus": {"isActive": active, "isPaused": False},
            }
        return httpx.Response(200, json=payload)

    def _start(self, request, name):
        active = self.start_active.get(name, False)
        return httpx.Response(200, json={
            "jobCounts": {"active": int(active)},
            "queueStatus": {"isActive": active, "isPaused": False},
        })

    def _unknown(self, request, path):
        return httpx.Response(404, json={"message": f"no route {path}"})


class SleepRecorder:
    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float):
        self.calls.append(seconds)


@pytest.fixture
def fake_immich():
    return FakeImmich()


@pytest.fixture
def immich_client(fake_immich):
    client = ImmichClient("http://immich.test", "secret-key", timeout=5, transport=fake_immich.transport)
    yield client
    client.close()


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest.fixture
def immich_settings():
    return ImmichSettings(
        url="http://immich.test",
        key="secret-key",
        job_max_retries=3,
        job_poll_interval=1.0,
        delete_after_recognize=False,
    )


@pytest.fixture
def detect_settings():
    return DetectSettings(
        match_confidence=80,
        match_min_area=1000,
        unknown_confidence=50,
        unknown_min_area=0,
        cameras={},
    )


@pytest.fixture
def train_repo():
    repo = TrainRepository(":memory:")
    yield repo
    repo.close()


@pytest.fixture
def image_file(tmp_path):
    path = tmp_path / "snapshot.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0fake-jpeg")
    return str(path)


@pytest.fixture
def detector(immich_client, immich_settings, detect_settings, train_repo, sleeper):
    return ImmichDetector(
        client=immich_client,
        immich=immich_settings,
        detect=detect_settings,
        train_repo=train_repo,
        sleep=sleeper,
    )
