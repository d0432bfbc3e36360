"""Tests for services.immich.assets.AssetPipeline."""

import logging
import re
from datetime import datetime, timezone

import pytest

from core.exceptions import BackendError
from services.immich.assets import AssetPipeline
from services.immich.jobs import JobPoller

from conftest import make_face

DATE_GROUP = datetime(1999, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def pipeline(immich_client, sleeper):
    poller = JobPoller(immich_client, max_retries=3, interval=1.0, sleep=sleeper)
    return AssetPipeline(immich_client, poller, device_id="hub")


def started_jobs(fake_immich):
    return [detail for op, detail in fake_immich.calls if op == "start"]


def test_detection_runs_before_recognition_then_faces(fake_immich, pipeline, image_file):
    fake_immich.faces = [make_face(person_name="alice")]

    batch = pipeline.submit_and_detect(image_file, DATE_GROUP)

    assert batch.asset.id == "asset-1"
    assert [face.id for face in batch.faces] == ["face-1"]
    assert fake_immich.operations() == [
        "upload",
        "jobs", "start",   # faceDetection
        "jobs", "start",   # facialRecognition
        "faces",
        "jobs", "start",   # library
    ]
    assert started_jobs(fake_immich) == ["faceDetection", "facialRecognition", "library"]
    assert fake_immich.calls[5] == ("faces", "asset-1")


def test_no_faces_is_a_valid_result(fake_immich, pipeline, image_file, sleeper):
    batch = pipeline.submit_and_detect(image_file, DATE_GROUP)

    assert batch.faces == []
    # faces are fetched exactly once, never re-polled
    assert fake_immich.count("faces") == 1
    assert sleeper.calls == []


def test_duplicate_upload_status_is_only_a_warning(fake_immich, pipeline, image_file, caplog):
    fake_immich.upload_status = "duplicate"
    fake_immich.faces = [make_face()]

    with caplog.at_level(logging.WARNING):
        batch = pipeline.submit_and_detect(image_file, DATE_GROUP)

    assert batch.asset.status == "duplicate"
    assert len(batch.faces) == 1
    assert "status 'duplicate'" in caplog.text


def test_each_upload_gets_a_fresh_device_asset_id(fake_immich, pipeline, image_file):
    pipeline.upload(image_file, DATE_GROUP)
    pipeline.upload(image_file, DATE_GROUP)

    ids = [re.search(rb"hub-[0-9a-f-]{36}", body).group(0) for body in fake_immich.uploads]
    assert len(ids) == 2
    assert ids[0] != ids[1]


def test_upload_failure_propagates(fake_immich, pipeline, image_file):
    fake_immich.failing.add("upload")

    with pytest.raises(BackendError):
        pipeline.submit_and_detect(image_file, DATE_GROUP)

    assert fake_immich.operations() == ["upload"]


def test_job_failures_do_not_stop_the_pipeline(fake_immich, pipeline, image_file):
    fake_immich.failing.add("jobs")
    fake_immich.faces = [make_face()]

    batch = pipeline.submit_and_detect(image_file, DATE_GROUP)

    assert len(batch.faces) == 1


def test_stuck_recognition_job_still_returns_faces(fake_immich, pipeline, image_file, sleeper):
    fake_immich.start_active["facialRecognition"] = True
    fake_immich.job_reads["facialRecognition"] = [True]
    fake_immich.faces = []

    batch = pipeline.submit_and_detect(image_file, DATE_GROUP)

    assert batch.faces == []
    assert len(sleeper.calls) == 3


def test_malformed_faces_raise_backend_error(fake_immich, pipeline, image_file):
    fake_immich.faces = [{"id": "face-1"}]

    with pytest.raises(BackendError) as exc_info:
        pipeline.submit_and_detect(image_file, DATE_GROUP)

    assert exc_info.value.details["operation"] == "get_faces"
