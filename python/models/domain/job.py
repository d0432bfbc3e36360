"""
Backend job domain models.
Job state is transient: re-read on every poll, never cached.
"""

from enum import Enum
from typing import Dict
from pydantic import BaseModel, Field


class JobName(str, Enum):
    """Backend job queues the adapter waits on."""
    FACE_DETECTION = "faceDetection"
    FACIAL_RECOGNITION = "facialRecognition"
    LIBRARY = "library"


class QueueStatus(BaseModel):
    is_active: bool = Field(False, alias="isActive")
    is_paused: bool = Field(False, alias="isPaused")

    class Config:
        populate_by_name = True
        extra = "ignore"


class JobStatus(BaseModel):
    """Status of one job queue."""

    queue_status: QueueStatus = Field(default_factory=QueueStatus, alias="queueStatus")
    job_counts: Dict[str, int] = Field(default_factory=dict, alias="jobCounts")

    @property
    def is_active(self) -> bool:
        return self.queue_status.is_active

    class Config:
        populate_by_name = True
        extra = "ignore"


def parse_job_statuses(payload: Dict) -> Dict[str, JobStatus]:
    """Parse ``GET /api/jobs`` (job name -> status map)."""
    return {
        name: JobStatus.model_validate(status or {})
        for name, status in (payload or {}).items()
        if isinstance(status, dict) or status is None
    }
