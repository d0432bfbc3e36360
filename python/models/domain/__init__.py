"""
Domain models - entities owned by the recognition backend.

These mirror the backend's JSON schema; adapters never persist them.
"""

from models.domain.face import Face, BoundingBox, UNKNOWN_LABEL
from models.domain.person import Person
from models.domain.asset import AssetUpload
from models.domain.job import JobName, JobStatus, parse_job_statuses

__all__ = [
    'Face',
    'BoundingBox',
    'UNKNOWN_LABEL',
    'Person',
    'AssetUpload',
    'JobName',
    'JobStatus',
    'parse_job_statuses',
]
