"""
Asset pipeline: upload an image, wait for detection and recognition,
collect the detected faces.
"""

import uuid
from datetime import datetime
from typing import List, NamedTuple

from pydantic import ValidationError as PydanticValidationError

from core.exceptions import BackendError
from core.logging import get_logger
from infrastructure.immich_client import BACKEND_NAME, ImmichClient
from models.domain.asset import AssetUpload
from models.domain.face import Face
from models.domain.job import JobName
from services.immich.jobs import JobPoller

logger = get_logger(__name__)


class DetectionBatch(NamedTuple):
    """Faces detected in one uploaded asset."""
    asset: AssetUpload
    faces: List[Face]


class AssetPipeline:
    """Upload -> faceDetection -> facialRecognition -> faces."""

    def __init__(self, client: ImmichClient, poller: JobPoller, device_id: str):
        self.client = client
        self.poller = poller
        self.device_id = device_id

    def submit_and_detect(self, file_path: str, date_group: datetime) -> DetectionBatch:
        """
        Upload ``file_path`` and return the faces the backend found in it.

        An empty face list is a valid outcome. Upload and face-fetch
        failures raise BackendError; job polling never does.
        """
        asset = self.upload(file_path, date_group)

        # Recognition can only attribute faces that detection has produced
        self.poller.ensure_idle(JobName.FACE_DETECTION.value)
        self.poller.ensure_idle(JobName.FACIAL_RECOGNITION.value)

        faces = self.fetch_faces(asset.id)
        logger.info(f"[AssetPipeline] Asset {asset.id}: {len(faces)} face(s) detected")
        return DetectionBatch(asset=asset, faces=faces)

    def upload(self, file_path: str, date_group: datetime) -> AssetUpload:
        # Random device asset id so repeated uploads of similar images are not de-duplicated
        device_asset_id = f"{self.device_id}-{uuid.uuid4()}"
        payload = self.client.upload_asset(file_path, self.device_id, device_asset_id, date_group)
        asset = self._parse(AssetUpload, payload, "upload_asset")

        if not asset.is_created:
            logger.warning(
                f"[AssetPipeline] Upload of {file_path} returned status '{asset.status}', "
                f"continuing with asset {asset.id}"
            )
        return asset

    def fetch_faces(self, asset_id: str) -> List[Face]:
        """Faces of ``asset_id``; keeps the library job in step afterwards."""
        payload = self.client.get_faces(asset_id)
        if not isinstance(payload, list):
            raise BackendError(
                "Immich get_faces returned a non-list payload",
                backend=BACKEND_NAME,
                operation="get_faces",
            )
        faces = [self._parse(Face, raw, "get_faces") for raw in payload]
        self.poller.ensure_idle(JobName.LIBRARY.value)
        return faces

    @staticmethod
    def _parse(model, payload, operation: str):
        try:
            return model.model_validate(payload)
        except PydanticValidationError as e:
            raise BackendError(
                f"Immich {operation} returned an unexpected payload: {e.error_count()} error(s)",
                backend=BACKEND_NAME,
                operation=operation,
            ) from e
