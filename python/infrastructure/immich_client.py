"""
Immich REST client.
Thin transport over httpx: one method per backend endpoint, API-key auth,
fixed timeout. Every transport or HTTP status failure surfaces as BackendError.
"""

import mimetypes
import os
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from core.config import ImmichSettings
from core.exceptions import BackendError
from core.logging import get_logger, log_backend_call

logger = get_logger(__name__)

BACKEND_NAME = "immich"


def format_date_group(value: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix; naive values are taken as UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class ImmichClient:
    """
    Synchronous client for the Immich API.

    Usage:
        client = ImmichClient.from_settings(settings.immich)
        jobs = client.get_jobs()
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str],
        timeout: float = 15.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        headers = {"Accept": "application/json"}
        if api_key:
            headers["x-api-key"] = api_key
        self._client = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        immich: ImmichSettings,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "ImmichClient":
        return cls(immich.url, immich.key, immich.timeout, transport=transport)

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    # ============================================================
    # Assets
    # ============================================================

    def upload_asset(
        self,
        file_path: str,
        device_id: str,
        device_asset_id: str,
        date_group: datetime,
    ) -> Dict[str, Any]:
        """
        Upload an image.

        Args:
            file_path: Local image path
            device_id: Uploading device name
            device_asset_id: Per-upload unique ID (defeats backend de-duplication)
            date_group: Timestamp used for both created/modified fields

        Returns:
            ``{"id": ..., "status": ...}``
        """
        timestamp = format_date_group(date_group)
        content_type = mimetypes.guess_type(file_path)[0] or "application/octet-stream"
        data = {
            "deviceId": device_id,
            "deviceAssetId": device_asset_id,
            "fileCreatedAt": timestamp,
            "fileModifiedAt": timestamp,
        }
        try:
            handle = open(file_path, "rb")
        except OSError as e:
            raise BackendError(
                f"Cannot read upload file {file_path}: {e}",
                backend=BACKEND_NAME,
                operation="upload_asset",
            ) from e

        with handle:
            files = {"assetData": (os.path.basename(file_path), handle, content_type)}
            return self._request("POST", "/api/assets", "upload_asset", data=data, files=files)

    def delete_assets(self, asset_ids: List[str]) -> None:
        self._request(
            "DELETE",
            "/api/assets",
            "delete_assets",
            json={"force": True, "ids": list(asset_ids)},
        )

    # ============================================================
    # Faces & people
    # ============================================================

    def get_faces(self, asset_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/faces", "get_faces", params={"id": asset_id}) or []

    def search_person(self, name: str) -> List[Dict[str, Any]]:
        """Search people by name, hidden ones included."""
        params = {"name": name, "withHidden": "true"}
        return self._request("GET", "/api/search/person", "search_person", params=params) or []

    def create_person(self, name: str) -> Dict[str, Any]:
        return self._request("POST", "/api/people", "create_person", json={"name": name})

    def assign_face(self, face_id: str, person_id: str) -> Dict[str, Any]:
        """Bind a face to a person."""
        return self._request(
            "PUT",
            f"/api/faces/{person_id}",
            "assign_face",
            json={"id": face_id},
        )

    # ============================================================
    # Jobs
    # ============================================================

    def get_jobs(self) -> Dict[str, Any]:
        return self._request("GET", "/api/jobs", "get_jobs") or {}

    def start_job(self, job_name: str, force: bool = False) -> Dict[str, Any]:
        return self._request(
            "PUT",
            f"/api/jobs/{job_name}",
            "start_job",
            json={"command": "start", "force": force},
        ) or {}

    # ============================================================
    # Helpers
    # ============================================================

    def _request(self, method: str, path: str, operation: str, **kwargs) -> Any:
        started = time.perf_counter()
        try:
            response = self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"[Immich] {operation} failed: HTTP {status}")
            raise BackendError(
                f"Immich {operation} failed with HTTP {status}",
                backend=BACKEND_NAME,
                operation=operation,
                upstream_status=status,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"[Immich] {operation} failed: {type(e).__name__}: {e}")
            raise BackendError(
                f"Immich {operation} failed: {e}",
                backend=BACKEND_NAME,
                operation=operation,
            ) from e

        log_backend_call(
            logger, method, path, response.status_code,
            (time.perf_counter() - started) * 1000,
        )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise BackendError(
                f"Immich {operation} returned invalid JSON",
                backend=BACKEND_NAME,
                operation=operation,
                upstream_status=response.status_code,
            ) from e
