"""
Best-effort removal of uploaded assets from the backend.
"""

from typing import List

from core.exceptions import BackendError
from core.logging import get_logger
from core.responses import AdvisoryResult
from infrastructure.immich_client import ImmichClient
from models.domain.job import JobName
from services.immich.jobs import JobPoller

logger = get_logger(__name__)


class AssetCleanup:
    """Force-deletes assets, then re-triggers the library job."""

    def __init__(self, client: ImmichClient, poller: JobPoller):
        self.client = client
        self.poller = poller

    def delete_assets(self, asset_ids: List[str]) -> AdvisoryResult:
        """
        Delete ``asset_ids``. Failures are logged and returned, never raised:
        an asset missing on the backend does not affect local state.
        """
        operation = "delete_assets"
        if not asset_ids:
            return AdvisoryResult.success(operation)

        try:
            self.client.delete_assets(asset_ids)
            result = AdvisoryResult.success(operation)
            logger.info(f"[Cleanup] Deleted {len(asset_ids)} asset(s)")
        except BackendError as e:
            logger.warning(f"[Cleanup] Failed to delete {len(asset_ids)} asset(s): {e.message}")
            result = AdvisoryResult.failure(operation, e.message)

        self.poller.trigger(JobName.LIBRARY.value)
        return result
