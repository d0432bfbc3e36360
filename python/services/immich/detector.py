"""
ImmichDetector - detector adapter for an Immich backend.
Coordinates the asset pipeline, identity resolution, normalization and cleanup.

Control flow:
- recognize: upload -> wait for jobs -> faces (-> delete the upload)
- train:     upload -> wait for jobs -> faces -> bind to person
- remove:    train records -> asset IDs -> delete
- normalize: raw faces -> match records
"""

import time
from typing import Any, Callable, List, Optional

from core.config import DetectSettings, ImmichSettings
from core.exceptions import NoFacesDetectedError
from core.logging import get_logger
from core.responses import AdvisoryResult
from infrastructure.immich_client import ImmichClient
from models.responses.detection import MatchRecord, RecognizeResult, TrainResult
from repositories.train_repo import TrainRepository
from services.checks import DecisionCheck, no_checks
from services.immich.assets import AssetPipeline
from services.immich.cleanup import AssetCleanup
from services.immich.identity import IdentityResolver
from services.immich.jobs import JobPoller
from services.immich.normalizer import ResultNormalizer

logger = get_logger(__name__)


class ImmichDetector:
    """
    Detector adapter: recognize / train / remove / normalize against Immich.

    Calls are sequential chains of requests; the adapter holds no state
    between calls beyond its collaborators.
    """

    name = "immich"

    def __init__(
        self,
        client: ImmichClient,
        immich: ImmichSettings,
        detect: DetectSettings,
        train_repo: TrainRepository,
        checks: DecisionCheck = no_checks,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client
        self.settings = immich
        self.train_repo = train_repo

        self.poller = JobPoller(client, immich.job_max_retries, immich.job_poll_interval, sleep)
        self.assets = AssetPipeline(client, self.poller, immich.device_id)
        self.identities = IdentityResolver(client)
        self.normalizer = ResultNormalizer(detect, checks)
        self.cleanup = AssetCleanup(client, self.poller)

        logger.info(f"[Immich] Detector ready ({immich.url})")

    def recognize(self, key: str) -> RecognizeResult:
        """Detect and recognize faces in the image at ``key``."""
        batch = self.assets.submit_and_detect(key, self.settings.recognize_date_group)

        if self.settings.delete_after_recognize:
            self.cleanup.delete_assets([batch.asset.id])

        return RecognizeResult(
            data=[face.model_dump(by_alias=True) for face in batch.faces]
        )

    def train(self, name: str, key: str) -> TrainResult:
        """
        Train ``name`` from the image at ``key``.

        Returns a 400 result (not an exception) when no face is found;
        no person is looked up or created then.
        """
        batch = self.assets.submit_and_detect(key, self.settings.train_date_group)

        try:
            self.identities.bind_faces(batch.faces, name)
        except NoFacesDetectedError as e:
            logger.warning(f"[Immich] Training '{name}' from {key}: {e.message}")
            self.cleanup.delete_assets([batch.asset.id])
            return TrainResult(status=400, data={"error": e.message})

        return TrainResult(
            status=200,
            data={
                "id": batch.asset.id,
                "status": batch.asset.status,
                "faces": len(batch.faces),
            },
        )

    def remove(self, ids: Optional[List[str]] = None) -> Optional[AdvisoryResult]:
        """
        Delete the backend assets of train records.

        Args:
            ids: Train record file IDs; None or empty removes every record's asset
        """
        asset_ids = self.train_repo.asset_ids(ids)
        if not asset_ids:
            logger.info("[Immich] No assets to remove")
            return None
        return self.cleanup.delete_assets(asset_ids)

    def normalize(self, camera: Optional[str], data: Any) -> List[MatchRecord]:
        return self.normalizer.normalize(camera, data)

    def close(self):
        self.client.close()
