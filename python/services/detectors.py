"""
Detector registry.
Builds configured detector adapters lazily, one instance per name.
"""

import threading
from typing import Callable, Dict, Optional

from core.config import Settings, get_settings
from core.exceptions import DetectorNotConfiguredError
from core.logging import get_logger
from infrastructure.immich_client import ImmichClient
from repositories.train_repo import get_train_repository
from services.checks import UnknownMinAreaCheck
from services.immich import ImmichDetector

logger = get_logger(__name__)


def build_immich_detector(settings: Settings) -> ImmichDetector:
    return ImmichDetector(
        client=ImmichClient.from_settings(settings.immich),
        immich=settings.immich,
        detect=settings.detect,
        train_repo=get_train_repository(),
        checks=UnknownMinAreaCheck(),
    )


FACTORIES: Dict[str, Callable[[Settings], ImmichDetector]] = {
    "immich": build_immich_detector,
}

_detectors: Dict[str, ImmichDetector] = {}
_lock = threading.Lock()


def get_detector(name: str, settings: Optional[Settings] = None) -> ImmichDetector:
    """
    Get the adapter for ``name``.

    Raises:
        DetectorNotConfiguredError: unknown name or not listed in DETECTORS
    """
    key = name.strip().lower()
    with _lock:
        if key in _detectors:
            return _detectors[key]

        settings = settings or get_settings()
        if key not in FACTORIES or key not in settings.enabled_detectors:
            raise DetectorNotConfiguredError(name)

        logger.info(f"[Detectors] Initializing '{key}'")
        _detectors[key] = FACTORIES[key](settings)
        return _detectors[key]


def register_detector(name: str, detector: ImmichDetector):
    """Install a pre-built adapter under ``name``, replacing any cached one."""
    with _lock:
        _detectors[name.strip().lower()] = detector


def reset_detectors():
    """Close and forget all adapters."""
    with _lock:
        for detector in _detectors.values():
            detector.close()
        _detectors.clear()
