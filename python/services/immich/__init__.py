"""
Immich detector adapter.

Modules:
- jobs.py - Bounded polling of backend job queues
- assets.py - Upload + detection pipeline
- identity.py - Find-or-create person, bind faces
- normalizer.py - Raw faces -> canonical match records
- cleanup.py - Best-effort asset deletion
- detector.py - ImmichDetector facade
"""

from .jobs import JobPoller
from .assets import AssetPipeline, DetectionBatch
from .identity import IdentityResolver
from .normalizer import ResultNormalizer
from .cleanup import AssetCleanup
from .detector import ImmichDetector

__all__ = [
    "JobPoller",
    "AssetPipeline",
    "DetectionBatch",
    "IdentityResolver",
    "ResultNormalizer",
    "AssetCleanup",
    "ImmichDetector",
]
