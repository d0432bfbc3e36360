"""
Services package.

Main modules:
- detectors.py - Detector registry (get_detector)
- checks.py - Pluggable post-decision checks

Detector adapters:
- immich/ - Immich backend adapter (ImmichDetector)
"""

from services.checks import REJECT, CompositeCheck, DecisionContext, no_checks
from services.immich import ImmichDetector

__all__ = [
    'REJECT',
    'CompositeCheck',
    'DecisionContext',
    'no_checks',
    'ImmichDetector',
]
