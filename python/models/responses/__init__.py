"""
Response DTOs - adapter output models.
"""

from models.responses.detection import (
    MatchBox,
    MatchRecord,
    RecognizeResult,
    TrainResult,
)

__all__ = [
    'MatchBox',
    'MatchRecord',
    'RecognizeResult',
    'TrainResult',
]
