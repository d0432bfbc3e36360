"""
Request DTOs - API input models.
Used for validating incoming API requests.
"""

from models.requests.detection import (
    RecognizeRequest,
    TrainRequest,
    RemoveRequest,
    NormalizeRequest,
)

__all__ = [
    'RecognizeRequest',
    'TrainRequest',
    'RemoveRequest',
    'NormalizeRequest',
]
