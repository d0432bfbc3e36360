"""
Models package - data structures for the application.

Subpackages:
- domain/ - Backend entities (faces, people, assets, jobs)
- requests/ - Request DTOs (API input)
- responses/ - Response DTOs (adapter output)
"""

# Re-export commonly used models
from models.domain.face import Face, BoundingBox
from models.domain.person import Person
from models.responses.detection import MatchRecord, MatchBox

__all__ = [
    # Face
    'Face',
    'BoundingBox',
    # Person
    'Person',
    # Output
    'MatchRecord',
    'MatchBox',
]
