"""
Core package - foundation for the application.

Modules:
- config.py - Application settings via Pydantic Settings
- exceptions.py - Custom exception hierarchy
- responses.py - Unified API response and advisory result formats
- logging.py - Centralized logging configuration
"""

from core.config import settings
from core.exceptions import (
    AppException,
    NotFoundError,
    DatabaseError,
    BackendError,
    RecognitionError,
)
from core.responses import ApiResponse, AdvisoryResult

__all__ = [
    'settings',
    'AppException',
    'NotFoundError',
    'DatabaseError',
    'BackendError',
    'RecognitionError',
    'ApiResponse',
    'AdvisoryResult',
]
