"""
Infrastructure package - external dependencies and integrations.

Modules:
- immich_client.py - Immich REST client
"""

from infrastructure.immich_client import ImmichClient

__all__ = [
    'ImmichClient',
]
