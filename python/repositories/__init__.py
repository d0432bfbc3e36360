"""
Repositories package - data access layer.

Repositories handle all database operations.
No business logic - only queries and data transformation.

Usage:
    from repositories import get_train_repository

    repo = get_train_repository()
    asset_ids = repo.asset_ids(["file-1", "file-2"])
"""

from repositories.base import BaseRepository
from repositories.train_repo import TrainRepository, get_train_repository

__all__ = [
    'BaseRepository',
    'TrainRepository',
    'get_train_repository',
]
