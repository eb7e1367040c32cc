"""Storage configuration for Ctesiphus.

This module provides configuration for storage backends and a factory function
to create the appropriate repository instance based on configuration.
"""

import os
from enum import Enum

from .file_repo import FileCampaignRepository
from .repository import CampaignRepository
from .sqlite_repo import SQLiteCampaignRepository


class StorageBackend(Enum):
    """Available storage backends."""

    FILE = "file"
    SQLITE = "sqlite"


# Default configuration (can be overridden via environment variables)
DEFAULT_STORAGE_BACKEND = StorageBackend.FILE
DEFAULT_CAMPAIGNS_PATH = "campaigns"
DEFAULT_DATABASE_URI = "instance/ctesiphus.db"


def get_storage_backend() -> StorageBackend:
    """Get configured storage backend from environment.

    Returns:
        StorageBackend enum value
    """
    backend_str = os.environ.get("CTESIPHUS_STORAGE_BACKEND", DEFAULT_STORAGE_BACKEND.value).lower()
    if backend_str == "sqlite":
        return StorageBackend.SQLITE
    return StorageBackend.FILE


def get_campaigns_path() -> str:
    """Get configured campaigns path from environment."""
    return os.environ.get("CTESIPHUS_CAMPAIGNS_PATH", DEFAULT_CAMPAIGNS_PATH)


def get_database_uri() -> str:
    """Get configured database URI from environment."""
    return os.environ.get("CTESIPHUS_DATABASE_URI", DEFAULT_DATABASE_URI)


def get_campaign_repository(
    backend: StorageBackend | None = None,
) -> CampaignRepository:
    """Factory function to create a campaign repository.

    Args:
        backend: Storage backend to use. If None, uses environment config.

    Returns:
        CampaignRepository instance
    """
    if backend is None:
        backend = get_storage_backend()

    if backend == StorageBackend.SQLITE:
        return SQLiteCampaignRepository(get_database_uri())
    return FileCampaignRepository(get_campaigns_path())
