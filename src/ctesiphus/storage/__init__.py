"""Storage module for Ctesiphus.

This module provides the repository interface and implementations for
persisting campaign snapshots, plus the session helpers that turn stored
snapshots into validated campaign engines.

Usage:
    from ctesiphus.storage import get_campaign_repository, load_engine, save_engine

    # Get repository using configured backend (from environment)
    repo = get_campaign_repository()
    engine = load_engine(repo, "winter-campaign")

    # Or specify backend explicitly
    from ctesiphus.storage import StorageBackend
    repo = get_campaign_repository(StorageBackend.SQLITE)

Configuration via environment variables:
    CTESIPHUS_STORAGE_BACKEND: "file" or "sqlite" (default: "file")
    CTESIPHUS_CAMPAIGNS_PATH: Path to campaigns directory (default: "campaigns")
    CTESIPHUS_DATABASE_URI: SQLite database path (default: "instance/ctesiphus.db")
"""

from .config import (
    StorageBackend,
    get_campaign_repository,
    get_campaigns_path,
    get_database_uri,
    get_storage_backend,
)
from .file_repo import FileCampaignRepository
from .repository import CampaignRepository
from .session import CampaignLoadError, SaveResult, load_engine, save_engine
from .sqlite_repo import SQLiteCampaignRepository

__all__ = [
    # Abstract interface
    "CampaignRepository",
    # Implementations
    "FileCampaignRepository",
    "SQLiteCampaignRepository",
    # Configuration
    "StorageBackend",
    "get_storage_backend",
    "get_campaigns_path",
    "get_database_uri",
    # Factory
    "get_campaign_repository",
    # Session helpers
    "CampaignLoadError",
    "SaveResult",
    "load_engine",
    "save_engine",
]
