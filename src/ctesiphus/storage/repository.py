"""Abstract repository interface for Ctesiphus storage.

Campaign snapshots are plain JSON-compatible dicts (CampaignState.to_dict()).
Both file-based (JSON) and SQLite backends implement this interface, so the
session layer and the CLI can persist campaigns without knowing which backend
is active.
"""

from abc import ABC, abstractmethod
from typing import Optional


class CampaignRepository(ABC):
    """Abstract base class for campaign snapshot storage."""

    @abstractmethod
    def save_campaign(self, campaign_id: str, snapshot: dict) -> None:
        """Persist a complete campaign snapshot, replacing any previous one.

        Args:
            campaign_id: Unique identifier for the campaign
            snapshot: Complete campaign state dict
        """
        pass

    @abstractmethod
    def load_campaign(self, campaign_id: str) -> Optional[dict]:
        """Load a campaign snapshot by ID.

        Args:
            campaign_id: ID of campaign to load

        Returns:
            Campaign state dict, or None if not found
        """
        pass

    @abstractmethod
    def list_campaigns(self) -> list[dict]:
        """List stored campaigns, most recently updated first.

        Returns:
            List of dicts containing: {id, campaign_name, round, threat_level,
            game_ended, updated_at}
        """
        pass

    @abstractmethod
    def delete_campaign(self, campaign_id: str) -> bool:
        """Delete a campaign.

        Args:
            campaign_id: ID of campaign to delete

        Returns:
            True if deleted, False if not found
        """
        pass
