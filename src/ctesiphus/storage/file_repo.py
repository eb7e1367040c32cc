"""File-based repository implementation using JSON files.

Each campaign is stored as one JSON file, ``<campaigns_path>/<id>.json``.
Storage metadata (``id``, ``updated_at``) is kept under a ``_meta`` key so the
snapshot itself round-trips unchanged.
"""

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .repository import CampaignRepository

logger = logging.getLogger(__name__)

META_KEY = "_meta"


def slugify(text: str) -> str:
    """Convert text to a filename-friendly slug.

    Examples:
        >>> slugify("Winter Tomb Campaign")
        'winter-tomb-campaign'
        >>> slugify("Ctesiphus: Round 2")
        'ctesiphus-round-2'
    """
    text = text.lower()
    text = re.sub(r"[\s_]+", "-", text)
    text = re.sub(r"[^a-z0-9-]", "", text)
    text = re.sub(r"-+", "-", text)
    return text.strip("-")


def campaign_metadata(campaign_id: str, snapshot: dict, updated_at: str = "") -> dict:
    """Listing metadata extracted from a snapshot."""
    return {
        "id": campaign_id,
        "campaign_name": snapshot.get("campaign_name", ""),
        "round": snapshot.get("current_round", 1),
        "threat_level": snapshot.get("threat_level", 1),
        "game_ended": bool(snapshot.get("game_ended", False)),
        "updated_at": updated_at,
    }


class FileCampaignRepository(CampaignRepository):
    """JSON file-based campaign repository."""

    def __init__(self, campaigns_path: str | Path = "campaigns"):
        """Initialize repository.

        Args:
            campaigns_path: Path to campaigns directory
        """
        self.campaigns_path = Path(campaigns_path)
        self.campaigns_path.mkdir(parents=True, exist_ok=True)

    def _get_campaign_path(self, campaign_id: str) -> Path:
        """Get path to campaign file."""
        safe_id = slugify(campaign_id)
        if not safe_id:
            raise ValueError(f"Invalid campaign id: {campaign_id!r}")
        return self.campaigns_path / f"{safe_id}.json"

    def save_campaign(self, campaign_id: str, snapshot: dict) -> None:
        """Persist a complete campaign snapshot."""
        path = self._get_campaign_path(campaign_id)
        document = {
            **snapshot,
            META_KEY: {
                "id": campaign_id,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            },
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=2)
        logger.debug(f"Saved campaign {campaign_id} to {path}")

    def load_campaign(self, campaign_id: str) -> Optional[dict]:
        """Load a campaign snapshot by ID."""
        path = self._get_campaign_path(campaign_id)
        if not path.exists():
            return None
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        data.pop(META_KEY, None)
        return data

    def list_campaigns(self) -> list[dict]:
        """List stored campaigns, most recently updated first."""
        campaigns = []
        for path in self.campaigns_path.glob("*.json"):
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            meta = data.get(META_KEY, {})
            campaigns.append(
                campaign_metadata(meta.get("id", path.stem), data, meta.get("updated_at", ""))
            )
        return sorted(campaigns, key=lambda x: x["updated_at"], reverse=True)

    def delete_campaign(self, campaign_id: str) -> bool:
        """Delete a campaign file."""
        path = self._get_campaign_path(campaign_id)
        if path.exists():
            path.unlink()
            return True
        return False
