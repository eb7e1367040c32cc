"""Campaign session helpers: load and save a CampaignEngine through a repository.

Loading is the trust boundary for snapshots: everything read from storage is
passed through validate_state before an engine is built from it. Saving is
best-effort; the in-memory engine state stays authoritative when a save fails
and nothing is retried.
"""

from __future__ import annotations

import logging
import random
import sqlite3
from dataclasses import dataclass
from typing import Optional

from ctesiphus.engine.campaign_engine import CampaignEngine
from ctesiphus.validation import ValidationIssue, validate_state

from .repository import CampaignRepository

logger = logging.getLogger(__name__)


class CampaignLoadError(Exception):
    """Raised when a stored snapshot fails validation.

    Attributes:
        campaign_id: ID of the rejected campaign
        issues: Validation issues found in the snapshot
    """

    def __init__(self, campaign_id: str, issues: list[ValidationIssue]):
        self.campaign_id = campaign_id
        self.issues = issues
        details = "; ".join(str(issue) for issue in issues)
        super().__init__(f"Campaign {campaign_id} failed validation: {details}")


@dataclass
class SaveResult:
    """Result of persisting a campaign.

    Attributes:
        success: Whether the snapshot was written
        error: Reason for failure if success=False
    """

    success: bool
    error: Optional[str] = None


def load_engine(
    repo: CampaignRepository,
    campaign_id: str,
    rng: Optional[random.Random] = None,
) -> Optional[CampaignEngine]:
    """Load and validate a stored campaign.

    Returns:
        A CampaignEngine over the stored state, or None if not found

    Raises:
        CampaignLoadError: If the stored snapshot is invalid
    """
    snapshot = repo.load_campaign(campaign_id)
    if snapshot is None:
        logger.info(f"Campaign {campaign_id} not found")
        return None

    result = validate_state(snapshot)
    if not result.valid:
        logger.error(f"Rejected campaign {campaign_id}: {len(result.errors)} validation issue(s)")
        raise CampaignLoadError(campaign_id, result.errors)

    return CampaignEngine(state=result.state, rng=rng)


def save_engine(repo: CampaignRepository, campaign_id: str, engine: CampaignEngine) -> SaveResult:
    """Persist the engine's current state."""
    try:
        repo.save_campaign(campaign_id, engine.state.to_dict())
    except (OSError, sqlite3.Error, ValueError, TypeError) as e:
        logger.warning(f"Failed to save campaign {campaign_id}: {e}")
        return SaveResult(success=False, error=str(e))
    return SaveResult(success=True)
