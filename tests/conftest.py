"""Shared pytest fixtures for all tests."""

import random

import pytest


class ScriptedRandom(random.Random):
    """random.Random whose randint returns scripted values.

    Values are consumed in order; once the script runs out, randint falls
    back to the lower bound so tests never depend on real randomness.
    """

    def __init__(self, values=None):
        super().__init__(0)
        self.values = list(values or [])
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        if self.values:
            return self.values.pop(0)
        return a


@pytest.fixture
def scripted_rng():
    """Factory for a ScriptedRandom with the given randint results."""
    return ScriptedRandom


@pytest.fixture
def two_player_engine():
    """A started two-player campaign (bases at 0,1 and 0,3)."""
    from ctesiphus.engine.campaign_engine import CampaignEngine

    engine = CampaignEngine(rng=ScriptedRandom())
    engine.start_game(2, player_names=["Alice", "Bob"])
    return engine
