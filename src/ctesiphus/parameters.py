"""Campaign parameters for Ctesiphus.

This module is the SINGLE SOURCE OF TRUTH for the campaign's fixed game constants.

Parameter Categories:
- Supply Points: Bounded resource spent on movement, scouting and camps
- Threat: Global campaign clock
- Players: Supported table sizes
- Resupply: Amounts gained by the Resupply action
- Content: Special table keys

Usage:
    from ctesiphus.parameters import SP_MAX, DEFAULT_TARGET_THREAT
"""

# =============================================================================
# SUPPLY POINT PARAMETERS
# =============================================================================

SP_MIN = 0
"""Lowest Supply Point value a player can hold."""

SP_MAX = 10
"""Highest Supply Point value a player can hold.

Every SP-affecting operation re-clamps to [SP_MIN, SP_MAX]. Gains that would
push past the cap are lost, which is why Resupply computes its actual gain
against the headroom below SP_MAX.
"""

STARTING_SP = 10
"""Supply Points each player starts the campaign with."""

STARTING_CP = 0
"""Campaign Points each player starts the campaign with."""


# =============================================================================
# THREAT PARAMETERS
# =============================================================================

MIN_THREAT = 1
"""Threat Level at the start of every campaign."""

MAX_THREAT = 10
"""Hard ceiling for the Threat Level (mid-round increases clamp here)."""

DEFAULT_TARGET_THREAT = 7
"""Threat Level at which the campaign ends.

The threat rises by one at the end of every full round, so with the default
target a campaign without solo-mode tomb effects lasts six rounds.
"""

THREAT_PER_ROUND = 1
"""Threat added at the end of each round."""


# =============================================================================
# PLAYER PARAMETERS
# =============================================================================

MIN_PLAYERS = 2
"""Smallest supported player count (smallest map configuration)."""

MAX_PLAYERS = 6
"""Largest supported player count (largest map configuration)."""


# =============================================================================
# RESUPPLY PARAMETERS
# =============================================================================

RESUPPLY_AT_BASE = 10
"""SP gained when resupplying at one of the player's own bases."""

RESUPPLY_AT_CAMP = "D3+3"
"""SP gained (dice notation) when resupplying at one of the player's own camps."""

RESUPPLY_ELSEWHERE = 1
"""SP gained when resupplying anywhere else."""

RESUPPLY_CONDITION_MODIFIER = 1
"""Adjustment applied by bonusResupply / reducedResupply conditions."""


# =============================================================================
# SEARCH PARAMETERS
# =============================================================================

DEFAULT_SEARCH_SP = "D3"
"""SP found by searching a searchSP location that has no explicit value."""

DEFAULT_SEARCH_CP = 1
"""CP found by searching a searchCP location that has no explicit value."""


# =============================================================================
# CONTENT PARAMETERS
# =============================================================================

BASE_KEY = 10
"""Table key used for starting base hexes.

D36 rolls only produce 11-16, 21-26 and 31-36, so this key can never be
rolled. Every location/condition table carries an entry under it.
"""

HEX_ID_DELIMITER = ","
"""Separator between row and column in encoded hex ids ("row,col")."""
