"""Static campaign content for Ctesiphus.

Location and condition tables are keyed by D36 values (tens digit from a D3,
units digit from a D6), giving 18 keys per table: 11-16, 21-26, 31-36.
Every table additionally holds BASE_KEY, the fixed entry used for starting
bases, which can never be rolled.

This module is data only. The engine interprets the ``effect`` field of an
entry; ``value`` is either an integer or dice notation resolved at use time.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from ctesiphus.models.state import HexType, MapConfig
from ctesiphus.parameters import BASE_KEY


class TableEntry(BaseModel):
    """A location or condition entry."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    effect: str = "none"
    value: Optional[Union[int, str]] = None
    modifier: Optional[int] = None


def _entry(name: str, description: str, effect: str = "none", **extra) -> TableEntry:
    return TableEntry(name=name, description=description, effect=effect, **extra)


BASE_LOCATION = _entry("Base Camp", "Your starting location.", "base")
CLEAR_CONDITION = _entry("Clear", "No adverse conditions.")
QUIET_CONDITION = _entry("Quiet", "The tomb rests. No adverse conditions.")

UNKNOWN_LOCATION = _entry("Unknown", "Nothing notable.")


SURFACE_LOCATIONS: dict[int, TableEntry] = {
    BASE_KEY: BASE_LOCATION,
    11: _entry("Landing Site", "A suitable area for establishing a forward base. Encamping here costs 0 SP.", "freeEncamp"),
    12: _entry("Supply Cache", "Abandoned supplies from a previous expedition. Gain D3 SP when first explored.", "gainSP", value="D3"),
    13: _entry("Observation Post", "High ground with excellent visibility. Scout action costs 1 less SP from here.", "cheapScout"),
    14: _entry("Crashed Vessel", "Wreckage that may contain useful salvage. Search to gain D3 SP.", "searchSP"),
    15: _entry("Frozen Outpost", "An ice-covered structure. Nothing of note."),
    16: _entry("Sensor Array", "Functional detection equipment. Gain 1 CP when explored.", "gainCP", value=1),
    21: _entry("Barren Wastes", "Nothing but ice and rock."),
    22: _entry("Ice Cavern", "A natural cave system. Provides shelter but nothing else."),
    23: _entry("Thermal Vent", "Geothermal activity warms this area. Resupply gains +1 SP here.", "bonusResupply"),
    24: _entry("Relay Station", "Communications equipment. Gain 1 CP when explored.", "gainCP", value=1),
    25: _entry("Abandoned Camp", "Previous explorers left in a hurry. Gain 2 SP when first explored.", "gainSP", value=2),
    26: _entry("Xenos Remains", "Ancient alien corpses frozen in ice. Gain 1 CP for the discovery.", "gainCP", value=1),
    31: _entry("Empty Plains", "Featureless terrain stretching to the horizon."),
    32: _entry("Burial Mound", "Strange markings hint at what lies beneath. Search to gain 1 CP.", "searchCP"),
    33: _entry("Frozen Lake", "Thick ice covers unknown depths."),
    34: _entry("Ruined Structure", "Ancient architecture barely visible. Gain 1 CP when explored.", "gainCP", value=1),
    35: _entry("Equipment Depot", "Military supplies left behind. Gain D3+1 SP when first explored.", "gainSP", value="D3+1"),
    36: _entry("Tomb Entrance", "A passage leading down into darkness. This hex connects to the tomb.", "tombEntrance"),
}

TOMB_LOCATIONS: dict[int, TableEntry] = {
    BASE_KEY: BASE_LOCATION,
    11: _entry("Stasis Chamber", "Rows of dormant Necrons. Disturbing them would be unwise. Nothing of value."),
    12: _entry("Power Conduit", "Glowing energy flows through crystalline tubes. Gain 1 CP when explored.", "gainCP", value=1),
    13: _entry("Astral Augury", "Strange devices project star maps. Gain 2 CP when explored.", "gainCP", value=2),
    14: _entry("Canoptek Nest", "Repair scarabs swarm here. Dangerous but nothing to salvage."),
    15: _entry("Transtechnic Fulcrum", "Reality bends around this device. Gain D3 CP when explored.", "gainCP", value="D3"),
    16: _entry("Resurrection Orb", "A glowing sphere of immense power. Gain 3 CP when explored.", "gainCP", value=3),
    21: _entry("Empty Corridor", "Featureless metal walls stretch endlessly."),
    22: _entry("Data Repository", "Banks of alien technology store unknown information. Gain 1 CP when explored.", "gainCP", value=1),
    23: _entry("Scarab Swarm", "Tiny constructs cover every surface. Search at your peril."),
    24: _entry("Trophy Hall", "Displays of conquered species. Disturbing but informative. Gain 1 CP.", "gainCP", value=1),
    25: _entry("Energy Cache", "Stored power cells. Gain D3 SP when first explored.", "gainSP", value="D3"),
    26: _entry("Null Field", "Technology fails here. No special effects apply in this hex.", "nullField"),
    31: _entry("Silent Hall", "The darkness seems to absorb all sound."),
    32: _entry("Cryptek Workshop", "Tools of impossible science. Gain 2 CP when explored.", "gainCP", value=2),
    33: _entry("Dimensional Rift", "Space folds strangely here. Movement from this hex costs 0 SP.", "freeMovement"),
    34: _entry("Ancient Archive", "Records of eons past. Gain 1 CP when explored.", "gainCP", value=1),
    35: _entry("Void Shield Generator", "Defensive systems still active. Gain 2 CP when explored.", "gainCP", value=2),
    36: _entry("Transdimensional Portal", "A gateway to another part of the tomb. Can teleport to any other Portal hex.", "portal"),
}

SURFACE_CONDITIONS: dict[int, TableEntry] = {
    BASE_KEY: CLEAR_CONDITION,
    11: CLEAR_CONDITION,
    12: CLEAR_CONDITION,
    13: _entry("Blizzard", "Harsh winds reduce visibility. -1 to hit in battles here.", "combat", modifier=-1),
    14: _entry("Ice Storm", "Dangerous conditions. Movement into this hex costs +1 SP.", "movementCost", value=1),
    15: _entry("Whiteout", "Cannot see anything. Scout actions cannot target this hex.", "noScout"),
    16: _entry("Frozen Ground", "Treacherous footing. No special effect."),
    21: CLEAR_CONDITION,
    22: CLEAR_CONDITION,
    23: _entry("Sub-Zero", "Extreme cold. Resupply provides 1 less SP here.", "reducedResupply"),
    24: _entry("Aurora", "Strange lights in the sky. Gain +1 CP for battles fought here.", "bonusBattleCP"),
    25: _entry("Seismic Activity", "Ground tremors. Random terrain shifts during battle.", "terrain"),
    26: _entry("Radiation Zone", "Lingering energy. Lose 1 SP when entering this hex.", "enterCost", value=1),
    31: CLEAR_CONDITION,
    32: CLEAR_CONDITION,
    33: _entry("Fog Bank", "Limited visibility. Engagement range reduced in battles.", "combat"),
    34: _entry("Stable", "Good conditions for establishing camp. Encamp costs -1 SP.", "cheapEncamp"),
    35: _entry("Rich Deposits", "Valuable resources. Search gains +1 SP or CP.", "bonusSearch"),
    36: _entry("Necron Patrol", "Active enemies. Must fight Necron NPCs if ending movement here.", "hostileNPC"),
}

TOMB_CONDITIONS: dict[int, TableEntry] = {
    BASE_KEY: QUIET_CONDITION,
    11: QUIET_CONDITION,
    12: QUIET_CONDITION,
    13: _entry("Awakening", "Systems activating. Threat increases by 1 when explored.", "threatIncrease", value=1),
    14: _entry("Power Surge", "Energy fluctuations. Random effects during battle.", "combat"),
    15: _entry("Lockdown", "Security protocols active. Cannot leave this hex next turn.", "lockdown"),
    16: _entry("Darkness", "Lights have failed. -1 to hit in battles here.", "combat", modifier=-1),
    21: QUIET_CONDITION,
    22: QUIET_CONDITION,
    23: _entry("Repair Swarm", "Scarabs everywhere. Lose 1 SP when entering.", "enterCost", value=1),
    24: _entry("Phase Field", "Reality shifts. Movement costs doubled in this hex.", "movementCost", value=2),
    25: _entry("Stasis Leak", "Time moves strangely. No actions can be taken here.", "noActions"),
    26: _entry("Energy Nexus", "Power concentration. Gain +1 SP when resupplying here.", "bonusResupply"),
    31: QUIET_CONDITION,
    32: QUIET_CONDITION,
    33: _entry("Guardian Protocols", "Defenses active. Must fight Necron NPCs.", "hostileNPC"),
    34: _entry("Stable Systems", "Safe area. Encamp costs -1 SP.", "cheapEncamp"),
    35: _entry("Data Fragment", "Valuable information. Search gains +1 CP.", "bonusSearchCP"),
    36: _entry("Overlord's Attention", "You have been noticed. Threat increases by 2.", "threatIncrease", value=2),
}


MAP_CONFIGS: dict[int, MapConfig] = {
    2: MapConfig(name="Small (2 Players)", rows=5, cols=5, surface_rows=2, tomb_rows=3),
    3: MapConfig(name="Medium (3 Players)", rows=6, cols=6, surface_rows=3, tomb_rows=3),
    4: MapConfig(name="Standard (4 Players)", rows=7, cols=7, surface_rows=3, tomb_rows=4),
    5: MapConfig(name="Large (5 Players)", rows=8, cols=7, surface_rows=3, tomb_rows=5),
    6: MapConfig(name="Extra Large (6 Players)", rows=8, cols=8, surface_rows=3, tomb_rows=5),
}

PLAYER_COLORS: list[str] = [
    "#e74c3c",  # Red
    "#3498db",  # Blue
    "#2ecc71",  # Green
    "#f39c12",  # Orange
    "#9b59b6",  # Purple
    "#1abc9c",  # Teal
]

THREAT_LEVEL_NAMES: dict[int, str] = {
    1: "Dormant",
    2: "Stirring",
    3: "Alert",
    4: "Active",
    5: "Hostile",
    6: "Aggressive",
    7: "Awakened",
}


def location_table(hex_type: HexType) -> dict[int, TableEntry]:
    return SURFACE_LOCATIONS if hex_type == HexType.SURFACE else TOMB_LOCATIONS


def condition_table(hex_type: HexType) -> dict[int, TableEntry]:
    return SURFACE_CONDITIONS if hex_type == HexType.SURFACE else TOMB_CONDITIONS


def get_location(hex_type: HexType, key: int) -> TableEntry:
    """Look up a location entry, falling back to a neutral "Unknown" entry."""
    return location_table(hex_type).get(key, UNKNOWN_LOCATION)


def get_condition(hex_type: HexType, key: int) -> TableEntry:
    """Look up a condition entry, falling back to "Clear"."""
    return condition_table(hex_type).get(key, CLEAR_CONDITION)


def threat_level_name(level: int) -> str:
    """Name of a threat level; anything past the last named level is "Awakened"."""
    if level in THREAT_LEVEL_NAMES:
        return THREAT_LEVEL_NAMES[level]
    if level > max(THREAT_LEVEL_NAMES):
        return THREAT_LEVEL_NAMES[max(THREAT_LEVEL_NAMES)]
    return THREAT_LEVEL_NAMES[min(THREAT_LEVEL_NAMES)]
