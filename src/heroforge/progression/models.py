"""Per-account state records.

Records are frozen; every change produces a new record through
``dataclasses.replace`` so an operation can build its full result before
writing anything back to the store.
"""

from __future__ import annotations

from dataclasses import dataclass

from heroforge.progression.level_thresholds import BASE_MULTIPLIER, STARTING_EXPERIENCE, STARTING_LEVEL


@dataclass(frozen=True)
class UserProfile:
    name: str
    experience: int = STARTING_EXPERIENCE
    level: int = STARTING_LEVEL
    trophies: int = 0
    battles_won: int = 0
    nfts_owned: int = 0
    league: int = 1
    battle_multiplier: int = BASE_MULTIPLIER
    exists: bool = True


@dataclass(frozen=True)
class NFTStats:
    """Combat stats fixed at mint time."""

    attack: int
    defense: int
    hit_points: int
    crit_rate: int
    level_minted: int


@dataclass(frozen=True)
class Crate:
    """Reward record. ``claimed`` goes False -> True once and never back."""

    crate_type: str
    rarity: int
    claimed: bool = False
