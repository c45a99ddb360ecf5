"""League table and the tier state machine.

Tiers are indices 1..MAX_LEAGUE into the tables below. Index 0 is a sentinel
("None") that no existing profile ever holds. Crate names are indexed by
rarity and are a separate table from tier names.
"""

from __future__ import annotations

LEAGUE_NAMES: list[str] = ["None", "Peasant", "Knight", "Baron", "Duke", "King", "Divine"]
MAX_LEAGUE = len(LEAGUE_NAMES) - 1

# Minimum trophies to hold each tier
LEAGUE_THRESHOLDS: list[int] = [0, 0, 100, 250, 500, 900, 1500]

TROPHY_GAIN_PER_WIN: list[int] = [0, 15, 15, 12, 10, 8, 6]
TROPHY_LOSS_PER_DEFEAT: list[int] = [0, 5, 8, 10, 12, 15, 20]

CRATE_NAMES: list[str] = ["Basic", "Rare", "Epic", "Mythic", "Legendary"]


def league_name(tier: int) -> str:
    """Display name for a tier index."""
    if not 0 <= tier <= MAX_LEAGUE:
        raise ValueError(f"Unknown league tier: {tier}")
    return LEAGUE_NAMES[tier]


def apply_trophy_change(trophies: int, tier: int, is_win: bool) -> int:
    """Trophy count after one battle fought at ``tier``, floored at zero."""
    if is_win:
        return trophies + TROPHY_GAIN_PER_WIN[tier]
    return max(0, trophies - TROPHY_LOSS_PER_DEFEAT[tier])


def next_tier(trophies: int, current_tier: int) -> int:
    """Tier a profile holds with ``trophies``, starting from ``current_tier``.

    Upgrades are evaluated first so a large gain is absorbed in one call, then
    downgrades. Both loops always run; only the net result matters to callers.
    """
    tier = min(max(current_tier, 1), MAX_LEAGUE)

    while tier < MAX_LEAGUE and trophies >= LEAGUE_THRESHOLDS[tier + 1]:
        tier += 1

    while tier > 1 and trophies < LEAGUE_THRESHOLDS[tier]:
        tier -= 1

    return tier


def crate_for_league(tier: int) -> tuple[str, int]:
    """Crate type and rarity granted for reaching ``tier``.

    The type index is clamped to the crate table so a tier table longer than
    the crate table still resolves to the rarest crate.
    """
    index = min(tier - 1, len(CRATE_NAMES) - 1)
    return CRATE_NAMES[index], tier - 1


def league_rows() -> list[dict]:
    """All assignable tiers as table rows, lowest first."""
    return [
        {
            "tier": tier,
            "name": LEAGUE_NAMES[tier],
            "min_trophies": LEAGUE_THRESHOLDS[tier],
            "trophy_gain_per_win": TROPHY_GAIN_PER_WIN[tier],
            "trophy_loss_per_defeat": TROPHY_LOSS_PER_DEFEAT[tier],
            "crate_type": crate_for_league(tier)[0],
        }
        for tier in range(1, MAX_LEAGUE + 1)
    ]
