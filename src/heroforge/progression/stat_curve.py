"""Hero stat curve.

Stats come from a linear formula except at the calibration levels, which use
hand-tuned tuples. The calibration tuples deliberately sit off the formula
(level 10 mints attack 8, not 23) and must stay that way.
"""

from __future__ import annotations

from heroforge.progression.models import NFTStats

# level -> (attack, defense, hit_points, crit_rate)
CALIBRATION_POINTS: dict[int, tuple[int, int, int, int]] = {
    1: (5, 5, 20, 200),
    10: (8, 8, 30, 300),
    20: (12, 12, 45, 400),
    30: (16, 16, 60, 500),
}


def stats_for_level(level: int) -> NFTStats:
    """Stats for a hero minted at ``level``."""
    if level in CALIBRATION_POINTS:
        attack, defense, hit_points, crit_rate = CALIBRATION_POINTS[level]
    else:
        steps = level - 1
        attack = defense = 5 + steps * 2
        hit_points = 20 + steps * 3
        crit_rate = 200 + steps * 10

    return NFTStats(
        attack=attack,
        defense=defense,
        hit_points=hit_points,
        crit_rate=crit_rate,
        level_minted=level,
    )
