"""Level thresholds and the leveling loop.

Experience is spent, not accumulated: crossing a level subtracts that level's
threshold from the pool, so ``experience`` is always the amount carried into
the current level.
"""

from __future__ import annotations

from dataclasses import dataclass

LEVEL_CAP = 100
STARTING_LEVEL = 1
STARTING_EXPERIENCE = 10
BASE_MULTIPLIER = 10


@dataclass(frozen=True)
class LevelingResult:
    """Outcome of one pass of the leveling loop."""

    experience: int
    level: int
    levels_crossed: tuple[int, ...] = ()


def exp_for_next(level: int) -> int:
    """Experience needed to advance from ``level`` to ``level + 1``."""
    return 10 + level * 5


def battle_multiplier(level: int) -> int:
    """Display multiplier for a profile at ``level``."""
    return BASE_MULTIPLIER + (level - 1)


def run_leveling(experience: int, level: int) -> LevelingResult:
    """Spend ``experience`` on as many levels as it covers, up to LEVEL_CAP.

    The threshold is re-read at the new level after every step, so a large
    pool can cross several levels in one call. Leftover experience stays in
    the pool, including any excess once the cap is reached.
    """
    crossed: list[int] = []
    while level < LEVEL_CAP and experience >= exp_for_next(level):
        experience -= exp_for_next(level)
        level += 1
        crossed.append(level)
    return LevelingResult(experience=experience, level=level, levels_crossed=tuple(crossed))
