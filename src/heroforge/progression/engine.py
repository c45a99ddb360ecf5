"""Progression engine: profile creation and battle results.

A battle result runs as an ordered sequence of pure steps:

1. apply_battle_outcome  - experience, trophies and win counter
2. run_leveling          - spend experience on levels (see level_thresholds)
3. evaluate_league       - upgrade then downgrade against the league table

The new profile is assembled from those steps and committed in one write,
after which the crate (if any) is appended and events are published.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

import structlog

from heroforge.errors import AlreadyExists
from heroforge.events import EventSink, EventType, GameEvent, make_event, publish
from heroforge.progression.league_table import apply_trophy_change, next_tier
from heroforge.progression.level_thresholds import STARTING_LEVEL, battle_multiplier, run_leveling
from heroforge.progression.models import Crate, UserProfile
from heroforge.progression.reward_ledger import RewardLedger
from heroforge.store import GameStore

logger = structlog.get_logger()

WIN_EXP_BONUS = 3


@dataclass(frozen=True)
class BattleReport:
    """What one recorded battle changed."""

    account: str
    is_win: bool
    experience_gained: int
    trophy_delta: int
    levels_crossed: tuple[int, ...]
    old_league: int
    new_league: int
    crate: Crate | None
    profile: UserProfile

    @property
    def league_changed(self) -> bool:
        return self.new_league != self.old_league


def battle_experience(league: int, is_win: bool) -> int:
    """Experience earned for one battle fought at ``league``."""
    exp = 5 + league * 2
    if is_win:
        exp += WIN_EXP_BONUS
    return exp


def apply_battle_outcome(profile: UserProfile, is_win: bool) -> UserProfile:
    """Step 1: add battle experience and apply the trophy change.

    Both amounts are read from the tier the battle was fought at.
    """
    return replace(
        profile,
        experience=profile.experience + battle_experience(profile.league, is_win),
        trophies=apply_trophy_change(profile.trophies, profile.league, is_win),
        battles_won=profile.battles_won + 1 if is_win else profile.battles_won,
    )


def evaluate_league(profile: UserProfile) -> int:
    """Step 3: tier the profile's trophies put it in."""
    return next_tier(profile.trophies, profile.league)


class ProgressionEngine:
    """Owns profile state transitions for every account in a store."""

    def __init__(self, store: GameStore, ledger: RewardLedger, sink: EventSink) -> None:
        self.store = store
        self.ledger = ledger
        self.sink = sink

    def create_profile(self, account: str, name: str) -> UserProfile:
        """Create the account's profile and mint its first hero at level 1."""
        if self.store.has_profile(account):
            logger.info("operation_rejected", account=account, reason="already_exists")
            raise AlreadyExists(f"Profile already exists for account {account}", account=account)

        self.store.put_profile(account, UserProfile(name=name))
        self.ledger.mint_nft(account, STARTING_LEVEL)
        logger.info("profile_created", account=account, name=name)

        self.sink.emit(make_event(EventType.PROFILE_CREATED, account, name=name))
        return self.store.require_profile(account)

    def record_battle_result(self, account: str, is_win: bool) -> BattleReport:
        """Apply one battle outcome to the account's profile."""
        before = self.store.require_profile(account)

        after = apply_battle_outcome(before, is_win)

        leveling = run_leveling(after.experience, after.level)
        after = replace(after, experience=leveling.experience, level=leveling.level)

        events: list[GameEvent] = []
        for level in leveling.levels_crossed:
            multiplier = battle_multiplier(level)
            after = replace(after, battle_multiplier=multiplier)
            events.append(make_event(EventType.LEVEL_UP, account, new_level=level, multiplier=multiplier))

        new_league = evaluate_league(after)
        after = replace(after, league=new_league)

        # Commit
        self.store.put_profile(account, after)
        crate = None
        if new_league != before.league:
            crate = self.ledger.award_crate(account, new_league)
            events.append(make_event(
                EventType.LEAGUE_CHANGED, account,
                new_league=new_league, crate_type=crate.crate_type,
            ))
            events.append(make_event(
                EventType.CRATE_AWARDED, account,
                crate_type=crate.crate_type, rarity=crate.rarity, new_league=new_league,
            ))

        logger.info(
            "battle_recorded",
            account=account,
            is_win=is_win,
            level=after.level,
            trophies=after.trophies,
            league=new_league,
        )
        if crate is not None:
            logger.info("league_changed", account=account, old_league=before.league, new_league=new_league)

        publish(self.sink, events)

        return BattleReport(
            account=account,
            is_win=is_win,
            experience_gained=battle_experience(before.league, is_win),
            trophy_delta=after.trophies - before.trophies,
            levels_crossed=leveling.levels_crossed,
            old_league=before.league,
            new_league=new_league,
            crate=crate,
            profile=after,
        )
