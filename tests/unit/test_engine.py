"""Progression engine tests: profile creation, battle steps and league changes."""

from __future__ import annotations

import random

import pytest

from heroforge.errors import AlreadyExists, ProfileNotFound
from heroforge.events import EventType
from heroforge.progression.engine import apply_battle_outcome, battle_experience, evaluate_league
from heroforge.progression.league_table import MAX_LEAGUE, next_tier
from heroforge.progression.level_thresholds import LEVEL_CAP
from heroforge.progression.models import UserProfile
from tests.helpers import PLAYER, set_profile


class TestCreateProfile:
    def test_initial_state(self, game):
        profile = game.create_profile(PLAYER, "Arthur")
        assert profile.name == "Arthur"
        assert profile.experience == 10
        assert profile.level == 1
        assert profile.trophies == 0
        assert profile.league == 1
        assert profile.battle_multiplier == 10
        assert profile.battles_won == 0
        assert profile.exists is True

    def test_mints_level_1_hero(self, game):
        profile = game.create_profile(PLAYER, "Arthur")
        assert profile.nfts_owned == 1
        assert game.store.tokens_for(PLAYER) == [1]
        assert game.store.nft_stats[1].level_minted == 1
        assert game.registry.owner_of(1) == PLAYER

    def test_events_mint_then_created(self, game):
        game.create_profile(PLAYER, "Arthur")
        assert [e.event for e in game.events.events] == [EventType.NFT_MINTED, EventType.PROFILE_CREATED]
        created = game.events.events[-1]
        assert created.account == PLAYER
        assert created.data == {"name": "Arthur"}

    def test_duplicate_rejected(self, game, player):
        with pytest.raises(AlreadyExists, match="already exists"):
            game.create_profile(player, "Imposter")

    def test_duplicate_commits_nothing(self, game, player):
        with pytest.raises(AlreadyExists):
            game.create_profile(player, "Imposter")
        assert game.store.require_profile(player).name == "Arthur"
        assert game.registry.total_issued == 1
        assert game.events.events == []

    def test_accounts_are_independent(self, game):
        game.create_profile("a", "Ann")
        game.create_profile("b", "Bob")
        assert game.store.tokens_for("a") == [1]
        assert game.store.tokens_for("b") == [2]


class TestBattleSteps:
    """The pure steps can be checked on their own."""

    def test_battle_experience(self):
        assert battle_experience(1, True) == 10
        assert battle_experience(1, False) == 7
        assert battle_experience(4, True) == 16

    def test_apply_win(self):
        after = apply_battle_outcome(UserProfile(name="x"), True)
        assert after.experience == 20
        assert after.trophies == 15
        assert after.battles_won == 1
        assert after.level == 1  # leveling is a later step

    def test_apply_loss(self):
        after = apply_battle_outcome(UserProfile(name="x", trophies=40), False)
        assert after.experience == 17
        assert after.trophies == 35
        assert after.battles_won == 0

    def test_apply_loss_clamps_trophies(self):
        after = apply_battle_outcome(UserProfile(name="x", trophies=3), False)
        assert after.trophies == 0

    def test_evaluate_league_uses_trophies(self):
        assert evaluate_league(UserProfile(name="x", trophies=260, league=1)) == 3
        assert evaluate_league(UserProfile(name="x", trophies=10, league=3)) == 1


class TestRecordBattleResult:
    def test_unknown_account(self, game):
        with pytest.raises(ProfileNotFound):
            game.record_battle_result("ghost", True)
        assert game.events.events == []

    def test_first_win_levels_up(self, game, player):
        """10 + 10 exp = 20; level 1 needs 15, leaving 5."""
        report = game.record_battle_result(player, True)
        profile = game.store.require_profile(player)
        assert profile.level == 2
        assert profile.experience == 5
        assert profile.battle_multiplier == 11
        assert profile.trophies == 15
        assert profile.battles_won == 1
        assert report.levels_crossed == (2,)
        assert report.experience_gained == 10
        assert report.trophy_delta == 15
        assert report.crate is None

    def test_loss_does_not_count_as_win(self, game, player):
        game.record_battle_result(player, False)
        assert game.store.require_profile(player).battles_won == 0

    def test_loss_clamps_to_zero(self, game, player):
        """3 trophies, Peasant loss of 5: trophies become 0."""
        set_profile(game, player, trophies=3)
        report = game.record_battle_result(player, False)
        assert game.store.require_profile(player).trophies == 0
        assert report.trophy_delta == -3

    def test_multi_level_jump_emits_each_level(self, game, player):
        """50 + 10 exp from level 1 crosses levels 2, 3 and 4."""
        set_profile(game, player, experience=50)
        report = game.record_battle_result(player, True)

        level_ups = game.events.of_type(EventType.LEVEL_UP)
        assert [e.data["new_level"] for e in level_ups] == [2, 3, 4]
        assert [e.data["multiplier"] for e in level_ups] == [11, 12, 13]
        assert report.levels_crossed == (2, 3, 4)
        assert game.store.require_profile(player).battle_multiplier == 13

    def test_level_never_exceeds_cap(self, game, player):
        set_profile(game, player, experience=10**8)
        game.record_battle_result(player, True)
        assert game.store.require_profile(player).level == LEVEL_CAP
        game.record_battle_result(player, True)
        assert game.store.require_profile(player).level == LEVEL_CAP

    def test_no_events_without_change(self, game, player):
        """A loss at 0 trophies with too little exp changes no level or league."""
        set_profile(game, player, experience=0)
        game.record_battle_result(player, False)
        assert game.events.events == []


class TestLeagueTransitions:
    def test_ten_wins_scenario(self, game, player):
        expected_trophies = [15, 30, 45, 60, 75, 90, 105, 120, 135, 150]
        expected_league = [1, 1, 1, 1, 1, 1, 2, 2, 2, 2]

        for trophies, league in zip(expected_trophies, expected_league):
            game.record_battle_result(player, True)
            profile = game.store.require_profile(player)
            assert profile.trophies == trophies
            assert profile.league == league

        crates = game.store.crates_for(player)
        assert len(crates) == 1
        assert crates[0].crate_type == "Rare"
        assert crates[0].rarity == 1
        assert crates[0].claimed is False

    def test_promotion_events(self, game, player):
        set_profile(game, player, trophies=95)
        report = game.record_battle_result(player, True)

        assert report.league_changed
        assert (report.old_league, report.new_league) == (1, 2)
        changed = game.events.of_type(EventType.LEAGUE_CHANGED)
        awarded = game.events.of_type(EventType.CRATE_AWARDED)
        assert len(changed) == 1
        assert changed[0].data == {"new_league": 2, "crate_type": "Rare"}
        assert len(awarded) == 1
        assert awarded[0].data == {"crate_type": "Rare", "rarity": 1, "new_league": 2}

    def test_league_events_follow_level_ups(self, game, player):
        set_profile(game, player, trophies=95)
        game.record_battle_result(player, True)
        kinds = [e.event for e in game.events.events]
        assert kinds == [EventType.LEVEL_UP, EventType.LEAGUE_CHANGED, EventType.CRATE_AWARDED]

    def test_demotion_awards_crate(self, game, player):
        """Knight loss of 8 from 100 trophies drops back to Peasant."""
        set_profile(game, player, trophies=100, league=2)
        report = game.record_battle_result(player, False)

        assert report.new_league == 1
        assert game.store.require_profile(player).trophies == 92
        crates = game.store.crates_for(player)
        assert [(c.crate_type, c.rarity) for c in crates] == [("Basic", 0)]

    def test_multiple_boundaries_one_crate(self, game, player):
        """Peasant to Divine in one win still yields a single crate."""
        set_profile(game, player, trophies=1490)
        report = game.record_battle_result(player, True)

        assert report.new_league == MAX_LEAGUE
        crates = game.store.crates_for(player)
        assert len(crates) == 1
        assert crates[0].crate_type == "Legendary"
        assert crates[0].rarity == 5
        assert len(game.events.of_type(EventType.CRATE_AWARDED)) == 1

    def test_gain_uses_tier_at_battle_start(self, game, player):
        set_profile(game, player, trophies=245, league=2)
        game.record_battle_result(player, True)  # +15 at Knight -> 260, Baron
        game.record_battle_result(player, True)  # +12 at Baron
        profile = game.store.require_profile(player)
        assert profile.league == 3
        assert profile.trophies == 272

    def test_unchanged_tier_no_crate(self, game, player):
        set_profile(game, player, trophies=150, league=2)
        game.record_battle_result(player, False)
        assert game.store.crates_for(player) == []
        assert game.events.of_type(EventType.LEAGUE_CHANGED) == []


class TestInvariantsUnderRandomPlay:
    """Long random battle sequences keep every profile invariant."""

    @pytest.mark.parametrize("seed", [7, 1234, 98765])
    def test_random_sequence(self, game, player, seed):
        rng = random.Random(seed)
        tier_changes = 0
        last_level = 1
        last_multiplier = 10

        for _ in range(400):
            report = game.record_battle_result(player, rng.random() < 0.6)
            profile = report.profile

            assert profile.trophies >= 0
            assert 1 <= profile.league <= MAX_LEAGUE
            assert profile.league == next_tier(profile.trophies, 1)
            assert profile.level <= LEVEL_CAP
            assert profile.level >= last_level
            assert profile.battle_multiplier == last_multiplier + len(report.levels_crossed)
            assert profile == game.store.require_profile(player)

            last_level = profile.level
            last_multiplier = profile.battle_multiplier
            if report.league_changed:
                tier_changes += 1

        assert len(game.store.crates_for(player)) == tier_changes
