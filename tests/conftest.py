"""Shared test fixtures."""

from __future__ import annotations

import pytest

from heroforge.config import Settings
from heroforge.game import Game, create_game
from tests.helpers import OPERATOR, PLAYER, set_profile


@pytest.fixture
def settings() -> Settings:
    """Quiet settings: console logs, no event logging."""
    return Settings(log_format="console", log_events=False, owner_account=OPERATOR)


@pytest.fixture
def game(settings: Settings) -> Game:
    """Fresh game world for each test."""
    return create_game(settings)


@pytest.fixture
def player(game: Game) -> str:
    """Account with a new profile; creation events are cleared."""
    game.create_profile(PLAYER, "Arthur")
    game.events.clear()
    return PLAYER


@pytest.fixture
def promoted_player(game: Game, player: str) -> str:
    """Player promoted to Knight by one win from 95 trophies, holding one Rare crate."""
    set_profile(game, player, trophies=95)
    game.record_battle_result(player, True)
    game.events.clear()
    return player
