"""Test helpers shared across unit tests."""

from __future__ import annotations

from dataclasses import replace

from heroforge.game import Game

PLAYER = "acct-arthur"
OPERATOR = "operator"


def set_profile(game: Game, account: str, **changes) -> None:
    """Overwrite profile fields directly in the store."""
    profile = game.store.require_profile(account)
    game.store.put_profile(account, replace(profile, **changes))
