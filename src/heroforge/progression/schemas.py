"""Pydantic read models for progression queries."""

from __future__ import annotations

from pydantic import BaseModel


# --- Profile ---


class ProfileResponse(BaseModel):
    account: str
    name: str
    experience: int
    level: int
    trophies: int
    battles_won: int
    nfts_owned: int
    league: int
    league_name: str
    battle_multiplier: int
    exists: bool = True


class ProgressResponse(BaseModel):
    level: int
    battle_multiplier: int
    experience: int
    exp_for_next: int
    at_level_cap: bool
    league: int
    league_name: str
    trophies: int
    next_league_trophies: int | None = None  # None at the top tier


# --- Crates ---


class CrateResponse(BaseModel):
    index: int
    crate_type: str
    rarity: int
    claimed: bool


class CrateListResponse(BaseModel):
    crates: list[CrateResponse]
    total: int
    unclaimed: int


# --- Heroes ---


class NFTStatsResponse(BaseModel):
    token_id: int
    owner: str
    attack: int
    defense: int
    hit_points: int
    crit_rate: int
    level_minted: int


class OwnedTokensResponse(BaseModel):
    account: str
    token_ids: list[int]


# --- Leagues ---


class LeagueEntry(BaseModel):
    tier: int
    name: str
    min_trophies: int
    trophy_gain_per_win: int
    trophy_loss_per_defeat: int
    crate_type: str


class AllLeaguesResponse(BaseModel):
    leagues: list[LeagueEntry]
