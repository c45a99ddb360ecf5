"""Game factory: wires the store, collaborators and progression services."""

from __future__ import annotations

from dataclasses import dataclass

from heroforge.auth.guard import AuthorizationGuard
from heroforge.config import Settings, get_settings
from heroforge.errors import TokenNotFound
from heroforge.events import EventSink, FanoutEventSink, LoggingEventSink, RecordingEventSink
from heroforge.logging import setup_logging
from heroforge.progression.engine import BattleReport, ProgressionEngine
from heroforge.progression.league_table import LEAGUE_THRESHOLDS, MAX_LEAGUE, league_name, league_rows
from heroforge.progression.level_thresholds import LEVEL_CAP, exp_for_next
from heroforge.progression.models import Crate, UserProfile
from heroforge.progression.reward_ledger import RewardLedger
from heroforge.progression.schemas import (
    AllLeaguesResponse,
    CrateListResponse,
    CrateResponse,
    LeagueEntry,
    NFTStatsResponse,
    OwnedTokensResponse,
    ProfileResponse,
    ProgressResponse,
)
from heroforge.registry import OwnershipRegistry
from heroforge.store import GameStore


@dataclass
class Game:
    """One game world: shared tables, per-account state and its services."""

    settings: Settings
    store: GameStore
    registry: OwnershipRegistry
    guard: AuthorizationGuard
    events: RecordingEventSink
    ledger: RewardLedger
    engine: ProgressionEngine

    # --- Operations ---

    def create_profile(self, account: str, name: str) -> UserProfile:
        return self.engine.create_profile(account, name)

    def record_battle_result(self, account: str, is_win: bool) -> BattleReport:
        return self.engine.record_battle_result(account, is_win)

    def claim_crate(self, account: str, index: int) -> Crate:
        return self.ledger.claim_crate(account, index)

    def mint_nft(self, account: str, at_level: int) -> int:
        return self.ledger.mint_nft(account, at_level)

    def admin_mint(self, caller: str, account: str, at_level: int) -> int:
        """Mint a hero into ``account`` on the operator's behalf. Owner only."""
        self.guard.require_owner(caller)
        return self.ledger.mint_nft(account, at_level)

    # --- Queries ---

    def get_profile(self, account: str) -> ProfileResponse:
        profile = self.store.require_profile(account)
        return ProfileResponse(
            account=account,
            name=profile.name,
            experience=profile.experience,
            level=profile.level,
            trophies=profile.trophies,
            battles_won=profile.battles_won,
            nfts_owned=profile.nfts_owned,
            league=profile.league,
            league_name=league_name(profile.league),
            battle_multiplier=profile.battle_multiplier,
            exists=profile.exists,
        )

    def get_progress(self, account: str) -> ProgressResponse:
        profile = self.store.require_profile(account)
        next_league = LEAGUE_THRESHOLDS[profile.league + 1] if profile.league < MAX_LEAGUE else None
        return ProgressResponse(
            level=profile.level,
            battle_multiplier=profile.battle_multiplier,
            experience=profile.experience,
            exp_for_next=exp_for_next(profile.level),
            at_level_cap=profile.level >= LEVEL_CAP,
            league=profile.league,
            league_name=league_name(profile.league),
            trophies=profile.trophies,
            next_league_trophies=next_league,
        )

    def get_owned_tokens(self, account: str) -> OwnedTokensResponse:
        return OwnedTokensResponse(account=account, token_ids=self.store.tokens_for(account))

    def get_crates(self, account: str) -> CrateListResponse:
        crates = [
            CrateResponse(index=i, crate_type=c.crate_type, rarity=c.rarity, claimed=c.claimed)
            for i, c in enumerate(self.store.crates_for(account))
        ]
        return CrateListResponse(
            crates=crates,
            total=len(crates),
            unclaimed=sum(1 for c in crates if not c.claimed),
        )

    def get_nft_stats(self, token_id: int) -> NFTStatsResponse:
        stats = self.store.nft_stats.get(token_id)
        if stats is None:
            raise TokenNotFound(f"Token {token_id} not found")
        return NFTStatsResponse(
            token_id=token_id,
            owner=self.registry.owner_of(token_id),
            attack=stats.attack,
            defense=stats.defense,
            hit_points=stats.hit_points,
            crit_rate=stats.crit_rate,
            level_minted=stats.level_minted,
        )

    def get_leagues(self) -> AllLeaguesResponse:
        return AllLeaguesResponse(leagues=[LeagueEntry(**row) for row in league_rows()])


def create_game(settings: Settings | None = None, sink: EventSink | None = None) -> Game:
    """Build a game world.

    Every event goes to ``Game.events``; the structured-log sink is added when
    ``settings.log_events`` is set, and ``sink`` (if given) receives events too.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    recorder = RecordingEventSink()
    fanout = FanoutEventSink([recorder])
    if settings.log_events:
        fanout.add(LoggingEventSink())
    if sink is not None:
        fanout.add(sink)

    store = GameStore()
    registry = OwnershipRegistry()
    ledger = RewardLedger(store, registry, fanout)
    engine = ProgressionEngine(store, ledger, fanout)

    return Game(
        settings=settings,
        store=store,
        registry=registry,
        guard=AuthorizationGuard(settings.owner_account),
        events=recorder,
        ledger=ledger,
        engine=engine,
    )
