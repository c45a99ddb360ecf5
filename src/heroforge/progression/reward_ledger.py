"""Crate ledger and hero minting.

Claiming a crate only flips its flag. Minting is a separate operation the
caller invokes explicitly, so a front-end can gate the mint behind its own
user action.
"""

from __future__ import annotations

from dataclasses import replace

import structlog

from heroforge.errors import AlreadyClaimed, BadIndex, InvalidLevel
from heroforge.events import EventSink, EventType, make_event
from heroforge.progression.league_table import crate_for_league
from heroforge.progression.models import Crate
from heroforge.progression.stat_curve import stats_for_level
from heroforge.registry import OwnershipRegistry
from heroforge.store import GameStore

logger = structlog.get_logger()


class RewardLedger:
    """Appends crates, marks them claimed and mints hero tokens."""

    def __init__(self, store: GameStore, registry: OwnershipRegistry, sink: EventSink) -> None:
        self.store = store
        self.registry = registry
        self.sink = sink

    def award_crate(self, account: str, new_league: int) -> Crate:
        """Append the crate for reaching ``new_league``.

        Events for the award are published by the caller together with the
        league change that caused it.
        """
        crate_type, rarity = crate_for_league(new_league)
        crate = Crate(crate_type=crate_type, rarity=rarity)
        self.store.append_crate(account, crate)
        return crate

    def claim_crate(self, account: str, index: int) -> Crate:
        """Mark the crate at ``index`` as claimed. Does not mint."""
        self.store.require_profile(account)
        crates = self.store.crates_for(account)

        if not 0 <= index < len(crates):
            logger.info("operation_rejected", account=account, reason="bad_index", index=index)
            raise BadIndex(f"Crate index {index} out of range (have {len(crates)})", account=account)

        crate = crates[index]
        if crate.claimed:
            logger.info("operation_rejected", account=account, reason="already_claimed", index=index)
            raise AlreadyClaimed(f"Crate {index} already claimed", account=account)

        claimed = replace(crate, claimed=True)
        self.store.replace_crate(account, index, claimed)
        logger.info("crate_claimed", account=account, index=index, crate_type=claimed.crate_type)

        self.sink.emit(make_event(
            EventType.CRATE_CLAIMED, account,
            index=index, crate_type=claimed.crate_type,
        ))
        return claimed

    def mint_nft(self, account: str, at_level: int) -> int:
        """Mint a hero for ``account`` with stats fixed at ``at_level``.

        ``at_level`` is taken as given; it is not checked against the
        account's current level. Returns the new token id.
        """
        profile = self.store.require_profile(account)
        if at_level < 1:
            logger.info("operation_rejected", account=account, reason="invalid_level", at_level=at_level)
            raise InvalidLevel(f"Cannot mint at level {at_level}", account=account)

        stats = stats_for_level(at_level)
        token_id = self.registry.issue_identifier()
        self.registry.assign_owner(token_id, account)
        self.store.add_token(account, token_id, stats)
        self.store.put_profile(account, replace(profile, nfts_owned=profile.nfts_owned + 1))
        logger.info("nft_minted", account=account, token_id=token_id, level=at_level)

        self.sink.emit(make_event(EventType.NFT_MINTED, account, token_id=token_id, level=at_level))
        return token_id
