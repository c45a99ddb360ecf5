"""In-memory per-account game state.

The store is an explicit object handed to the engine and the ledger, never a
module-level singleton. Hosts that persist state snapshot it through the
read models in ``heroforge.progression.schemas``.
"""

from __future__ import annotations

import structlog

from heroforge.errors import ProfileNotFound
from heroforge.progression.models import Crate, NFTStats, UserProfile

logger = structlog.get_logger()


class GameStore:
    """Key-value maps for profiles, crates, owned tokens and token stats."""

    def __init__(self) -> None:
        self.profiles: dict[str, UserProfile] = {}  # account -> profile
        self.crates: dict[str, list[Crate]] = {}  # account -> crates, append-only
        self.owned_tokens: dict[str, list[int]] = {}  # account -> token ids
        self.nft_stats: dict[int, NFTStats] = {}  # token id -> stats

    def has_profile(self, account: str) -> bool:
        profile = self.profiles.get(account)
        return profile is not None and profile.exists

    def require_profile(self, account: str) -> UserProfile:
        """Return the account's profile or raise ProfileNotFound."""
        profile = self.profiles.get(account)
        if profile is None or not profile.exists:
            logger.info("operation_rejected", account=account, reason="profile_not_found")
            raise ProfileNotFound(f"No profile for account {account}", account=account)
        return profile

    def put_profile(self, account: str, profile: UserProfile) -> None:
        self.profiles[account] = profile

    def crates_for(self, account: str) -> list[Crate]:
        return list(self.crates.get(account, []))

    def append_crate(self, account: str, crate: Crate) -> int:
        """Append a crate and return its index."""
        crates = self.crates.setdefault(account, [])
        crates.append(crate)
        return len(crates) - 1

    def replace_crate(self, account: str, index: int, crate: Crate) -> None:
        self.crates[account][index] = crate

    def tokens_for(self, account: str) -> list[int]:
        return list(self.owned_tokens.get(account, []))

    def add_token(self, account: str, token_id: int, stats: NFTStats) -> None:
        self.nft_stats[token_id] = stats
        self.owned_tokens.setdefault(account, []).append(token_id)
