"""Ownership registry for minted hero tokens.

Issues token identifiers and records which account holds each token.
Identifiers start at 1, strictly increase and are never reused.
"""

from __future__ import annotations

import logging
from collections import Counter

from heroforge.errors import TokenNotFound

logger = logging.getLogger(__name__)


class OwnershipRegistry:
    def __init__(self) -> None:
        self._last_id = 0
        self._owners: dict[int, str] = {}  # token_id -> account
        self._balances: Counter[str] = Counter()

    def issue_identifier(self) -> int:
        """Reserve the next token identifier."""
        self._last_id += 1
        return self._last_id

    def assign_owner(self, token_id: int, account: str) -> None:
        """Record ``account`` as the holder of a freshly issued token."""
        if not 1 <= token_id <= self._last_id:
            raise TokenNotFound(f"Token {token_id} was never issued", account=account)
        if token_id in self._owners:
            raise ValueError(f"Token {token_id} already has an owner")
        self._owners[token_id] = account
        self._balances[account] += 1
        logger.debug("Assigned token %s to %s", token_id, account)

    def owner_of(self, token_id: int) -> str:
        """Account holding ``token_id``."""
        owner = self._owners.get(token_id)
        if owner is None:
            raise TokenNotFound(f"Token {token_id} not found")
        return owner

    def balance_of(self, account: str) -> int:
        return self._balances[account]

    @property
    def total_issued(self) -> int:
        return self._last_id
