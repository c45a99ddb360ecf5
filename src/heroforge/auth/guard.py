"""Owner-only access check for administrative operations.

Self-service progression operations never consult the guard; it exists for
privileged actions taken on behalf of the game operator.
"""

from __future__ import annotations

import structlog

from heroforge.errors import NotAuthorized

logger = structlog.get_logger()


class AuthorizationGuard:
    """Permits an action only when the caller is the designated owner."""

    def __init__(self, owner: str) -> None:
        self._owner = owner

    @property
    def owner(self) -> str:
        return self._owner

    def is_owner(self, caller: str) -> bool:
        return caller == self._owner

    def require_owner(self, caller: str) -> None:
        """Raise NotAuthorized unless ``caller`` is the owner."""
        if not self.is_owner(caller):
            logger.info("operation_rejected", account=caller, reason="not_owner")
            raise NotAuthorized(f"Account {caller} is not the owner", account=caller)

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        """Hand the owner role to ``new_owner``. Owner only."""
        self.require_owner(caller)
        if not new_owner:
            raise ValueError("New owner must be a non-empty account")
        logger.info("ownership_transferred", previous_owner=self._owner, new_owner=new_owner)
        self._owner = new_owner
