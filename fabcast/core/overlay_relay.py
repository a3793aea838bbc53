"""Relay between operator writes and display reads: slot -> store key -> JSON blob."""
import json
import logging
from typing import Any, Optional

from fabcast.core.errors import StoreFailure, StoreUnavailable, ValidationFailed
from fabcast.core.state_store import StateStore
from fabcast.models.overlay import EMPTY_STATE, Slot

logger = logging.getLogger(__name__)


class OverlayRelay:
    """Stateless apart from its store: one GET or one SET per call, no locking."""

    def __init__(self, store: StateStore, key_prefix: str) -> None:
        self._store = store
        self._key_prefix = key_prefix

    def key_for(self, slot: Slot | str | None) -> str:
        """Store key for a slot; unrecognized identifiers use the default slot's key."""
        resolved = slot if isinstance(slot, Slot) else Slot.parse(slot)
        return f"{self._key_prefix}{resolved.value}"

    def read(self, slot: Slot | str | None) -> dict[str, Any]:
        """Return the stored state, or the hidden/empty state if nothing was written yet."""
        key = self.key_for(slot)
        try:
            state = self._store.get(key)
        except StoreFailure as e:
            logger.error("Overlay read failed for %s: %s", key, e)
            raise StoreUnavailable("Could not read overlay state.") from e
        if state is None:
            return dict(EMPTY_STATE)
        return state

    def write(self, slot: Slot | str | None, candidate: Optional[Any]) -> dict[str, Any]:
        """Store the object verbatim and echo it back. Non-objects are rejected before any store call."""
        if not isinstance(candidate, dict):
            raise ValidationFailed("Invalid state object in request body.")
        # NaN/Infinity would be stored but could never be served back as JSON
        try:
            json.dumps(candidate, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise ValidationFailed("Invalid state object in request body.") from e
        key = self.key_for(slot)
        try:
            self._store.set(key, candidate)
        except StoreFailure as e:
            logger.error("Overlay write failed for %s: %s", key, e)
            raise StoreUnavailable("Could not update overlay state.") from e
        logger.info("Overlay %s updated (visible=%s)", key, candidate.get("visible"))
        return candidate
