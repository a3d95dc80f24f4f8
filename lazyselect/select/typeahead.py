"""Typeahead matching and the idle-reset deadline tracker.

Matching is a case-insensitive prefix test over item labels. The tracker
holds no thread or callback: the host polls it and routes expiry back through
the normal action pipeline.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from .catalog import ItemCatalog

logger = logging.getLogger(__name__)

DEFAULT_TYPEAHEAD_TIMEOUT_SECONDS = 0.5


def append_key(keys_so_far: str, key: str | None) -> str:
    """Append one printable character (lower-cased) to the typeahead buffer."""
    if not is_typeahead_key(key):
        return keys_so_far
    return keys_so_far + key.lower()


def is_typeahead_key(key: str | None) -> bool:
    """Return whether ``key`` is a single printable character."""
    return isinstance(key, str) and len(key) == 1 and key.isprintable()


def _search_prefix(keys_so_far: str) -> str:
    """Collapse a run of one repeated character to that character.

    Pressing the same letter repeatedly cycles through items starting with it.
    """
    if len(keys_so_far) > 1 and len(set(keys_so_far)) == 1:
        return keys_so_far[0]
    return keys_so_far


def find_match_index(catalog: ItemCatalog, keys_so_far: str, start_index: int) -> int:
    """Return the first index after ``start_index`` whose label starts with the buffer.

    The search wraps around the whole catalog, ending back at ``start_index``.
    Returns ``-1`` when nothing matches or the buffer is empty.
    """
    prefix = _search_prefix(keys_so_far.lower())
    count = len(catalog)
    if not prefix or count == 0:
        return -1
    for offset in range(1, count + 1):
        index = (start_index + offset) % count
        if catalog.label(index).lower().startswith(prefix):
            return index
    return -1


class TypeaheadTracker:
    """Cancellable idle deadline for clearing ``keys_so_far``.

    Each ``arm`` bumps a generation counter; an expiry carrying an older
    generation is stale and must be ignored.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TYPEAHEAD_TIMEOUT_SECONDS,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.timeout = max(0.0, float(timeout))
        self._clock = clock if clock is not None else time.monotonic
        self._generation = 0
        self._deadline: float | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def deadline(self) -> float | None:
        """Monotonic time at which the buffer expires, or ``None`` when idle."""
        return self._deadline

    @property
    def armed(self) -> bool:
        return self._deadline is not None

    def now(self) -> float:
        return self._clock()

    def arm(self, now: float | None = None) -> int:
        """Restart the idle window and return the new generation token."""
        current = self.now() if now is None else now
        self._generation += 1
        self._deadline = current + self.timeout
        return self._generation

    def cancel(self) -> None:
        """Drop the pending deadline; later expiries become stale."""
        if self._deadline is not None:
            logger.debug("typeahead timer cancelled (generation %d)", self._generation)
        self._generation += 1
        self._deadline = None

    def expired(self, now: float | None = None) -> bool:
        if self._deadline is None:
            return False
        current = self.now() if now is None else now
        return current >= self._deadline

    def seconds_until_expiry(self, now: float | None = None) -> float | None:
        """Return remaining idle time (never negative), or ``None`` when idle."""
        if self._deadline is None:
            return None
        current = self.now() if now is None else now
        return max(0.0, self._deadline - current)

    def is_current(self, generation: int | None) -> bool:
        """Return whether ``generation`` is the latest arm (not re-armed or cancelled since)."""
        return generation == self._generation

    def consume(self, now: float | None = None) -> int | None:
        """Return the generation of an expired deadline and disarm, else ``None``.

        The deadline is disarmed but the generation is kept so the returned
        token is still accepted by the reset transition.
        """
        if not self.expired(now):
            return None
        self._deadline = None
        return self._generation
