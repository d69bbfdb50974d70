from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from keychords.errors import ConfigurationError
from keychords.shortcut.dsl import as_key_symbol
from keychords.shortcut.ir import Chord, KeySymbol, format_chord

from .outcome import Matched, NoMatch, Outcome, Pending
from .table import ChordTable

logger = logging.getLogger(__name__)


class ChordMatcher:
    """Prefix matcher over key-presses received after the leader key.

    Keys are fed one at a time from the host's event loop. The matcher
    keeps the keys received since the last terminal outcome and reports
    whether they complete a chord, may still complete one, or cannot.
    """

    def __init__(
        self,
        table: ChordTable | Iterable[Sequence[Any]],
        *,
        timeout_ms: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if not isinstance(table, ChordTable):
            table = ChordTable.from_pairs(table)
        if timeout_ms is not None and timeout_ms <= 0:
            raise ConfigurationError(f"timeout_ms must be positive, got {timeout_ms!r}")

        self._table = table
        self._timeout_ms = timeout_ms
        self._clock = clock
        self._state: List[KeySymbol] = []
        self._last_feed: float = 0.0

    @property
    def table(self) -> ChordTable:
        return self._table

    @property
    def timeout_ms(self) -> Optional[int]:
        return self._timeout_ms

    @property
    def clock(self) -> Callable[[], float]:
        return self._clock

    @property
    def pending(self) -> Chord:
        return tuple(self._state)

    @property
    def is_pending(self) -> bool:
        return bool(self._state)

    def feed(self, key: KeySymbol | str) -> Outcome:
        key = as_key_symbol(key)
        self.expire()

        self._state.append(key)
        self._last_feed = self._clock()
        keys = tuple(self._state)

        if not self._table.has_prefix(keys):
            logger.debug("no chord starts with %r", format_chord(keys))
            self.cancel()
            return NoMatch(keys=keys)

        # First complete match wins, even if a longer chord shares the prefix.
        complete = self._table.get(keys)
        if complete is not None:
            self.cancel()
            logger.info("chord %r matched %s", format_chord(keys), complete.label)
            complete.action()
            return Matched(keys=keys, binding=complete)

        logger.debug("chord %r pending", format_chord(keys))
        return Pending(keys=keys)

    def cancel(self) -> None:
        self._state.clear()

    def expire(self) -> bool:
        """Cancel a pending sequence that has been idle longer than the timeout.

        Returns True when something was cancelled. A no-op when no timeout is
        configured.
        """

        if not self._state or self._timeout_ms is None:
            return False
        idle_ms = (self._clock() - self._last_feed) * 1000
        if idle_ms <= self._timeout_ms:
            return False
        logger.debug("chord %r timed out after %.0f ms", format_chord(tuple(self._state)), idle_ms)
        self.cancel()
        return True


def match_all(matcher: ChordMatcher, keys: Iterable[KeySymbol | str]) -> Tuple[Outcome, ...]:
    """Feed every key in order and collect the outcomes."""

    return tuple(matcher.feed(k) for k in keys)
