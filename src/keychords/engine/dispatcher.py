from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from keychords.shortcut.dsl import as_key_symbol
from keychords.shortcut.ir import KeySymbol

from .matcher import ChordMatcher
from .outcome import Matched, Outcome, Pending
from .table import ChordTable

logger = logging.getLogger(__name__)


class DispatchResult(BaseModel):
    """What the host should do with one key-press."""

    model_config = ConfigDict(frozen=True)

    key: KeySymbol
    consumed: bool
    outcome: Optional[Outcome] = None


class ChordDispatcher:
    """Leader-key front end for a ChordMatcher.

    While idle, only the leader key is consumed; it switches the dispatcher
    into chord mode. In chord mode every key goes to the matcher until a
    chord matches, a key fails to match, or the sequence is cancelled.
    A key that fails to match is reported as not consumed so the host can
    pass it through.
    """

    def __init__(self, start_key: KeySymbol | str, matcher: ChordMatcher) -> None:
        self._start_key = as_key_symbol(start_key)
        self._matcher = matcher
        self._active = False
        self._last_key_at = 0.0

    @property
    def start_key(self) -> KeySymbol:
        return self._start_key

    @property
    def matcher(self) -> ChordMatcher:
        return self._matcher

    @property
    def active(self) -> bool:
        return self._active

    def handle(self, key: KeySymbol | str) -> DispatchResult:
        key = as_key_symbol(key)
        self.expire()

        if not self._active:
            if key != self._start_key:
                return DispatchResult(key=key, consumed=False)
            logger.debug("leader %s pressed, entering chord mode", key)
            self._matcher.cancel()
            self._active = True
            self._last_key_at = self._matcher.clock()
            return DispatchResult(key=key, consumed=True, outcome=Pending(keys=()))

        try:
            outcome = self._matcher.feed(key)
        finally:
            # A matched action that raised still ends chord mode.
            if not self._matcher.is_pending:
                self._active = False

        if isinstance(outcome, Pending):
            self._last_key_at = self._matcher.clock()
            return DispatchResult(key=key, consumed=True, outcome=outcome)

        return DispatchResult(key=key, consumed=isinstance(outcome, Matched), outcome=outcome)

    def cancel(self) -> None:
        if self._active:
            logger.debug("leaving chord mode")
        self._active = False
        self._matcher.cancel()

    def expire(self) -> bool:
        timeout = self._matcher.timeout_ms
        if not self._active or timeout is None:
            return False
        if (self._matcher.clock() - self._last_key_at) * 1000 <= timeout:
            return False
        logger.debug("chord mode timed out")
        self.cancel()
        return True


def keychords(
    start_key: KeySymbol | str,
    bindings: ChordTable | Iterable[Sequence[Any]],
    *,
    timeout_ms: Optional[int] = None,
    allow_shadowing: bool = False,
    clock: Callable[[], float] = time.monotonic,
) -> ChordDispatcher:
    """Build a dispatcher that runs ``bindings`` after ``start_key`` is pressed."""

    if not isinstance(bindings, ChordTable):
        bindings = ChordTable.from_pairs(bindings, allow_shadowing=allow_shadowing)
    matcher = ChordMatcher(bindings, timeout_ms=timeout_ms, clock=clock)
    return ChordDispatcher(start_key, matcher)
