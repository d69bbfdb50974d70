from __future__ import annotations

from .dispatcher import ChordDispatcher, DispatchResult, keychords
from .matcher import ChordMatcher, match_all
from .outcome import BaseOutcome, Matched, NoMatch, Outcome, Pending
from .table import Action, Binding, ChordTable

__all__ = [
    "Action",
    "BaseOutcome",
    "Binding",
    "ChordDispatcher",
    "ChordMatcher",
    "ChordTable",
    "DispatchResult",
    "Matched",
    "NoMatch",
    "Outcome",
    "Pending",
    "keychords",
    "match_all",
]
