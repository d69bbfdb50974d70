from __future__ import annotations

from .engine import (
    Binding,
    ChordDispatcher,
    ChordMatcher,
    ChordTable,
    DispatchResult,
    Matched,
    NoMatch,
    Outcome,
    Pending,
    keychords,
)
from .errors import ConfigurationError, KeychordsError
from .shortcut import KeySymbol, Modifier, parse_chord, parse_key_symbol
from .shortcut.frontend import ShortcutFrontend

__all__ = [
    "Binding",
    "ChordDispatcher",
    "ChordMatcher",
    "ChordTable",
    "ConfigurationError",
    "DispatchResult",
    "KeySymbol",
    "KeychordsError",
    "Matched",
    "Modifier",
    "NoMatch",
    "Outcome",
    "Pending",
    "ShortcutFrontend",
    "keychords",
    "parse_chord",
    "parse_key_symbol",
]
