from __future__ import annotations

from .config import AliasConfig, BindingConfig, Config
from .dsl import as_chord, as_key_symbol, parse_binding, parse_chord, parse_key_symbol
from .ir import BindingIR, Chord, KeyCode, KeySymbol, Modifier, format_chord

__all__ = [
    "AliasConfig",
    "BindingConfig",
    "BindingIR",
    "Chord",
    "Config",
    "KeyCode",
    "KeySymbol",
    "Modifier",
    "as_chord",
    "as_key_symbol",
    "format_chord",
    "parse_binding",
    "parse_chord",
    "parse_key_symbol",
]
