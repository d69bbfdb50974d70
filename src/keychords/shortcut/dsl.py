from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from .ir import BindingIR, Chord, KeySymbol, Modifier


_MODIFIER_TOKENS = {m.value for m in Modifier}

# Spellings borrowed from X11/xmonad and other desktops.
_BUILTIN_MOD_ALIASES = {
    "s": "shift",
    "c": "control",
    "ctrl": "control",
    "alt": "option",
    "meta": "option",
    "m1": "option",
    "cmd": "command",
    "super": "command",
    "mod4": "command",
    "win": "command",
}


def _normalize_aliases(aliases: Mapping[str, str] | None) -> dict[str, str]:
    if not aliases:
        return {}
    return {str(k).strip().lower(): str(v).strip().lower() for k, v in aliases.items()}


def _tokenize(expr: str, *, step_sep: str, mod_sep: str) -> list[list[str]]:
    expr = expr.strip()
    if not expr:
        raise ValueError("expression is empty")

    steps: list[list[str]] = []
    for raw_step in expr.split(step_sep):
        raw_step = raw_step.strip()
        if not raw_step:
            raise ValueError(f"invalid expression (empty step): {expr!r}")
        tokens = [t.strip() for t in raw_step.split(mod_sep)]
        if any(not t for t in tokens):
            raise ValueError(f"invalid expression (empty token): {expr!r}")
        steps.append(tokens)
    return steps


def _apply_alias(token: str, *, alias_key: Mapping[str, str], alias_mod: Mapping[str, str]) -> str:
    token = token.strip().lower()
    if token in alias_mod:
        token = alias_mod[token]
    if token in alias_key:
        token = alias_key[token]
    return token


def _split_mods_and_key(tokens: Sequence[str]) -> KeySymbol:
    *mod_tokens, key = tokens
    modifiers: set[Modifier] = set()
    for token in mod_tokens:
        token = _BUILTIN_MOD_ALIASES.get(token, token)
        if token not in _MODIFIER_TOKENS:
            raise ValueError(f"unknown modifier: {token!r}")
        modifiers.add(Modifier(token))
    if key in _MODIFIER_TOKENS:
        raise ValueError(f"key step has no base key: {'+'.join(tokens)!r}")
    return KeySymbol(key=key, modifiers=frozenset(modifiers))


def parse_key_symbol(
    expr: str,
    *,
    alias_key: Mapping[str, str] | None = None,
    alias_mod: Mapping[str, str] | None = None,
    mod_sep: str = "+",
) -> KeySymbol:
    """Parse a single key expression such as ``shift+t`` into a KeySymbol."""

    alias_key = _normalize_aliases(alias_key)
    alias_mod = _normalize_aliases(alias_mod)

    steps = _tokenize(expr, step_sep=">", mod_sep=mod_sep)
    if len(steps) != 1:
        raise ValueError(f"expected a single key, got a sequence: {expr!r}")
    tokens = [_apply_alias(t, alias_key=alias_key, alias_mod=alias_mod) for t in steps[0]]
    return _split_mods_and_key(tokens)


def parse_chord(
    expr: str,
    *,
    alias_key: Mapping[str, str] | None = None,
    alias_mod: Mapping[str, str] | None = None,
    step_sep: str = ">",
    mod_sep: str = "+",
) -> Chord:
    """Parse a chord expression such as ``s > a > shift+t`` into a Chord."""

    alias_key = _normalize_aliases(alias_key)
    alias_mod = _normalize_aliases(alias_mod)

    chord: list[KeySymbol] = []
    for tokens in _tokenize(expr, step_sep=step_sep, mod_sep=mod_sep):
        normalized = [_apply_alias(t, alias_key=alias_key, alias_mod=alias_mod) for t in tokens]
        chord.append(_split_mods_and_key(normalized))
    return tuple(chord)


def as_key_symbol(value: KeySymbol | str) -> KeySymbol:
    if isinstance(value, KeySymbol):
        return value
    if not isinstance(value, str):
        raise TypeError(f"expected a KeySymbol or key string, got {value!r}")
    return parse_key_symbol(value)


def as_chord(value: Chord | KeySymbol | Iterable[KeySymbol | str] | str) -> Chord:
    if isinstance(value, str):
        return parse_chord(value)
    if isinstance(value, KeySymbol):
        return (value,)
    return tuple(as_key_symbol(k) for k in value)


def parse_binding(
    keys: str,
    action: str,
    *,
    name: str | None = None,
    alias_key: Mapping[str, str] | None = None,
    alias_mod: Mapping[str, str] | None = None,
) -> BindingIR:
    """Parse a (keys, action) pair into a BindingIR."""

    chord = parse_chord(keys, alias_key=alias_key, alias_mod=alias_mod)
    return BindingIR(chord=chord, action=action, name=name)
