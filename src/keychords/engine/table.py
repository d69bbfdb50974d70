from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence, Tuple, TypeAlias

import pygtrie
from pydantic import BaseModel, ConfigDict, field_validator

from keychords.errors import ConfigurationError
from keychords.shortcut.dsl import as_chord
from keychords.shortcut.ir import Chord, KeySymbol, format_chord

logger = logging.getLogger(__name__)

Action: TypeAlias = Callable[[], Any]


class Binding(BaseModel):
    """One chord bound to a zero-argument action."""

    model_config = ConfigDict(frozen=True)

    chord: Chord
    action: Action
    name: Optional[str] = None

    @field_validator("chord")
    @classmethod
    def _non_empty(cls, value: Chord) -> Chord:
        if not value:
            raise ValueError("chord must contain at least one key")
        return value

    @property
    def label(self) -> str:
        return self.name or format_chord(self.chord)


class ChordTable:
    """Immutable, validated set of bindings.

    Identical chords are always rejected. A chord that is a strict prefix
    of another one is rejected too unless ``allow_shadowing`` is set, in
    which case the shorter chord fires as soon as it completes and the
    longer chord can never be reached.
    """

    def __init__(self, bindings: Iterable[Binding], *, allow_shadowing: bool = False) -> None:
        self._bindings: Tuple[Binding, ...] = tuple(bindings)
        self._allow_shadowing = allow_shadowing
        self._trie = _build_trie(self._bindings)
        self._shadowed = _find_shadowed(self._bindings, self._trie)

        for short, long in self._shadowed:
            if not allow_shadowing:
                raise ConfigurationError(
                    f"chord {format_chord(short.chord)!r} ({short.label}) is a prefix of "
                    f"{format_chord(long.chord)!r} ({long.label})"
                )
            logger.warning(
                "chord %r (%s) shadows %r (%s)",
                format_chord(short.chord),
                short.label,
                format_chord(long.chord),
                long.label,
            )

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[Sequence[Any]],
        *,
        allow_shadowing: bool = False,
    ) -> "ChordTable":
        """Build a table from ``(chord, action)`` or ``(chord, action, name)`` tuples.

        The chord may be a Chord, a sequence of KeySymbols or key strings, or
        a DSL expression such as ``"i > k"``.
        """

        bindings: List[Binding] = []
        for pair in pairs:
            try:
                chord, action, *rest = pair
                bindings.append(
                    Binding(chord=as_chord(chord), action=action, name=rest[0] if rest else None)
                )
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"invalid binding {pair!r}: {e}") from e
        return cls(bindings, allow_shadowing=allow_shadowing)

    @property
    def allow_shadowing(self) -> bool:
        return self._allow_shadowing

    @property
    def bindings(self) -> Tuple[Binding, ...]:
        return self._bindings

    def shadowed(self) -> List[Tuple[Binding, Binding]]:
        return list(self._shadowed)

    def candidates(self, prefix: Sequence[KeySymbol]) -> List[Binding]:
        """Bindings whose chord starts with ``prefix``."""

        prefix = tuple(prefix)
        if not self._trie.has_node(prefix):
            return []
        return [self._bindings[i] for i in sorted(self._trie.values(prefix))]

    def has_prefix(self, keys: Sequence[KeySymbol]) -> bool:
        """True when at least one chord starts with (or equals) ``keys``."""

        return bool(self._trie.has_node(tuple(keys)))

    def get(self, keys: Sequence[KeySymbol]) -> Optional[Binding]:
        index = self._trie.get(tuple(keys))
        return None if index is None else self._bindings[index]

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[Binding]:
        return iter(self._bindings)


def _build_trie(bindings: Sequence[Binding]) -> pygtrie.Trie:
    # Values are indexes into the binding tuple, so lookups keep config order.
    trie = pygtrie.Trie()
    for index, binding in enumerate(bindings):
        if binding.chord in trie:
            other = bindings[trie[binding.chord]]
            raise ConfigurationError(
                f"duplicate chord {format_chord(binding.chord)!r}: "
                f"bound to both {other.label} and {binding.label}"
            )
        trie[binding.chord] = index
    return trie


def _find_shadowed(bindings: Sequence[Binding], trie: pygtrie.Trie) -> List[Tuple[Binding, Binding]]:
    shadowed: List[Tuple[Binding, Binding]] = []
    for index, binding in enumerate(bindings):
        if not trie.has_subtrie(binding.chord):
            continue
        longer = min(i for i in trie.values(binding.chord) if i != index)
        shadowed.append((binding, bindings[longer]))
    return shadowed
