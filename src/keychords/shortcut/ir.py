from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Optional, Tuple, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Modifier(str, Enum):
    """Platform-agnostic modifier tokens held while a key is pressed."""

    SHIFT = "shift"
    CONTROL = "control"
    OPTION = "option"
    COMMAND = "command"
    FN = "fn"
    CAPS_LOCK = "caps_lock"


KeyCode: TypeAlias = str


class KeySymbol(BaseModel):
    """One key-press: base key plus the modifier mask held with it."""

    model_config = ConfigDict(frozen=True)

    key: KeyCode
    modifiers: FrozenSet[Modifier] = Field(default_factory=frozenset)

    @field_validator("key")
    @classmethod
    def _non_empty_key(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("key is empty")
        return value

    def __str__(self) -> str:
        mods = sorted(m.value for m in self.modifiers)
        return "+".join([*mods, self.key])


Chord: TypeAlias = Tuple[KeySymbol, ...]


class BindingIR(BaseModel):
    """Config-level binding: chord -> action name, resolved later against a registry."""

    chord: Chord
    action: str
    name: Optional[str] = None

    @field_validator("chord")
    @classmethod
    def _non_empty(cls, value: Chord) -> Chord:
        if not value:
            raise ValueError("chord must contain at least one key")
        return value


def format_chord(chord: Chord) -> str:
    return " > ".join(str(k) for k in chord)
