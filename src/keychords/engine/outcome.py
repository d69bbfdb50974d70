from __future__ import annotations

from typing import Any, Callable, Union

from pydantic import BaseModel, ConfigDict

from keychords.shortcut.ir import Chord, format_chord

from .table import Binding


class BaseOutcome(BaseModel):
    """Result of feeding one key into a ChordMatcher."""

    model_config = ConfigDict(frozen=True)

    keys: Chord

    def __str__(self) -> str:
        return f"{type(self).__name__}({format_chord(self.keys)})"


class NoMatch(BaseOutcome):
    """No configured chord starts with the keys fed; state was reset."""


class Pending(BaseOutcome):
    """At least one chord may still complete; state is kept."""


class Matched(BaseOutcome):
    """A chord completed and its action has been invoked."""

    binding: Binding

    @property
    def action(self) -> Callable[[], Any]:
        return self.binding.action

    def __str__(self) -> str:
        return f"Matched({self.binding.label})"


Outcome = Union[NoMatch, Pending, Matched]
