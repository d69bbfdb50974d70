from __future__ import annotations

from typing import Callable

import pytest

from keychords.engine.matcher import ChordMatcher, match_all
from keychords.engine.outcome import Matched, NoMatch, Pending
from keychords.engine.table import ChordTable
from keychords.errors import ConfigurationError
from keychords.shortcut.dsl import parse_chord, parse_key_symbol
from keychords.shortcut.ir import KeySymbol


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def action(self, name: str) -> Callable[[], None]:
        return lambda: self.calls.append(name)


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _k(expr: str) -> KeySymbol:
    return parse_key_symbol(expr)


def _xmonad_table(rec: _Recorder) -> ChordTable:
    return ChordTable.from_pairs(
        [
            ("i > k", rec.action("A1")),
            ("i > w", rec.action("A2")),
            ("j > j", rec.action("A3")),
        ]
    )


def test_matcher_end_to_end() -> None:
    rec = _Recorder()
    matcher = ChordMatcher(_xmonad_table(rec))

    assert isinstance(matcher.feed("i"), Pending)
    out = matcher.feed("k")
    assert isinstance(out, Matched)
    assert out.keys == parse_chord("i > k")
    assert rec.calls == ["A1"]
    assert not matcher.is_pending

    assert isinstance(matcher.feed("j"), Pending)
    assert isinstance(matcher.feed("j"), Matched)
    assert rec.calls == ["A1", "A3"]

    out = matcher.feed("x")
    assert isinstance(out, NoMatch)
    assert out.keys == (_k("x"),)
    assert rec.calls == ["A1", "A3"]


def test_matcher_modifier_is_part_of_key() -> None:
    rec = _Recorder()
    matcher = ChordMatcher([("s > a > shift+t", rec.action("A4"))])

    outcomes = match_all(matcher, ["s", "a", "shift+t"])
    assert [type(o) for o in outcomes] == [Pending, Pending, Matched]
    assert rec.calls == ["A4"]

    outcomes = match_all(matcher, ["s", "a", "t"])
    assert [type(o) for o in outcomes] == [Pending, Pending, NoMatch]
    assert rec.calls == ["A4"]
    assert matcher.pending == ()


def test_matcher_matched_exposes_action() -> None:
    def act() -> None:
        pass

    matcher = ChordMatcher([("i > k", act, "focus up")])
    matcher.feed("i")
    out = matcher.feed("k")

    assert isinstance(out, Matched)
    assert out.action is act
    assert out.binding.label == "focus up"


def test_matcher_shorter_chord_fires_without_waiting() -> None:
    rec = _Recorder()
    matcher = ChordMatcher(
        ChordTable.from_pairs(
            [("i > k", rec.action("short")), ("i > w > v", rec.action("long"))]
        )
    )

    assert isinstance(matcher.feed("i"), Pending)
    assert isinstance(matcher.feed("k"), Matched)
    assert rec.calls == ["short"]

    match_all(matcher, ["i", "w", "v"])
    assert rec.calls == ["short", "long"]


def test_matcher_shadowing_first_complete_wins() -> None:
    rec = _Recorder()
    table = ChordTable.from_pairs(
        [("i > k", rec.action("short")), ("i > k > x", rec.action("long"))],
        allow_shadowing=True,
    )
    matcher = ChordMatcher(table)

    matcher.feed("i")
    out = matcher.feed("k")
    assert isinstance(out, Matched)
    assert rec.calls == ["short"]

    # The long chord is unreachable; "x" starts a fresh attempt.
    assert isinstance(matcher.feed("x"), NoMatch)
    assert rec.calls == ["short"]


def test_matcher_no_match_on_first_key_resets() -> None:
    rec = _Recorder()
    matcher = ChordMatcher(_xmonad_table(rec))

    out = matcher.feed("z")
    assert isinstance(out, NoMatch)
    assert matcher.pending == ()

    out = matcher.feed("i")
    assert isinstance(out, Pending)
    assert out.keys == (_k("i"),)


def test_matcher_no_match_mid_chord_resets() -> None:
    rec = _Recorder()
    matcher = ChordMatcher(_xmonad_table(rec))

    matcher.feed("i")
    out = matcher.feed("j")
    assert isinstance(out, NoMatch)
    assert out.keys == parse_chord("i > j")

    match_all(matcher, ["j", "j"])
    assert rec.calls == ["A3"]


def test_matcher_repeat_match() -> None:
    rec = _Recorder()
    matcher = ChordMatcher(_xmonad_table(rec))

    match_all(matcher, ["i", "k"])
    match_all(matcher, ["i", "k"])
    assert rec.calls == ["A1", "A1"]


def test_matcher_cancel_while_pending() -> None:
    rec = _Recorder()
    matcher = ChordMatcher(_xmonad_table(rec))

    matcher.feed("i")
    assert matcher.is_pending
    matcher.cancel()
    assert not matcher.is_pending

    out = matcher.feed("j")
    assert isinstance(out, Pending)
    assert out.keys == (_k("j"),)
    assert isinstance(matcher.feed("j"), Matched)
    assert rec.calls == ["A3"]


def test_matcher_cancel_when_idle_is_harmless() -> None:
    rec = _Recorder()
    matcher = ChordMatcher(_xmonad_table(rec))
    matcher.cancel()
    match_all(matcher, ["i", "w"])
    assert rec.calls == ["A2"]


def test_matcher_timeout_drops_stale_prefix() -> None:
    rec = _Recorder()
    clock = _Clock()
    matcher = ChordMatcher(_xmonad_table(rec), timeout_ms=500, clock=clock)

    matcher.feed("i")
    clock.now = 1.0
    out = matcher.feed("k")
    assert isinstance(out, NoMatch)
    assert out.keys == (_k("k"),)
    assert rec.calls == []

    matcher.feed("i")
    clock.now = 1.2
    assert isinstance(matcher.feed("k"), Matched)
    assert rec.calls == ["A1"]


def test_matcher_expire() -> None:
    clock = _Clock()
    matcher = ChordMatcher(_xmonad_table(_Recorder()), timeout_ms=500, clock=clock)

    assert matcher.expire() is False
    matcher.feed("i")
    clock.now = 0.4
    assert matcher.expire() is False
    assert matcher.is_pending
    clock.now = 0.6
    assert matcher.expire() is True
    assert not matcher.is_pending


def test_matcher_without_timeout_never_expires() -> None:
    clock = _Clock()
    matcher = ChordMatcher(_xmonad_table(_Recorder()), clock=clock)

    matcher.feed("i")
    clock.now = 3600.0
    assert matcher.expire() is False
    assert isinstance(matcher.feed("k"), Matched)


def test_matcher_rejects_non_positive_timeout() -> None:
    with pytest.raises(ConfigurationError):
        ChordMatcher(_xmonad_table(_Recorder()), timeout_ms=0)


def test_matcher_action_error_propagates_after_reset() -> None:
    def boom() -> None:
        raise RuntimeError("boom")

    matcher = ChordMatcher([("i > k", boom)])
    matcher.feed("i")
    with pytest.raises(RuntimeError):
        matcher.feed("k")
    assert not matcher.is_pending
