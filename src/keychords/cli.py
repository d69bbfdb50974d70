from __future__ import annotations

from pathlib import Path
import argparse
import logging
import sys
from typing import Any, Callable, Dict

from keychords.engine.dispatcher import DispatchResult
from keychords.shortcut.config import Config
from keychords.shortcut.frontend import ShortcutFrontend
from keychords.shortcut.ir import format_chord


def _echo_actions(config: Config) -> Dict[str, Callable[[], Any]]:
    def make(name: str) -> Callable[[], None]:
        return lambda: print(f"  action: {name}")

    return {b.action: make(b.action) for b in config.binding}


def _describe(result: DispatchResult) -> str:
    if result.outcome is None:
        return "passed through"
    state = "consumed" if result.consumed else "passed through"
    return f"{result.outcome} ({state})"


def check(path: str | Path) -> int:
    """Validate a chord config and list its bindings."""

    frontend = ShortcutFrontend()
    cfg = frontend.validate(frontend.load_toml(path))
    actions = _echo_actions(cfg)

    if cfg.leader:
        # Building the dispatcher also parses the leader key.
        table = frontend.build_dispatcher(cfg, actions).matcher.table
        print(f"leader: {cfg.leader}")
    else:
        table = frontend.build_table(cfg, actions)
    for binding in table:
        print(f"{format_chord(binding.chord):<30} -> {binding.label}")
    for short, long in table.shadowed():
        print(f"warning: {format_chord(short.chord)!r} shadows {format_chord(long.chord)!r}")
    print(f"{len(table)} binding(s) ok")
    return 0


def simulate(path: str | Path, keys: list[str]) -> int:
    """Feed ``keys`` through the configured dispatcher and print each outcome."""

    frontend = ShortcutFrontend()
    cfg = frontend.validate(frontend.load_toml(path))
    dispatcher = frontend.build_dispatcher(cfg, _echo_actions(cfg))

    for key in keys:
        result = dispatcher.handle(key)
        print(f"{result.key}: {_describe(result)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check and exercise key-chord configs.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    check_parser = sub.add_parser("check", help="Validate a chord config toml")
    check_parser.add_argument("config", help="Chord config toml path (e.g. chords.toml)")

    sim_parser = sub.add_parser("simulate", help="Feed keys through a chord config")
    sim_parser.add_argument("config", help="Chord config toml path")
    sim_parser.add_argument("keys", nargs="+", help="Keys to feed, leader first (e.g. mod4+a i k)")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "check":
            return check(args.config)
        return simulate(args.config, args.keys)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
