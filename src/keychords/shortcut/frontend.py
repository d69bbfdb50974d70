from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping
import tomllib

from pydantic import ValidationError

from keychords.engine.dispatcher import ChordDispatcher
from keychords.engine.matcher import ChordMatcher
from keychords.engine.table import Binding, ChordTable
from keychords.errors import ConfigurationError

from .config import Config
from .dsl import parse_binding, parse_key_symbol
from .ir import BindingIR

logger = logging.getLogger(__name__)


class ShortcutFrontend:
    """Parse chord config (TOML) into bindings and runnable dispatchers."""

    def load_toml(self, path: str | Path) -> Dict[str, Any]:
        """Load a TOML config file into a dict."""

        path = Path(path)
        return tomllib.loads(path.read_text(encoding="utf-8"))

    def validate(self, config: Mapping[str, Any] | Config) -> Config:
        if isinstance(config, Config):
            return config
        try:
            return Config.model_validate(config)
        except ValidationError as e:
            raise ConfigurationError(f"invalid chord config: {e}") from e

    def parse_config(self, config: Mapping[str, Any] | Config) -> List[BindingIR]:
        cfg = self.validate(config)

        alias_key = cfg.alias.key
        alias_mod = cfg.alias.mod

        bindings: List[BindingIR] = []
        for binding in cfg.binding:
            try:
                parsed = parse_binding(
                    binding.keys,
                    binding.action,
                    name=binding.name,
                    alias_key=alias_key,
                    alias_mod=alias_mod,
                )
            except ValueError as e:
                raise ConfigurationError(f"binding {binding.keys!r}: {e}") from e
            bindings.append(parsed)

        logger.debug("parsed %d binding(s)", len(bindings))
        return bindings

    def build_table(
        self,
        config: Mapping[str, Any] | Config,
        actions: Mapping[str, Callable[[], Any]],
    ) -> ChordTable:
        """Resolve action names against ``actions`` and build a validated table."""

        cfg = self.validate(config)

        bindings: List[Binding] = []
        for ir in self.parse_config(cfg):
            action = actions.get(ir.action)
            if action is None:
                raise ConfigurationError(f"unknown action {ir.action!r}")
            bindings.append(Binding(chord=ir.chord, action=action, name=ir.name or ir.action))

        return ChordTable(bindings, allow_shadowing=cfg.allow_shadowing)

    def build_dispatcher(
        self,
        config: Mapping[str, Any] | Config,
        actions: Mapping[str, Callable[[], Any]],
    ) -> ChordDispatcher:
        cfg = self.validate(config)
        if cfg.leader is None:
            raise ConfigurationError("config has no leader key")

        try:
            leader = parse_key_symbol(cfg.leader, alias_key=cfg.alias.key, alias_mod=cfg.alias.mod)
        except ValueError as e:
            raise ConfigurationError(f"leader {cfg.leader!r}: {e}") from e

        table = self.build_table(cfg, actions)
        return ChordDispatcher(leader, ChordMatcher(table, timeout_ms=cfg.timeout_ms))
