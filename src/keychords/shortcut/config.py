from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, PositiveInt


class AliasConfig(BaseModel):
    key: Dict[str, str] = Field(default_factory=dict)
    mod: Dict[str, str] = Field(default_factory=dict)


class BindingConfig(BaseModel):
    keys: str
    action: str
    name: Optional[str] = None


class Config(BaseModel):
    description: str | None = None
    leader: str | None = None
    timeout_ms: Optional[PositiveInt] = None
    allow_shadowing: bool = False
    alias: AliasConfig = Field(default_factory=AliasConfig)
    binding: List[BindingConfig] = Field(default_factory=list)
