"""
BattleText — battletext/config.py
Renderer configuration: design-variable defaults and TOML overrides.
===================================================================
Version:     0.1
Stack:       Python 3.14 | Pydantic v2 | tomllib
Status:      Production-ready.

Design Variables (change here or override via RendererConfig)
-------------------------------------------------------------
  DEFAULT_PERSPECTIVE    0                        — side narrated as "own"
  DEFAULT_GEN            7                        — latest generation the default store covers
  DEFAULT_PLAYER_NAMES   ("Player 1", "Player 2") — until a `player` event names them

Config file shape (all keys optional):

    [renderer]
    perspective = 1
    gen = 6
    p1 = "Red"
    p2 = "Blue"
    templates_path = "my_templates.toml"
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# ============================================================
# DESIGN VARIABLE DEFAULTS
# ============================================================

DEFAULT_PERSPECTIVE: int = 0
DEFAULT_GEN: int = 7
DEFAULT_PLAYER_NAMES = ("Player 1", "Player 2")


class RendererConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    perspective: int = Field(default=DEFAULT_PERSPECTIVE, ge=0, le=1)
    gen: int = DEFAULT_GEN
    p1: str = DEFAULT_PLAYER_NAMES[0]
    p2: str = DEFAULT_PLAYER_NAMES[1]
    templates_path: Optional[Path] = None  # None = bundled battletext/data/templates.toml


def load_config(path: Path) -> RendererConfig:
    """Loads the [renderer] table of a TOML file."""
    if not path.exists():
        raise FileNotFoundError(f"Renderer config not found: {path}")

    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = RendererConfig(**data.get("renderer", {}))
    if config.templates_path is not None and not config.templates_path.is_absolute():
        config = config.model_copy(
            update={"templates_path": path.parent / config.templates_path}
        )
    return config
