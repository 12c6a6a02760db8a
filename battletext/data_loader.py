"""
BattleText — battletext/data_loader.py
JIT loader for the TOML template store, validated by Pydantic.
=============================================================
Version:     0.1
Stack:       Python 3.14 | Pydantic v2 | tomllib
Status:      Core data validation and loading layer.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Dict, Optional

from pydantic import RootModel, model_validator

from battletext.templates import DEFAULT_NAMESPACE, TemplateStore

logger = logging.getLogger(__name__)

# ================================================================================
# SCHEMAS
# ================================================================================

class TemplateStoreDef(RootModel[Dict[str, Dict[str, str]]]):
    """Top-level TOML tables are namespaces; their keys are categories."""

    @model_validator(mode="after")
    def _require_default(self) -> "TemplateStoreDef":
        if DEFAULT_NAMESPACE not in self.root:
            raise ValueError(f"template store has no [{DEFAULT_NAMESPACE}] table")
        return self

# ================================================================================
# LOADERS & CACHE (JIT)
# ================================================================================

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_TEMPLATES_PATH = DATA_DIR / "templates.toml"

_STORE_CACHE: Dict[Path, TemplateStore] = {}


def load_template_store(path: Path) -> TemplateStore:
    """Reads and validates a template store. Never cached."""
    if not path.exists():
        raise FileNotFoundError(f"Template store not found: {path}")

    with open(path, "rb") as f:
        data = tomllib.load(f)

    definition = TemplateStoreDef(data)
    store = TemplateStore(definition.root)
    logger.debug("Loaded %d template namespaces from %s", len(store), path)
    return store


def get_template_store(path: Optional[Path] = None) -> TemplateStore:
    """JIT loads a template store. Cached globally per resolved path."""
    path = (path or DEFAULT_TEMPLATES_PATH).resolve()
    if path in _STORE_CACHE:
        return _STORE_CACHE[path]

    store = load_template_store(path)
    _STORE_CACHE[path] = store
    return store
