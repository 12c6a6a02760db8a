"""
BattleText — battletext/effects.py
Effect-name normalization: display names and canonical ids.
===========================================================
Version:     0.1
Stack:       Python 3.14 | stdlib re
Status:      Leaf module. Pure functions, never raise.

An effect reference is whatever the protocol puts in an effect slot:
"item: Leftovers", "ability: Levitate", "move: Protect" or a bare name such
as "Stealth Rock". The display form strips the category tag and is safe to
interpolate. The canonical id is only ever used as a table key.
"""

from __future__ import annotations

import re
from typing import Optional

ITEM_PREFIX = "item:"
MOVE_PREFIX = "move:"
ABILITY_PREFIX = "ability:"

EFFECT_PREFIXES = (ITEM_PREFIX, MOVE_PREFIX, ABILITY_PREFIX)

_NON_ID_CHARS = re.compile(r"[^a-z0-9]+")


def to_id(text: Optional[str]) -> str:
    """Lowercase and drop everything outside a-z / 0-9."""
    if not text:
        return ""
    return _NON_ID_CHARS.sub("", text.lower())


def effect_name(effect: Optional[str]) -> str:
    """Display form: category tag stripped, whitespace trimmed."""
    if not effect:
        return ""
    for prefix in EFFECT_PREFIXES:
        if effect.startswith(prefix):
            effect = effect[len(prefix):]
            break
    return effect.strip()


def effect_id(effect: Optional[str]) -> str:
    return to_id(effect_name(effect))


def is_ability(effect: Optional[str]) -> bool:
    return bool(effect) and effect.startswith(ABILITY_PREFIX)


def is_item(effect: Optional[str]) -> bool:
    return bool(effect) and effect.startswith(ITEM_PREFIX)
