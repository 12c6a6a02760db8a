"""
BattleText — battletext/substitution.py
Placeholder substitution for resolved templates.
"""

from __future__ import annotations

import re
from typing import Optional

# Placeholders the default store uses. Anything else in brackets is left alone.
PLACEHOLDERS = frozenset({
    "POKEMON", "NICKNAME", "FULLNAME", "TRAINER", "EFFECT", "NUMBER",
    "ITEM", "SOURCE", "TARGET", "TYPE", "STAT", "SPECIES", "MOVE", "TEAM",
    "ABILITY", "PERCENTAGE",
})

_TOKEN = re.compile(r"\[([A-Z]+)\]")


def substitute(template: str, **values: Optional[str]) -> str:
    """
    Replace the first occurrence of each named token in one pass.

    substitute("[POKEMON] used [MOVE]!", POKEMON="Pikachu", MOVE="Surf")

    Inserted text is never rescanned by the same call, and a token that
    occurs twice needs two calls. None inserts "".
    """
    if not values:
        return template
    unknown = values.keys() - PLACEHOLDERS
    if unknown:
        raise ValueError(f"Unknown placeholders: {sorted(unknown)}")
    pending = dict(values)

    def _replace(match: re.Match) -> str:
        name = match.group(1)
        if name not in pending:
            return match.group(0)
        return pending.pop(name) or ""

    return _TOKEN.sub(_replace, template)
