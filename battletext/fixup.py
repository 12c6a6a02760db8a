"""
BattleText — battletext/fixup.py
Lowercase-prefix fixup: capitalize pronoun-like expansions opening a line.
========================================================================
Version:     0.1
Stack:       Python 3.14 | stdlib re
Status:      Production-ready.

Templates such as "the opposing [NICKNAME]" or "your team" start lowercase
so they read naturally mid-sentence. When one of them opens a line (or an
indented, parenthesized or bracketed line) its first letter is uppercased.

The pattern is derived from the store on first use and cached for the life
of the owning renderer. A store whose templates already start uppercase
yields no pattern, and the fixup stays a no-op.
"""

from __future__ import annotations

import re
from typing import List, Optional

from battletext.templates import TemplateStore

# Default-namespace categories whose expansions can open a line
FIXUP_CATEGORIES = ("pokemon", "opposingPokemon", "team", "opposingTeam")

_LINE_START = r"((?:^|\n)(?:  |  \(|  \[)?)"


def lowercase_prefixes(store: TemplateStore) -> List[str]:
    prefixes = []
    for category in FIXUP_CATEGORIES:
        template = store.default_text(category)
        first = template[:1]
        if first == first.upper():
            continue
        bracket = template.find("[")
        prefixes.append(template[:bracket] if bracket >= 0 else template)
    return [prefix for prefix in prefixes if prefix]


class LowercaseFixup:
    def __init__(self, store: TemplateStore) -> None:
        self._store = store
        self._computed = False
        self._pattern: Optional[re.Pattern] = None

    @property
    def pattern(self) -> Optional[re.Pattern]:
        """Computed on first access, then reused."""
        if not self._computed:
            prefixes = lowercase_prefixes(self._store)
            if prefixes:
                alternatives = "|".join(re.escape(prefix) for prefix in prefixes)
                self._pattern = re.compile(f"{_LINE_START}({alternatives})")
            self._computed = True
        return self._pattern

    def apply(self, text: str) -> str:
        pattern = self.pattern
        if pattern is None:
            return text
        return pattern.sub(
            lambda m: m.group(1) + m.group(2)[:1].upper() + m.group(2)[1:],
            text,
        )
