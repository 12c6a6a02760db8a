"""
BattleText — battletext/sections.py
Section classifier: narrative phases and paragraph breaks.
=========================================================
Version:     0.1
Stack:       Python 3.14 | enum
Status:      Production-ready.

Architecture notes
------------------
- Every event maps to one phase or to None (does not affect the phase).
- A break (blank line) depends only on the previous phase and the new one:
      break              after anything but break
      preMajor / major   after postMajor or major
      postMajor          never
- The tracker has no terminal state; it runs for the renderer's lifetime.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple, Union

from battletext.effects import effect_id
from battletext.protocol import (
    BattleEvent,
    CMD_ACTIVATE,
    CMD_CANT,
    CMD_CURE_STATUS,
    CMD_DAMAGE,
    CMD_DONE,
    CMD_DRAG,
    CMD_FAINT,
    CMD_MEGA,
    CMD_MOVE,
    CMD_START,
    CMD_SWITCH,
    CMD_SWITCH_OUT,
    CMD_TURN,
    CMD_UPKEEP,
    CMD_VOLATILE_START,
    CMD_ZPOWER,
)


class LineSection(Enum):
    BREAK = "break"
    PRE_MAJOR = "preMajor"
    MAJOR = "major"
    POST_MAJOR = "postMajor"


# ============================================================
# CLASSIFICATION TABLES
# ============================================================

_FIXED_SECTIONS: Dict[str, LineSection] = {
    CMD_DONE:       LineSection.BREAK,
    CMD_TURN:       LineSection.BREAK,

    CMD_MOVE:       LineSection.MAJOR,
    CMD_CANT:       LineSection.MAJOR,
    CMD_SWITCH:     LineSection.MAJOR,
    CMD_DRAG:       LineSection.MAJOR,
    CMD_UPKEEP:     LineSection.MAJOR,
    CMD_START:      LineSection.MAJOR,
    CMD_MEGA:       LineSection.MAJOR,

    CMD_SWITCH_OUT: LineSection.PRE_MAJOR,
    CMD_FAINT:      LineSection.PRE_MAJOR,

    CMD_ZPOWER:     LineSection.POST_MAJOR,
}

# command -> (where the effect is read, effect id -> phase); anything else
# in that command is postMajor. "from" is the [from] keyword, an int is a
# positional argument index.
_EFFECT_SECTIONS: Dict[str, Tuple[Union[str, int], Dict[str, LineSection]]] = {
    CMD_DAMAGE:         ("from", {"confusion": LineSection.MAJOR}),
    CMD_CURE_STATUS:    ("from", {"naturalcure": LineSection.PRE_MAJOR}),
    CMD_VOLATILE_START: ("from", {"protean": LineSection.PRE_MAJOR}),
    CMD_ACTIVATE:       (1, {
        "confusion": LineSection.PRE_MAJOR,
        "attract": LineSection.PRE_MAJOR,
    }),
}


def classify(event: BattleEvent) -> Optional[LineSection]:
    command = event.command
    if command in _FIXED_SECTIONS:
        return _FIXED_SECTIONS[command]
    if command in _EFFECT_SECTIONS:
        slot, overrides = _EFFECT_SECTIONS[command]
        effect = event.arg(slot) if isinstance(slot, int) else event.kw(slot)
        return overrides.get(effect_id(effect), LineSection.POST_MAJOR)
    if event.is_minor:
        return LineSection.POST_MAJOR
    return None


# ============================================================
# STATE MACHINE
# ============================================================

class SectionTracker:
    """Holds the phase of the last classified event."""

    def __init__(self) -> None:
        self.current = LineSection.BREAK

    def section_break(self, event: BattleEvent) -> bool:
        """Advance the phase; True when a blank line must precede the event."""
        previous = self.current
        section = classify(event)
        if section is None:
            return False
        self.current = section

        if section is LineSection.BREAK:
            return previous is not LineSection.BREAK
        if section in (LineSection.PRE_MAJOR, LineSection.MAJOR):
            return previous in (LineSection.POST_MAJOR, LineSection.MAJOR)
        return False
