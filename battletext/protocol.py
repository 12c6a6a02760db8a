"""
BattleText — battletext/protocol.py
Battle protocol: command keys, event envelope and line tokenizer.
================================================================
Version:     0.1
Stack:       Python 3.14 | Pydantic v2
Status:      Production-ready.

Architecture notes
------------------
- One protocol line is one BattleEvent. Events are frozen after parsing.
- Never compare commands against raw strings outside this module.
  CMD_* constants only.
- Commands starting with MINOR_PREFIX ("-") are minor events: effects that
  happen as a consequence of a major action (damage, boosts, statuses...).
- Keyword arguments trail the positional ones as "[key] value". A bare
  "[key]" carries the value "." so it still reads as set.
"""

from __future__ import annotations

import math
import re
from typing import Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

MINOR_PREFIX = "-"


# ============================================================
# CANONICAL COMMAND KEYS
# Add new keys here only, then register a handler in dispatcher.py.
# ============================================================

# Battle flow
CMD_DONE = "done"
CMD_PLAYER = "player"
CMD_GEN = "gen"
CMD_TURN = "turn"
CMD_START = "start"
CMD_UPKEEP = "upkeep"
CMD_WIN = "win"
CMD_TIE = "tie"
CMD_MESSAGE = "message"

# Major actions
CMD_SWITCH = "switch"
CMD_DRAG = "drag"
CMD_SWITCH_OUT = "switchout"
CMD_DETAILS_CHANGE = "detailschange"
CMD_FAINT = "faint"
CMD_SWAP = "swap"
CMD_MOVE = "move"
CMD_CANT = "cant"

# Minor actions: volatile effects, abilities, items, statuses
CMD_TRANSFORM = "-transform"
CMD_FORME_CHANGE = "-formechange"
CMD_VOLATILE_START = "-start"
CMD_VOLATILE_END = "-end"
CMD_ABILITY = "-ability"
CMD_END_ABILITY = "-endability"
CMD_ITEM = "-item"
CMD_END_ITEM = "-enditem"
CMD_STATUS = "-status"
CMD_CURE_STATUS = "-curestatus"
CMD_CURE_TEAM = "-cureteam"
CMD_SINGLE_TURN = "-singleturn"
CMD_SINGLE_MOVE = "-singlemove"

# Minor actions: side and field
CMD_SIDE_START = "-sidestart"
CMD_SIDE_END = "-sideend"
CMD_WEATHER = "-weather"
CMD_FIELD_START = "-fieldstart"
CMD_FIELD_ACTIVATE = "-fieldactivate"
CMD_FIELD_END = "-fieldend"

# Minor actions: miscellaneous
CMD_SET_HP = "-sethp"
CMD_MINOR_MESSAGE = "-message"
CMD_HINT = "-hint"
CMD_ACTIVATE = "-activate"
CMD_PREPARE = "-prepare"
CMD_DAMAGE = "-damage"
CMD_HEAL = "-heal"

# Minor actions: stat stages
CMD_BOOST = "-boost"
CMD_UNBOOST = "-unboost"
CMD_SET_BOOST = "-setboost"
CMD_SWAP_BOOST = "-swapboost"
CMD_COPY_BOOST = "-copyboost"
CMD_CLEAR_BOOST = "-clearboost"
CMD_CLEAR_POSITIVE_BOOST = "-clearpositiveboost"
CMD_CLEAR_NEGATIVE_BOOST = "-clearnegativeboost"
CMD_INVERT_BOOST = "-invertboost"
CMD_CLEAR_ALL_BOOST = "-clearallboost"

# Minor actions: move outcome
CMD_CRIT = "-crit"
CMD_SUPER_EFFECTIVE = "-supereffective"
CMD_RESISTED = "-resisted"
CMD_BLOCK = "-block"
CMD_FAIL = "-fail"
CMD_IMMUNE = "-immune"
CMD_MISS = "-miss"
CMD_CENTER = "-center"
CMD_OHKO = "-ohko"
CMD_COMBINE = "-combine"
CMD_NO_TARGET = "-notarget"
CMD_HIT_COUNT = "-hitcount"
CMD_WAITING = "-waiting"
CMD_ANIM = "-anim"

# Minor actions: mega evolution and Z-power
CMD_MEGA = "-mega"
CMD_PRIMAL = "-primal"
CMD_ZPOWER = "-zpower"
CMD_BURST = "-burst"
CMD_ZBROKEN = "-zbroken"

# Classified for section breaks but never narrated
UNNARRATED_COMMANDS = frozenset({CMD_DONE, CMD_UPKEEP})

# Lines whose remainder is one opaque text argument
_RAW_TEXT_COMMANDS = frozenset({
    "chatmsg", "chatmsg-raw", "raw", "error", "html", "inactive",
    "inactiveoff", "warning", "fieldhtml", "controlshtml", "bigerror",
    "debug", "tier", "challstr", "popup", "",
})


# ============================================================
# EVENT MODEL  (Pydantic v2)
# ============================================================

class BattleEvent(BaseModel):
    """One tokenized protocol line. `args` excludes the command itself."""
    model_config = ConfigDict(frozen=True)

    command: str
    args: Tuple[str, ...] = ()
    kwargs: Dict[str, str] = Field(default_factory=dict)

    @property
    def is_minor(self) -> bool:
        return self.command.startswith(MINOR_PREFIX)

    def arg(self, index: int) -> str:
        """Positional argument or "" when the line is shorter."""
        if 0 <= index < len(self.args):
            return self.args[index]
        return ""

    def kw(self, key: str) -> str:
        return self.kwargs.get(key, "")


# ============================================================
# TOKENIZER
# ============================================================

def parse_line(line: str) -> Optional[BattleEvent]:
    """
    Tokenize one protocol line.

    Returns None for blank lines. Lines that do not start with "|" become an
    event with an empty command carrying the raw text; nothing narrates them.
    """
    line = line.rstrip("\r")
    if not line.strip():
        return None
    if not line.startswith("|"):
        return BattleEvent(command="", args=(line,))
    if line == "|":
        return BattleEvent(command=CMD_DONE)

    index = line.find("|", 1)
    command = line[1:] if index < 0 else line[1:index]
    if command in _RAW_TEXT_COMMANDS:
        rest = "" if index < 0 else line[index + 1:]
        return BattleEvent(command=command, args=(rest,))

    parts = line[1:].split("|")
    kwargs: Dict[str, str] = {}
    while len(parts) > 1:
        last = parts[-1]
        if not last.startswith("["):
            break
        bracket = last.find("]")
        if bracket <= 0:
            break
        kwargs[last[1:bracket]] = last[bracket + 1:].strip() or "."
        parts.pop()

    return BattleEvent(command=parts[0], args=tuple(parts[1:]), kwargs=kwargs)


# ============================================================
# NUMERIC FIELDS
# Malformed numbers are not errors: they read as NaN, which fails every
# comparison and so falls below every threshold.
# ============================================================

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_int(text: Optional[str]) -> Union[int, float]:
    """Leading integer of `text`, or NaN."""
    match = _LEADING_INT.match(text or "")
    if match is None:
        return math.nan
    return int(match.group(1))


def is_nonzero(number: Union[int, float]) -> bool:
    """Truthiness where NaN counts as unset."""
    return not math.isnan(number) and number != 0


_NUMERIC = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)\s*")


def is_numeric(text: str) -> bool:
    return _NUMERIC.fullmatch(text) is not None
