import math

import pytest
from pydantic import ValidationError

from battletext.protocol import (
    BattleEvent,
    CMD_DAMAGE,
    CMD_DONE,
    CMD_MOVE,
    is_nonzero,
    is_numeric,
    parse_int,
    parse_line,
)

def test_blank_lines_are_skipped():
    assert parse_line("") is None
    assert parse_line("   ") is None
    assert parse_line("\r") is None

def test_positional_args():
    event = parse_line("|move|p1a: Pikachu|Thunderbolt|p2a: Eevee")
    assert event.command == CMD_MOVE
    assert event.args == ("p1a: Pikachu", "Thunderbolt", "p2a: Eevee")
    assert event.arg(0) == "p1a: Pikachu"
    assert event.arg(2) == "p2a: Eevee"
    assert event.arg(3) == ""
    assert not event.is_minor

def test_keyword_args_trail_positionals():
    event = parse_line("|-damage|p2a: Eevee|50/100|[from] item: Life Orb")
    assert event.command == CMD_DAMAGE
    assert event.is_minor
    assert event.args == ("p2a: Eevee", "50/100")
    assert event.kw("from") == "item: Life Orb"
    assert event.kw("of") == ""

def test_bare_keyword_reads_as_set():
    event = parse_line("|move|p1a: Pikachu|Fly|p2a: Eevee|[still]")
    assert event.kw("still") == "."
    assert event.args == ("p1a: Pikachu", "Fly", "p2a: Eevee")

def test_multiple_keywords():
    event = parse_line("|-boost|p1a: Pikachu|atk|1|[zeffect]|[multiple]")
    assert event.kw("zeffect") == "."
    assert event.kw("multiple") == "."
    assert event.args == ("p1a: Pikachu", "atk", "1")

def test_done_line():
    event = parse_line("|")
    assert event.command == CMD_DONE
    assert event.args == ()

def test_plain_text_line():
    event = parse_line("Battle log exported")
    assert event.command == ""
    assert event.arg(0) == "Battle log exported"

def test_raw_text_commands_keep_pipes():
    event = parse_line("|raw|<b>a|b</b>")
    assert event.command == "raw"
    assert event.args == ("<b>a|b</b>",)

def test_carriage_return_stripped():
    event = parse_line("|turn|2\r")
    assert event.args == ("2",)

def test_event_is_frozen():
    event = BattleEvent(command="turn", args=("1",))
    with pytest.raises(ValidationError):
        event.command = "win"

def test_parse_int():
    assert parse_int("3") == 3
    assert parse_int("-1") == -1
    assert parse_int("12abc") == 12
    assert math.isnan(parse_int("x"))
    assert math.isnan(parse_int(""))
    assert math.isnan(parse_int(None))

def test_is_nonzero():
    assert is_nonzero(2)
    assert is_nonzero(-1)
    assert not is_nonzero(0)
    assert not is_nonzero(math.nan)

def test_is_numeric():
    assert is_numeric("1")
    assert is_numeric(" 2.5 ")
    assert not is_numeric("p1a: Pikachu")
    assert not is_numeric("")
