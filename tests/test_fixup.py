import pytest

from battletext.data_loader import get_template_store
from battletext.fixup import LowercaseFixup, lowercase_prefixes
from battletext.templates import TemplateStore

@pytest.fixture
def fixup():
    return LowercaseFixup(get_template_store())

def test_prefixes_from_default_store():
    prefixes = lowercase_prefixes(get_template_store())
    assert prefixes == ["the opposing ", "your team", "the opposing team"]

def test_line_start(fixup):
    assert fixup.apply("the opposing Eevee fainted!\n") == "The opposing Eevee fainted!\n"

def test_indented_line(fixup):
    assert fixup.apply("  the opposing Eevee was hurt!\n") == "  The opposing Eevee was hurt!\n"
    assert fixup.apply("  your team's Tailwind petered out!\n") == "  Your team's Tailwind petered out!\n"

def test_parenthesized_and_bracketed(fixup):
    assert fixup.apply("  (the opposing Eevee was hurt!)\n") == "  (The opposing Eevee was hurt!)\n"
    assert fixup.apply("  [the opposing Eevee's Levitate]\n") == "  [The opposing Eevee's Levitate]\n"

def test_mid_line_untouched(fixup):
    text = "  It doesn't affect the opposing Eevee...\n"
    assert fixup.apply(text) == text

def test_every_line_fixed(fixup):
    text = "  [the opposing Gengar's Levitate]\n  the opposing Gengar makes Ground moves miss!\n"
    assert fixup.apply(text) == (
        "  [The opposing Gengar's Levitate]\n  The opposing Gengar makes Ground moves miss!\n"
    )

def test_idempotent(fixup):
    text = "the opposing Eevee fainted!\n  (your team was hurt!)\n"
    once = fixup.apply(text)
    assert fixup.apply(once) == once

def test_pattern_cached(fixup):
    assert fixup.pattern is fixup.pattern

def test_uppercase_store_is_noop():
    store = TemplateStore({"default": {
        "pokemon": "[NICKNAME]",
        "opposingPokemon": "Foe [NICKNAME]",
        "team": "Your team",
        "opposingTeam": "Foe team",
    }})
    fixup = LowercaseFixup(store)
    assert fixup.pattern is None
    assert fixup.apply("the opposing Eevee fainted!") == "the opposing Eevee fainted!"
