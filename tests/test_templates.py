import pytest

from battletext.templates import (
    NODEFAULT,
    OWN,
    SUPPRESSED,
    CategoryRedirect,
    NamespaceRedirect,
    TemplateResolver,
    TemplateStore,
    TemplateText,
    parse_entry,
)

@pytest.fixture
def store():
    return TemplateStore({
        "default": {
            "start": "([EFFECT] started!)",
            "damage": "[POKEMON] was hurt!",
            "switchIn": "[TRAINER] sent out [FULLNAME]!",
            "switchInOwn": "Go! [FULLNAME]!",
            "faint": "[POKEMON] fainted!",
            "heal": ".damage",
        },
        "lifeorb": {"damage": "[POKEMON] lost some of its HP!"},
        "leftovers": {"heal": "[POKEMON] restored a little HP!"},
        "blacksludge": {"heal": "#leftovers"},
        "sitrusberry": {"end": ".activate", "activate": "[POKEMON] ate its berry!"},
        "intimidate": {"start": ""},
        "a": {"end": "#b"},
        "b": {"end": ".fade"},
    })

@pytest.fixture
def resolver(store):
    return TemplateResolver(store)

def test_parse_entry_shapes():
    assert parse_entry("text") == TemplateText("text")
    assert parse_entry(".activate") == CategoryRedirect("activate")
    assert parse_entry("#protect") == NamespaceRedirect("protect")
    assert parse_entry("") is SUPPRESSED

def test_default_category(resolver):
    assert resolver.resolve("start") == "([EFFECT] started!)\n"

def test_namespace_wins_over_default(resolver):
    assert resolver.resolve("damage", "item: Life Orb") == "[POKEMON] lost some of its HP!\n"

def test_namespace_without_category_falls_back(resolver):
    assert resolver.resolve("faint", "item: Life Orb") == "[POKEMON] fainted!\n"

def test_unknown_namespace_falls_back(resolver):
    assert resolver.resolve("damage", "move: Tackle") == "[POKEMON] was hurt!\n"

def test_nodefault_stops_fallback(resolver):
    assert resolver.resolve("damage", "move: Tackle", NODEFAULT) == ""

def test_nodefault_after_match_is_ignored(resolver):
    assert resolver.resolve("damage", "Life Orb", NODEFAULT) == "[POKEMON] lost some of its HP!\n"

def test_suppressed_entry_never_falls_back(resolver):
    assert resolver.resolve("start", "ability: Intimidate") == ""

def test_category_redirect(resolver):
    assert resolver.resolve("end", "Sitrus Berry") == "[POKEMON] ate its berry!\n"

def test_namespace_redirect(resolver):
    assert resolver.resolve("heal", "item: Black Sludge") == "[POKEMON] restored a little HP!\n"

def test_redirect_in_default_namespace(resolver):
    assert resolver.resolve("heal") == "[POKEMON] was hurt!\n"

def test_chained_redirects():
    resolver = TemplateResolver(TemplateStore({
        "default": {},
        "a": {"end": "#b"},
        "b": {"end": ".fade", "fade": "gone"},
        "c": {"end": "#a"},
    }))
    assert resolver.resolve("end", "c") == "gone\n"

def test_redirect_to_missing_entry_is_empty(resolver):
    assert resolver.resolve("end", "a") == ""

def test_own_variant(resolver):
    assert resolver.resolve("switchIn", OWN) == "Go! [FULLNAME]!\n"
    assert resolver.resolve("switchIn", "") == "[TRAINER] sent out [FULLNAME]!\n"

def test_own_without_variant_is_empty(resolver):
    assert resolver.resolve("faint", OWN) == ""

def test_empty_namespaces_are_skipped(resolver):
    assert resolver.resolve("damage", "", None, "Life Orb") == "[POKEMON] lost some of its HP!\n"

def test_missing_everywhere(resolver):
    assert resolver.resolve("nothing", "Life Orb") == ""

def test_store_text_is_literal(store):
    assert store.text("blacksludge", "heal") == ""
    assert store.text("leftovers", "heal") == "[POKEMON] restored a little HP!"
    assert store.default_text("faint") == "[POKEMON] fainted!"
    assert store.default_text("nothing") == ""

def test_store_membership(store):
    assert "lifeorb" in store
    assert "nothing" not in store
    assert store.has("intimidate", "start")
    assert not store.has("intimidate", "end")
    assert len(store) == len(list(store))
