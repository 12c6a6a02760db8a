import pytest
from pydantic import ValidationError

from battletext.data_loader import (
    DEFAULT_TEMPLATES_PATH,
    get_template_store,
    load_template_store,
)
from battletext.templates import CategoryRedirect, NamespaceRedirect, SUPPRESSED, TemplateResolver

def test_default_store_loads():
    store = get_template_store()
    assert "default" in store
    assert store.default_text("move") == "[POKEMON] used **[MOVE]**!"
    assert store.text("atk", "statName") == "Attack"

def test_default_store_is_cached():
    assert get_template_store() is get_template_store()
    assert get_template_store(DEFAULT_TEMPLATES_PATH) is get_template_store()

def test_entry_shapes_parsed():
    store = get_template_store()
    assert store.entry("sitrusberry", "end") == CategoryRedirect("activate")
    assert store.entry("detect", "start") == NamespaceRedirect("protect")
    assert store.entry("intimidate", "start") is SUPPRESSED

def test_default_has_no_block_template():
    # -fail and -immune rely on "block" only resolving for specific blockers
    store = get_template_store()
    assert not store.has("default", "block")
    assert not store.has("default", "blockMove")
    assert not store.has("default", "blockSelf")

def test_default_store_redirects_resolve():
    store = get_template_store()
    resolver = TemplateResolver(store)
    for namespace in store:
        for category in ("start", "end", "activate", "cant", "damage", "heal", "takeItem"):
            if store.has(namespace, category):
                entry = store.entry(namespace, category)
                if entry is SUPPRESSED:
                    continue
                assert resolver.resolve(category, namespace), (namespace, category)

def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_template_store(tmp_path / "missing.toml")

def test_store_requires_default_table(tmp_path):
    path = tmp_path / "templates.toml"
    path.write_text('[leftovers]\nheal = "healed"\n', encoding="utf-8")
    with pytest.raises(ValidationError):
        load_template_store(path)

def test_custom_store(tmp_path):
    path = tmp_path / "templates.toml"
    path.write_text('[default]\nfaint = "[POKEMON] is down!"\n', encoding="utf-8")
    store = load_template_store(path)
    assert store.default_text("faint") == "[POKEMON] is down!"
    assert get_template_store(path) is get_template_store(path)

def test_default_store_ships_inside_package():
    assert DEFAULT_TEMPLATES_PATH.parent.parent.name == "battletext"
    assert DEFAULT_TEMPLATES_PATH.exists()
