import pytest

from battletext.config import RendererConfig
from battletext.renderer import Renderer, render

BATTLE = "\n".join([
    "|player|p1|Ash",
    "|player|p2|Gary",
    "|start",
    "|switch|p1a: Pikachu|Pikachu, L50, M|100/100",
    "|switch|p2a: Eevee|Eevee, L50, F|100/100",
    "|turn|1",
    "|move|p1a: Pikachu|Thunderbolt|p2a: Eevee",
    "|-damage|p2a: Eevee|40/100",
    "|move|p2a: Eevee|Growl|p1a: Pikachu",
    "|-unboost|p1a: Pikachu|atk|1",
    "|",
])

def test_battle_from_player_one():
    text = render(0).consume(BATTLE)
    assert text == (
        "Battle started between Ash and Gary!\n"
        "\nGo! **Pikachu**!\n"
        "\nGary sent out **Eevee**!\n"
        "\n== Turn 1 ==\n\n"
        "Pikachu used **Thunderbolt**!\n"
        "  (The opposing Eevee was hurt!)\n"
        "\nThe opposing Eevee used **Growl**!\n"
        "  Pikachu's Attack fell!\n"
        "\n"
    )

def test_battle_from_player_two():
    text = render(1).consume(BATTLE)
    assert "\nAsh sent out **Pikachu**!\n" in text
    assert "\nGo! **Eevee**!\n" in text
    assert "The opposing Pikachu used **Thunderbolt**!\n" in text
    assert "  (Eevee was hurt!)\n" in text
    assert "  The opposing Pikachu's Attack fell!\n" in text

def test_deterministic():
    assert render(0).consume(BATTLE) == render(0).consume(BATTLE)

def test_line_by_line_matches_whole_buffer():
    renderer = render(0)
    pieces = "".join(renderer.consume(line) for line in BATTLE.split("\n"))
    assert pieces == render(0).consume(BATTLE)

def test_nickname_shown_with_species():
    renderer = render(0)
    assert renderer.consume("|switch|p1a: Sparky|Pikachu, L50|100/100") == "Go! Sparky (**Pikachu**)!\n"

def test_consume_event():
    renderer = render(0)
    assert renderer.consume_event("faint", ["p2a: Eevee"]) == "The opposing Eevee fainted!\n"
    assert renderer.consume_event("-damage", ["p1a: Pikachu", "50/100"], {"from": "item: Life Orb"}) == (
        "  Pikachu lost some of its HP!\n"
    )

def test_suppressed_section_break_keeps_state():
    renderer = render(0)
    renderer.consume_event("move", ["p1a: Pikachu", "Surf"])
    text = renderer.consume_event("move", ["p2a: Eevee", "Tackle"], suppress_section_break=True)
    assert text == "The opposing Eevee used **Tackle**!\n"
    # the suppressed event did not advance the phase; still after a major
    assert renderer.consume_event("move", ["p1a: Pikachu", "Surf"]).startswith("\n")

def test_unknown_commands_render_nothing():
    renderer = render(0)
    assert renderer.consume("|upkeep") == ""
    assert renderer.consume("|nonsense|a|b") == ""
    assert renderer.consume("|-nonsense|a") == ""
    assert renderer.consume("just some text") == ""

def test_upkeep_still_breaks():
    renderer = render(0)
    renderer.consume("|move|p1a: Pikachu|Surf")
    assert renderer.consume("|upkeep") == "\n"

def test_gen_one_special_stat():
    renderer = render(0)
    renderer.consume("|gen|1")
    assert renderer.consume("|-boost|p1a: Pikachu|spa|1") == "  Pikachu's Special rose!\n"

def test_player_names_update():
    renderer = render(0)
    renderer.consume("|player|p2|Gary")
    assert renderer.p2 == "Gary"
    renderer.consume("|player|p2|")
    assert renderer.p2 == "Gary"

def test_perspective_validation():
    with pytest.raises(ValueError):
        Renderer(perspective=2)

def test_perspective_from_config():
    renderer = Renderer(config=RendererConfig(perspective=1, p1="Red"))
    assert renderer.perspective == 1
    assert renderer.own_side == "p2"
    assert renderer.p1 == "Red"

def test_explicit_perspective_overrides_config():
    renderer = Renderer(perspective=0, config=RendererConfig(perspective=1))
    assert renderer.own_side == "p1"

def test_render_overrides():
    renderer = render(1, p1="Red", gen=6)
    assert renderer.p1 == "Red"
    assert renderer.gen == 6
    assert renderer.perspective == 1

def test_pokemon_names():
    renderer = render(0)
    assert renderer.pokemon("p1a: Pikachu") == "Pikachu"
    assert renderer.pokemon("p2a: Eevee") == "the opposing Eevee"
    assert renderer.pokemon("p2: Eevee") == "the opposing Eevee"
    assert renderer.pokemon("") == ""
    assert renderer.pokemon("xx: Eevee") == "???pokemon:xx: Eevee???"
    assert renderer.pokemon_name("p1: Pikachu") == "Pikachu"

def test_trainer_and_team():
    renderer = render(0, p1="Ash", p2="Gary")
    assert renderer.trainer("p1a: Pikachu") == "Ash"
    assert renderer.trainer("p2") == "Gary"
    assert renderer.trainer("p3") == "???side:p3???"
    assert renderer.team("p1") == "your team"
    assert renderer.team("p2: Gary") == "the opposing team"

def test_stat_names():
    renderer = render(0)
    assert renderer.stat("spa") == "Sp. Atk"
    assert renderer.stat("") == "stats"
    assert renderer.stat("hp") == "???stat:hp???"

def test_ability_line():
    renderer = render(0)
    assert renderer.ability("Levitate", "p2a: Gengar") == "  [the opposing Gengar's Levitate]\n"
    assert renderer.maybe_ability("ability: Levitate", "p1a: Gengar") == "  [Gengar's Levitate]\n"
    assert renderer.maybe_ability("item: Leftovers", "p1a: Gengar") == ""
    assert renderer.maybe_ability("", "p1a: Gengar") == ""
