"""
BattleText — battletext/renderer.py
Renderer: narrates a battle-protocol stream from one player's perspective.
=========================================================================
Version:     0.1
Stack:       Python 3.14 | Pydantic v2 | stdlib logging
Status:      Production-ready.

Architecture notes
------------------
- One Renderer per perspective. It owns all mutable state: player names,
  generation, current section and the cached lowercase fixup. Nothing is
  shared between renderers except the read-only template store.
- Events are rendered strictly in arrival order; each one reads the state
  the previous one left behind.
- Per event: section break -> dispatcher -> lowercase fixup.
- Rendering never raises on bad data. Unknown references render as
  "???kind:value???", unknown commands render as nothing.

Usage:
    renderer = render(perspective=0)
    text = renderer.consume("|player|p1|Ash\\n|turn|1\\n")
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from battletext.config import RendererConfig
from battletext.data_loader import get_template_store
from battletext.dispatcher import EventDispatcher
from battletext.effects import effect_name
from battletext.fixup import LowercaseFixup
from battletext.protocol import BattleEvent, parse_line
from battletext.sections import SectionTracker
from battletext.substitution import substitute
from battletext.templates import OWN, NamespaceRef, TemplateResolver, TemplateStore

logger = logging.getLogger(__name__)

SIDES = ("p1", "p2")


class Renderer:
    def __init__(
        self,
        perspective: Optional[int] = None,
        store: Optional[TemplateStore] = None,
        config: Optional[RendererConfig] = None,
    ) -> None:
        config = config or RendererConfig()
        if perspective is None:
            perspective = config.perspective
        if perspective not in (0, 1):
            raise ValueError(f"perspective must be 0 or 1, got {perspective!r}")

        self.perspective = perspective
        self.store = store if store is not None else get_template_store(config.templates_path)
        self.resolver = TemplateResolver(self.store)

        self.p1: str = config.p1
        self.p2: str = config.p2
        self.gen: Union[int, float] = config.gen  # NaN after a malformed `gen`

        self.sections = SectionTracker()
        self.fixup = LowercaseFixup(self.store)
        self.dispatcher = EventDispatcher(self)

    @property
    def own_side(self) -> str:
        return SIDES[self.perspective]

    # ----------------------------------------------------------
    # Public API
    # ----------------------------------------------------------

    def consume(self, buffer: str) -> str:
        """Narrates every line of a multi-line protocol buffer."""
        out = []
        for line in buffer.split("\n"):
            event = parse_line(line)
            if event is None:
                continue
            out.append(self.render_event(event))
        return "".join(out)

    def consume_event(
        self,
        command: str,
        args: Sequence[str] = (),
        kwargs: Optional[Mapping[str, str]] = None,
        suppress_section_break: bool = False,
    ) -> str:
        """Narrates one already-tokenized event."""
        event = BattleEvent(command=command, args=tuple(args), kwargs=dict(kwargs or {}))
        return self.render_event(event, suppress_section_break)

    def render_event(self, event: BattleEvent, suppress_section_break: bool = False) -> str:
        prefix = ""
        if not suppress_section_break and self.sections.section_break(event):
            prefix = "\n"
        text = self.dispatcher.dispatch(event)
        if text is None:
            logger.debug("No narration rule for command %r", event.command)
            text = ""
        return prefix + self.fixup.apply(text)

    # ----------------------------------------------------------
    # Templates and rendered sub-values
    # ----------------------------------------------------------

    def template(self, category: str, *namespaces: NamespaceRef) -> str:
        return self.resolver.resolve(category, *namespaces)

    def pokemon_name(self, pokemon: str) -> str:
        """Nickname from "p1a: Pikachu" / "p1: Pikachu"."""
        if not pokemon:
            return ""
        if not pokemon.startswith(SIDES):
            return f"???pokemon:{pokemon}???"
        if pokemon[3:4] == ":":
            return pokemon[4:].strip()
        if pokemon[2:3] == ":":
            return pokemon[3:].strip()
        return f"???pokemon:{pokemon}???"

    def pokemon(self, pokemon: str) -> str:
        """Nickname wrapped in the own/opposing pokemon template."""
        if not pokemon:
            return ""
        side = pokemon[:2]
        if side not in SIDES:
            return f"???pokemon:{pokemon}???"
        category = "pokemon" if side == self.own_side else "opposingPokemon"
        return substitute(self.store.default_text(category), NICKNAME=self.pokemon_name(pokemon))

    def pokemon_full(self, pokemon: str, details: str) -> Tuple[str, str]:
        """(side, "Nickname (**Species**)") for switch-in lines."""
        nickname = self.pokemon_name(pokemon)
        species = details.split(",")[0]
        if nickname == species:
            return pokemon[:2], f"**{species}**"
        return pokemon[:2], f"{nickname} (**{species}**)"

    def trainer(self, side: str) -> str:
        side = side[:2]
        if side == "p1":
            return self.p1
        if side == "p2":
            return self.p2
        return f"???side:{side}???"

    def team(self, side: str) -> str:
        if side[:2] == self.own_side:
            return self.store.default_text("team")
        return self.store.default_text("opposingTeam")

    def own(self, side: str) -> NamespaceRef:
        """OWN when `side` is the narrated player, else no namespace."""
        if side[:2] == self.own_side:
            return OWN
        return ""

    def ability(self, name: str, holder: str) -> str:
        """Ability-activation line, e.g. "  [Pikachu's Static]"."""
        if not name:
            return ""
        line = substitute(
            self.store.default_text("abilityActivation"),
            POKEMON=self.pokemon(holder),
            ABILITY=effect_name(name),
        )
        return line + "\n"

    def maybe_ability(self, effect: str, holder: str) -> str:
        """Ability-activation line when `effect` is an "ability:" reference."""
        if not effect or not effect.startswith("ability:"):
            return ""
        return self.ability(effect[len("ability:"):].strip(), holder)

    def stat(self, stat: str) -> str:
        name = self.store.text(stat or "stats", "statName")
        if not name:
            return f"???stat:{stat}???"
        return name


def render(perspective: int = 0, **overrides: Any) -> Renderer:
    """Builds a renderer for one perspective with default state."""
    return Renderer(config=RendererConfig(perspective=perspective, **overrides))


# ============================================================
# SMOKE TEST
# ============================================================

if __name__ == "__main__":
    battle = "\n".join([
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
    for perspective in (0, 1):
        print(f"--- perspective {perspective} ---")
        print(render(perspective).consume(battle))
