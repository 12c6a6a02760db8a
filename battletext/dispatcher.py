"""
BattleText — battletext/dispatcher.py
Event dispatcher: one narration rule per protocol command.
=========================================================
Version:     0.1
Stack:       Python 3.14
Status:      Production-ready.

Architecture notes
------------------
- Handlers are registered in EventDispatcher._handlers, keyed by CMD_*
  constants. dispatch() returns None for a command with no handler, ""
  for a deliberately silent one.
- Handlers read renderer state (names, perspective, generation) but only
  `player` and `gen` write it.
- Template lookups go most-specific first: the effect itself, then the
  [from] source, then NODEFAULT where a generic template would be wrong,
  then the generic category.
- A "line1" is an ability-activation line rendered before the main line
  whenever the responsible effect is an "ability:" reference.

Lookup tables below are literal game data, not computed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from battletext.effects import effect_id, effect_name, is_ability, is_item, to_id
from battletext.protocol import (
    BattleEvent,
    CMD_ABILITY,
    CMD_ACTIVATE,
    CMD_ANIM,
    CMD_BLOCK,
    CMD_BOOST,
    CMD_BURST,
    CMD_CANT,
    CMD_CENTER,
    CMD_CLEAR_ALL_BOOST,
    CMD_CLEAR_BOOST,
    CMD_CLEAR_NEGATIVE_BOOST,
    CMD_CLEAR_POSITIVE_BOOST,
    CMD_COMBINE,
    CMD_COPY_BOOST,
    CMD_CRIT,
    CMD_CURE_STATUS,
    CMD_CURE_TEAM,
    CMD_DAMAGE,
    CMD_DETAILS_CHANGE,
    CMD_DRAG,
    CMD_END_ABILITY,
    CMD_END_ITEM,
    CMD_FAIL,
    CMD_FAINT,
    CMD_FIELD_ACTIVATE,
    CMD_FIELD_END,
    CMD_FIELD_START,
    CMD_FORME_CHANGE,
    CMD_GEN,
    CMD_HEAL,
    CMD_HINT,
    CMD_HIT_COUNT,
    CMD_IMMUNE,
    CMD_INVERT_BOOST,
    CMD_ITEM,
    CMD_MEGA,
    CMD_MESSAGE,
    CMD_MINOR_MESSAGE,
    CMD_MISS,
    CMD_MOVE,
    CMD_NO_TARGET,
    CMD_OHKO,
    CMD_PLAYER,
    CMD_PREPARE,
    CMD_PRIMAL,
    CMD_RESISTED,
    CMD_SET_BOOST,
    CMD_SET_HP,
    CMD_SIDE_END,
    CMD_SIDE_START,
    CMD_SINGLE_MOVE,
    CMD_SINGLE_TURN,
    CMD_START,
    CMD_STATUS,
    CMD_SUPER_EFFECTIVE,
    CMD_SWAP,
    CMD_SWAP_BOOST,
    CMD_SWITCH,
    CMD_SWITCH_OUT,
    CMD_TIE,
    CMD_TRANSFORM,
    CMD_TURN,
    CMD_UNBOOST,
    CMD_VOLATILE_END,
    CMD_VOLATILE_START,
    CMD_WAITING,
    CMD_WEATHER,
    CMD_WIN,
    CMD_ZBROKEN,
    CMD_ZPOWER,
    MINOR_PREFIX,
    is_nonzero,
    is_numeric,
    parse_int,
)
from battletext.substitution import substitute
from battletext.templates import NODEFAULT

if TYPE_CHECKING:
    from battletext.renderer import Renderer


Handler = Callable[[BattleEvent], Optional[str]]


# ============================================================
# LOOKUP TABLES
# ============================================================

# Resulting species id -> (ability namespace, template category). The
# "transformEnd" rows are the base formes the ability reverts to.
TRANSFORM_ABILITIES: Dict[str, Tuple[str, str]] = {
    "greninjaash":      ("battlebond", "transform"),
    "mimikyubusted":    ("disguise", "transform"),
    "zygardecomplete":  ("powerconstruct", "transform"),
    "necrozmaultra":    ("ultranecroziumz", "transform"),
    "darmanitanzen":    ("zenmode", "transform"),
    "darmanitan":       ("zenmode", "transformEnd"),
    "aegislashblade":   ("stancechange", "transform"),
    "aegislash":        ("stancechange", "transformEnd"),
    "wishiwashischool": ("schooling", "transform"),
    "wishiwashi":       ("schooling", "transformEnd"),
    "miniormeteor":     ("shieldsdown", "transform"),
    "minior":           ("shieldsdown", "transformEnd"),
}

# `cant` sources reported on the blocked pokemon but owned by the other one
SWAPPED_CANT_SOURCES = frozenset({"damp", "dazzling", "queenlymajesty"})

ITEM_STEALERS = frozenset({"thief", "covet", "bestow", "magician", "pickpocket"})
ABILITY_ITEM_STEALERS = frozenset({"magician", "pickpocket"})

# `-activate` moves reported with the target first when no target is given
TARGET_FIRST_ACTIVATIONS = frozenset({
    "hyperspacefury", "hyperspacehole", "phantomforce", "shadowforce", "feint",
})

ALREADY_STARTED_FAILURES = frozenset({"brn", "frz", "par", "psn", "slp", "substitute"})
PRIMAL_WEATHERS = frozenset({"desolateland", "primordialsea"})
WEATHER_MOVES = frozenset({"sunnyday", "raindance", "sandstorm", "hail"})


class EventDispatcher:
    def __init__(self, renderer: "Renderer") -> None:
        self.r = renderer
        self._handlers: Dict[str, Handler] = {
            CMD_PLAYER: self._player,
            CMD_GEN: self._gen,
            CMD_TURN: self._turn,
            CMD_START: self._start,
            CMD_WIN: self._win,
            CMD_TIE: self._win,
            CMD_SWITCH: self._switch,
            CMD_DRAG: self._drag,
            CMD_DETAILS_CHANGE: self._transform,
            CMD_TRANSFORM: self._transform,
            CMD_FORME_CHANGE: self._transform,
            CMD_SWITCH_OUT: self._switch_out,
            CMD_FAINT: self._faint,
            CMD_SWAP: self._swap,
            CMD_MOVE: self._move,
            CMD_CANT: self._cant,
            CMD_MESSAGE: self._message,
            CMD_VOLATILE_START: self._volatile_start,
            CMD_VOLATILE_END: self._volatile_end,
            CMD_ABILITY: self._ability,
            CMD_END_ABILITY: self._end_ability,
            CMD_ITEM: self._item,
            CMD_END_ITEM: self._end_item,
            CMD_STATUS: self._status,
            CMD_CURE_STATUS: self._cure_status,
            CMD_CURE_TEAM: self._from_activate,
            CMD_SINGLE_TURN: self._single_turn,
            CMD_SINGLE_MOVE: self._single_turn,
            CMD_SIDE_START: self._side_start,
            CMD_SIDE_END: self._side_end,
            CMD_WEATHER: self._weather,
            CMD_FIELD_START: self._field_start,
            CMD_FIELD_ACTIVATE: self._field_start,
            CMD_FIELD_END: self._field_end,
            CMD_SET_HP: self._from_activate,
            CMD_MINOR_MESSAGE: self._minor_message,
            CMD_HINT: self._hint,
            CMD_ACTIVATE: self._activate,
            CMD_PREPARE: self._prepare,
            CMD_DAMAGE: self._damage,
            CMD_HEAL: self._heal,
            CMD_BOOST: self._boost,
            CMD_UNBOOST: self._boost,
            CMD_SET_BOOST: self._set_boost,
            CMD_SWAP_BOOST: self._swap_boost,
            CMD_COPY_BOOST: self._copy_boost,
            CMD_CLEAR_BOOST: self._clear_boost,
            CMD_CLEAR_POSITIVE_BOOST: self._clear_boost,
            CMD_CLEAR_NEGATIVE_BOOST: self._clear_boost,
            CMD_INVERT_BOOST: self._invert_boost,
            CMD_CLEAR_ALL_BOOST: self._clear_all_boost,
            CMD_CRIT: self._effectiveness,
            CMD_SUPER_EFFECTIVE: self._effectiveness,
            CMD_RESISTED: self._effectiveness,
            CMD_BLOCK: self._block,
            CMD_FAIL: self._fail,
            CMD_IMMUNE: self._immune,
            CMD_MISS: self._miss,
            CMD_CENTER: self._plain,
            CMD_OHKO: self._plain,
            CMD_COMBINE: self._plain,
            CMD_NO_TARGET: self._no_target,
            CMD_MEGA: self._mega,
            CMD_PRIMAL: self._mega,
            CMD_ZPOWER: self._zpower,
            CMD_BURST: self._burst,
            CMD_ZBROKEN: self._zbroken,
            CMD_HIT_COUNT: self._hit_count,
            CMD_WAITING: self._waiting,
            CMD_ANIM: self._anim,
        }

    @property
    def commands(self) -> frozenset:
        return frozenset(self._handlers)

    def dispatch(self, event: BattleEvent) -> Optional[str]:
        handler = self._handlers.get(event.command)
        if handler is None:
            return None
        return handler(event)

    # ----------------------------------------------------------
    # Battle flow
    # ----------------------------------------------------------

    def _player(self, event: BattleEvent) -> str:
        side, name = event.arg(0), event.arg(1)
        if side == "p1" and name:
            self.r.p1 = name
        elif side == "p2" and name:
            self.r.p2 = name
        return ""

    def _gen(self, event: BattleEvent) -> str:
        self.r.gen = parse_int(event.arg(0))
        return ""

    def _turn(self, event: BattleEvent) -> str:
        return substitute(self.r.template("turn"), NUMBER=event.arg(0)) + "\n"

    def _start(self, event: BattleEvent) -> str:
        template = substitute(self.r.template("startBattle"), TRAINER=self.r.p1)
        return substitute(template, TRAINER=self.r.p2)

    def _win(self, event: BattleEvent) -> str:
        name = event.arg(0)
        if event.command == CMD_TIE or not name:
            template = substitute(self.r.template("tieBattle"), TRAINER=self.r.p1)
            return substitute(template, TRAINER=self.r.p2)
        return substitute(self.r.template("winBattle"), TRAINER=name)

    def _message(self, event: BattleEvent) -> str:
        return event.arg(0) + "\n"

    def _minor_message(self, event: BattleEvent) -> str:
        return "  " + event.arg(0) + "\n"

    def _hint(self, event: BattleEvent) -> str:
        return "  (" + event.arg(0) + ")\n"

    # ----------------------------------------------------------
    # Switching and formes
    # ----------------------------------------------------------

    def _switch(self, event: BattleEvent) -> str:
        side, fullname = self.r.pokemon_full(event.arg(0), event.arg(1))
        template = self.r.template("switchIn", self.r.own(side))
        return substitute(template, TRAINER=self.r.trainer(side), FULLNAME=fullname)

    def _drag(self, event: BattleEvent) -> str:
        side, fullname = self.r.pokemon_full(event.arg(0), event.arg(1))
        return substitute(self.r.template("drag"), TRAINER=self.r.trainer(side), FULLNAME=fullname)

    def _switch_out(self, event: BattleEvent) -> str:
        pokemon = event.arg(0)
        side = pokemon[:2]
        template = self.r.template("switchOut", event.kw("from"), self.r.own(side))
        return substitute(
            template,
            TRAINER=self.r.trainer(side),
            NICKNAME=self.r.pokemon_name(pokemon),
            POKEMON=self.r.pokemon(pokemon),
        )

    def _transform(self, event: BattleEvent) -> str:
        pokemon = event.arg(0)
        if event.command == CMD_DETAILS_CHANGE:
            species = event.arg(1).split(",")[0].strip()
        elif event.command == CMD_TRANSFORM:
            species = event.arg(2)
        else:
            species = event.arg(1)

        namespace, category = "", "transform"
        if event.command != CMD_TRANSFORM:
            namespace, category = TRANSFORM_ABILITIES.get(to_id(species), ("", "transform"))
        elif species:
            namespace = "transform"

        template = self.r.template(category, namespace, "" if event.kw("msg") else NODEFAULT)
        line1 = self.r.maybe_ability(event.kw("from"), event.kw("of") or pokemon)
        return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon), SPECIES=species)

    def _faint(self, event: BattleEvent) -> str:
        return substitute(self.r.template("faint"), POKEMON=self.r.pokemon(event.arg(0)))

    def _swap(self, event: BattleEvent) -> str:
        pokemon, target = event.arg(0), event.arg(1)
        if not target or is_numeric(target):
            return substitute(self.r.template("swapCenter"), POKEMON=self.r.pokemon(pokemon))
        return substitute(
            self.r.template("swap"),
            POKEMON=self.r.pokemon(pokemon),
            TARGET=self.r.pokemon(target),
        )

    # ----------------------------------------------------------
    # Moves
    # ----------------------------------------------------------

    def _move(self, event: BattleEvent) -> str:
        pokemon, move = event.arg(0), event.arg(1)
        line1 = self.r.maybe_ability(event.kw("from"), event.kw("of") or pokemon)
        if event.kw("zEffect"):
            line1 = substitute(self.r.template("zEffect"), POKEMON=self.r.pokemon(pokemon))
        template = self.r.template("move", event.kw("from"))
        return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon), MOVE=move)

    def _cant(self, event: BattleEvent) -> str:
        pokemon, effect, move = event.arg(0), event.arg(1), event.arg(2)
        source = event.kw("of")
        if effect_id(effect) in SWAPPED_CANT_SOURCES:
            pokemon, source = source, pokemon

        template = (
            self.r.template("cant", effect, NODEFAULT)
            or self.r.template("cant" if move else "cantNoMove")
        )
        line1 = self.r.maybe_ability(effect, source or pokemon)
        return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon), MOVE=move)

    def _prepare(self, event: BattleEvent) -> str:
        pokemon, effect, target = event.arg(0), event.arg(1), event.arg(2)
        return substitute(
            self.r.template("prepare", effect),
            POKEMON=self.r.pokemon(pokemon),
            TARGET=self.r.pokemon(target),
        )

    # ----------------------------------------------------------
    # Volatile effects
    # ----------------------------------------------------------

    def _volatile_start(self, event: BattleEvent) -> str:
        pokemon, effect, extra = event.arg(0), event.arg(1), event.arg(2)
        source, origin = event.kw("of"), event.kw("from")
        line1 = (
            self.r.maybe_ability(effect, pokemon)
            or self.r.maybe_ability(origin, source or pokemon)
        )
        effect_key = effect_id(effect)

        if effect_key == "typechange":
            template = self.r.template("typeChange", origin)
            return line1 + substitute(
                template,
                POKEMON=self.r.pokemon(pokemon),
                TYPE=extra,
                SOURCE=self.r.pokemon(source),
            )
        if effect_key == "typeadd":
            template = self.r.template("typeAdd", origin)
            return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon), TYPE=extra)
        if effect_key.startswith("stockpile"):
            template = self.r.template("start", "stockpile")
            return line1 + substitute(
                template,
                POKEMON=self.r.pokemon(pokemon),
                NUMBER=effect_key[len("stockpile"):],
            )
        if effect_key.startswith("perish"):
            template = self.r.template("activate", "perishsong")
            return line1 + substitute(
                template,
                POKEMON=self.r.pokemon(pokemon),
                NUMBER=effect_key[len("perish"):],
            )

        category = "start"
        if event.kw("already"):
            category = "alreadyStarted"
        if event.kw("fatigue"):
            category = "startFromFatigue"
        if event.kw("zeffect"):
            category = "startFromZEffect"
        if event.kw("damage"):
            category = "activate"
        if event.kw("block"):
            category = "block"
        if event.kw("upkeep"):
            category = "upkeep"
        if effect_key in ("reflect", "lightscreen"):
            category = "startGen1"
        if category == "start" and is_item(origin):
            category += "FromItem"

        template = self.r.template(category, effect)
        return line1 + substitute(
            template,
            POKEMON=self.r.pokemon(pokemon),
            EFFECT=effect_name(effect),
            MOVE=extra,
            SOURCE=self.r.pokemon(source),
            ITEM=effect_name(origin),
        )

    def _volatile_end(self, event: BattleEvent) -> str:
        pokemon, effect = event.arg(0), event.arg(1)
        source, origin = event.kw("of"), event.kw("from")
        line1 = (
            self.r.maybe_ability(effect, pokemon)
            or self.r.maybe_ability(origin, source or pokemon)
        )
        if effect_id(effect) in ("doomdesire", "futuresight"):
            template = self.r.template("activate", effect)
            return line1 + substitute(template, TARGET=self.r.pokemon(pokemon))

        template = ""
        if is_item(origin):
            template = self.r.template("endFromItem", effect)
        if not template:
            template = self.r.template("end", effect)
        return line1 + substitute(
            template,
            POKEMON=self.r.pokemon(pokemon),
            EFFECT=effect_name(effect),
            SOURCE=self.r.pokemon(source),
            ITEM=effect_name(origin),
        )

    def _single_turn(self, event: BattleEvent) -> str:
        pokemon, effect = event.arg(0), event.arg(1)
        source, origin = event.kw("of"), event.kw("from")
        line1 = (
            self.r.maybe_ability(effect, source or pokemon)
            or self.r.maybe_ability(origin, source or pokemon)
        )
        if effect_id(effect) == "instruct":
            template = self.r.template("activate", effect)
            return line1 + substitute(
                template,
                POKEMON=self.r.pokemon(source),
                TARGET=self.r.pokemon(pokemon),
            )

        template = self.r.template("start", effect, NODEFAULT)
        if not template:
            template = substitute(self.r.template("start"), EFFECT=effect_name(effect))
        return line1 + substitute(
            template,
            POKEMON=self.r.pokemon(pokemon),
            SOURCE=self.r.pokemon(source),
            TEAM=self.r.team(pokemon[:2]),
        )

    def _activate(self, event: BattleEvent) -> str:
        pokemon, effect, target = event.arg(0), event.arg(1), event.arg(2)
        source = event.kw("of")
        effect_key = effect_id(effect)

        if effect_key == "celebrate":
            return substitute(
                self.r.template("activate", "celebrate"),
                TRAINER=self.r.trainer(pokemon[:2]),
            )
        if not target and effect_key in TARGET_FIRST_ACTIVATIONS:
            pokemon, target = source, pokemon
            if not pokemon:
                pokemon = target
        if not target:
            target = source or pokemon

        line1 = self.r.maybe_ability(effect, pokemon)

        if effect_key in ("lockon", "mindreader"):
            template = self.r.template("start", effect)
            return line1 + substitute(
                template,
                POKEMON=self.r.pokemon(source),
                SOURCE=self.r.pokemon(pokemon),
            )

        category = "activate"
        if effect_key == "forewarn" and pokemon == target:
            category = "activateNoTarget"
        template = self.r.template(category, effect, NODEFAULT)
        if not template:
            if line1:
                return line1  # abilities have no generic activation line
            template = self.r.template("activate")
            return line1 + substitute(template, EFFECT=effect_name(effect))

        if effect_key == "brickbreak":
            template = substitute(template, TEAM=self.r.team(target[:2]))
        if event.kw("ability"):
            line1 += self.r.ability(event.kw("ability"), pokemon)
        if event.kw("ability2"):
            line1 += self.r.ability(event.kw("ability2"), target)
        if effect_key == "mummy":
            line1 += self.r.ability("Mummy", target)
            template = self.r.template("changeAbility", "Mummy")
        if event.kw("move") or event.kw("number") or event.kw("item"):
            template = substitute(
                template,
                MOVE=event.kw("move"),
                NUMBER=event.kw("number"),
                ITEM=event.kw("item"),
            )
        return line1 + substitute(
            template,
            POKEMON=self.r.pokemon(pokemon),
            TARGET=self.r.pokemon(target),
            SOURCE=self.r.pokemon(source),
        )

    # ----------------------------------------------------------
    # Abilities and items
    # ----------------------------------------------------------

    def _ability(self, event: BattleEvent) -> str:
        pokemon, ability = event.arg(0), event.arg(1)
        old_ability, side = event.arg(2), event.arg(3)
        origin = event.kw("from")
        # "-ability|POKEMON|ABILITY|p2" and "...|boost" carry no old ability
        if old_ability and (old_ability.startswith(("p1", "p2")) or old_ability == "boost"):
            side, old_ability = old_ability, ""

        line1 = ""
        if old_ability:
            line1 += self.r.ability(old_ability, pokemon)
        line1 += self.r.ability(ability, pokemon)

        if event.kw("fail"):
            return line1 + self.r.template("block", origin)
        if origin:
            line1 = self.r.maybe_ability(origin, pokemon) + line1
            template = self.r.template("changeAbility", origin)
            return line1 + substitute(
                template,
                POKEMON=self.r.pokemon(pokemon),
                ABILITY=effect_name(ability),
                SOURCE=self.r.pokemon(event.kw("of")),
            )

        ability_key = effect_id(ability)
        if ability_key == "unnerve":
            template = self.r.template("start", ability)
            return line1 + substitute(template, TEAM=self.r.team(side))
        category = "activate" if ability_key in ("anticipation", "sturdy") else "start"
        template = self.r.template(category, ability, NODEFAULT)
        return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon))

    def _end_ability(self, event: BattleEvent) -> str:
        pokemon, ability = event.arg(0), event.arg(1)
        if ability:
            return self.r.ability(ability, pokemon)
        line1 = self.r.maybe_ability(event.kw("from"), event.kw("of") or pokemon)
        template = self.r.template("start", "Gastro Acid")
        return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon))

    def _item(self, event: BattleEvent) -> str:
        pokemon, item = event.arg(0), event.arg(1)
        origin, source = event.kw("from"), event.kw("of")
        origin_key = effect_id(origin)
        target = ""
        if origin_key in ABILITY_ITEM_STEALERS:
            target, source = source, ""
        line1 = self.r.maybe_ability(origin, source or pokemon)

        if origin_key in ITEM_STEALERS:
            template = self.r.template("takeItem", origin)
            return line1 + substitute(
                template,
                POKEMON=self.r.pokemon(pokemon),
                ITEM=effect_name(item),
                SOURCE=self.r.pokemon(target or source),
            )
        if origin_key == "frisk":
            has_target = source and pokemon and source != pokemon
            template = self.r.template("activate" if has_target else "activateNoTarget", "Frisk")
            return line1 + substitute(
                template,
                POKEMON=self.r.pokemon(source),
                ITEM=effect_name(item),
                TARGET=self.r.pokemon(pokemon),
            )
        if origin:
            template = self.r.template("addItem", origin)
            return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon), ITEM=effect_name(item))

        template = self.r.template("start", item, NODEFAULT)
        return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon))

    def _end_item(self, event: BattleEvent) -> str:
        pokemon, item = event.arg(0), event.arg(1)
        origin, source = event.kw("from"), event.kw("of")
        line1 = self.r.maybe_ability(origin, source or pokemon)

        if event.kw("eat"):
            template = self.r.template("eatItem", origin)
            return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon), ITEM=effect_name(item))

        origin_key = effect_id(origin)
        if origin_key == "gem":
            template = self.r.template("useGem", item)
            return line1 + substitute(
                template,
                POKEMON=self.r.pokemon(pokemon),
                ITEM=effect_name(item),
                MOVE=event.kw("move"),
            )
        if origin_key == "stealeat":
            template = self.r.template("removeItem", "Bug Bite")
            return line1 + substitute(template, SOURCE=self.r.pokemon(source), ITEM=effect_name(item))
        if origin:
            template = self.r.template("removeItem", origin)
            return line1 + substitute(
                template,
                POKEMON=self.r.pokemon(pokemon),
                ITEM=effect_name(item),
                SOURCE=self.r.pokemon(source),
            )
        if event.kw("weaken"):
            template = self.r.template("activateWeaken")
            return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon), ITEM=effect_name(item))

        template = self.r.template("end", item, NODEFAULT)
        if not template:
            template = substitute(self.r.template("activateItem"), ITEM=effect_name(item))
        return line1 + substitute(
            template,
            POKEMON=self.r.pokemon(pokemon),
            TARGET=self.r.pokemon(source),
        )

    # ----------------------------------------------------------
    # Statuses
    # ----------------------------------------------------------

    def _status(self, event: BattleEvent) -> str:
        pokemon, status = event.arg(0), event.arg(1)
        origin = event.kw("from")
        line1 = self.r.maybe_ability(origin, event.kw("of") or pokemon)
        category = "startFromRest" if effect_id(origin) == "rest" else "start"
        template = self.r.template(category, status)
        return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon))

    def _cure_status(self, event: BattleEvent) -> str:
        pokemon, status = event.arg(0), event.arg(1)
        origin = event.kw("from")
        if effect_id(origin) == "naturalcure":
            template = self.r.template("activate", origin)
            return substitute(template, POKEMON=self.r.pokemon(pokemon))

        line1 = self.r.maybe_ability(origin, event.kw("of") or pokemon)
        if is_item(origin):
            template = self.r.template("endFromItem", status)
            return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon), ITEM=effect_name(origin))
        if event.kw("thaw"):
            template = self.r.template("endFromMove", status)
            return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon), MOVE=effect_name(origin))

        template = self.r.template("end", status, NODEFAULT)
        if not template:
            template = substitute(self.r.template("end"), EFFECT=status)
        return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon))

    def _from_activate(self, event: BattleEvent) -> str:
        # -cureteam, -sethp: the [from] effect says everything
        return self.r.template("activate", event.kw("from"))

    # ----------------------------------------------------------
    # Side and field conditions
    # ----------------------------------------------------------

    def _side_start(self, event: BattleEvent) -> str:
        side, effect = event.arg(0), event.arg(1)
        template = self.r.template("start", effect, NODEFAULT)
        if not template:
            template = substitute(self.r.template("startTeamEffect"), EFFECT=effect_name(effect))
        return substitute(template, TEAM=self.r.team(side))

    def _side_end(self, event: BattleEvent) -> str:
        side, effect = event.arg(0), event.arg(1)
        template = self.r.template("end", effect, NODEFAULT)
        if not template:
            template = substitute(self.r.template("endTeamEffect"), EFFECT=effect_name(effect))
        return substitute(template, TEAM=self.r.team(side))

    def _weather(self, event: BattleEvent) -> str:
        weather = event.arg(0)
        origin = event.kw("from")
        if not weather or weather == "none":
            template = self.r.template("end", origin, NODEFAULT)
            if not template:
                return substitute(self.r.template("endFieldEffect"), EFFECT=effect_name(weather))
            return template
        if event.kw("upkeep"):
            return self.r.template("upkeep", weather, NODEFAULT)

        line1 = self.r.maybe_ability(origin, event.kw("of"))
        template = self.r.template("start", weather, NODEFAULT)
        if not template:
            template = substitute(self.r.template("startFieldEffect"), EFFECT=effect_name(weather))
        return line1 + template

    def _field_start(self, event: BattleEvent) -> str:
        effect = event.arg(0)
        source = event.kw("of")
        line1 = self.r.maybe_ability(event.kw("from"), source)
        category = event.command[len("-field"):]
        if effect_id(effect) == "perishsong":
            category = "start"
        template = self.r.template(category, effect, NODEFAULT)
        if not template:
            template = substitute(self.r.template("startFieldEffect"), EFFECT=effect_name(effect))
        return line1 + substitute(template, POKEMON=self.r.pokemon(source))

    def _field_end(self, event: BattleEvent) -> str:
        effect = event.arg(0)
        template = self.r.template("end", effect, NODEFAULT)
        if not template:
            template = substitute(self.r.template("endFieldEffect"), EFFECT=effect_name(effect))
        return template

    # ----------------------------------------------------------
    # HP
    # ----------------------------------------------------------

    def _damage(self, event: BattleEvent) -> str:
        pokemon, percentage = event.arg(0), event.arg(2)
        origin, source = event.kw("from"), event.kw("of")
        template = self.r.template("damage", origin, NODEFAULT)
        line1 = self.r.maybe_ability(origin, source or pokemon)
        if template:
            return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon))

        if not origin:
            template = self.r.template("damagePercentage" if percentage else "damage")
            return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon), PERCENTAGE=percentage)
        if is_item(origin):
            template = self.r.template("damageFromPokemon" if source else "damageFromItem")
            return line1 + substitute(
                template,
                POKEMON=self.r.pokemon(pokemon),
                ITEM=effect_name(origin),
                SOURCE=self.r.pokemon(source),
            )
        if event.kw("partiallytrapped") or effect_id(origin) in ("bind", "wrap"):
            template = self.r.template("damageFromPartialTrapping")
            return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon), MOVE=effect_name(origin))

        template = self.r.template("damage")
        return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon))

    def _heal(self, event: BattleEvent) -> str:
        pokemon = event.arg(0)
        origin = event.kw("from")
        template = self.r.template("heal", origin, NODEFAULT)
        line1 = self.r.maybe_ability(origin, pokemon)
        if template:
            return line1 + substitute(
                template,
                POKEMON=self.r.pokemon(pokemon),
                SOURCE=self.r.pokemon(event.kw("of")),
                NICKNAME=event.kw("wisher"),
            )
        if origin and not is_ability(origin):
            template = self.r.template("healFromEffect")
            return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon), EFFECT=effect_name(origin))

        template = self.r.template("heal")
        return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon))

    # ----------------------------------------------------------
    # Stat stages
    # ----------------------------------------------------------

    def _boost(self, event: BattleEvent) -> str:
        pokemon, stat = event.arg(0), event.arg(1)
        origin = event.kw("from")
        if stat == "spa" and self.r.gen == 1:
            stat = "spc"
        amount = parse_int(event.arg(2))
        line1 = self.r.maybe_ability(origin, event.kw("of") or pokemon)

        # Magnitude suffix first; the source qualifier only for non-zero magnitudes
        category = event.command[len(MINOR_PREFIX):]
        if amount >= 3:
            category += "3"
        elif amount >= 2:
            category += "2"
        elif amount == 0:
            category += "0"
        if is_nonzero(amount) and event.kw("zeffect"):
            category += "MultipleFromZEffect" if event.kw("multiple") else "FromZEffect"
        elif is_nonzero(amount) and is_item(origin):
            category += "FromItem"

        template = self.r.template(category, origin)
        return line1 + substitute(
            template,
            POKEMON=self.r.pokemon(pokemon),
            STAT=self.r.stat(stat),
            ITEM=effect_name(origin),
        )

    def _set_boost(self, event: BattleEvent) -> str:
        pokemon = event.arg(0)
        origin = event.kw("from")
        line1 = self.r.maybe_ability(origin, event.kw("of") or pokemon)
        template = self.r.template("boost", origin)
        return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon))

    def _swap_boost(self, event: BattleEvent) -> str:
        pokemon, target = event.arg(0), event.arg(1)
        origin = event.kw("from")
        line1 = self.r.maybe_ability(origin, event.kw("of") or pokemon)
        category = {
            "guardswap": "swapDefensiveBoost",
            "powerswap": "swapOffensiveBoost",
        }.get(effect_id(origin), "swapBoost")
        template = self.r.template(category, origin)
        return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon), TARGET=self.r.pokemon(target))

    def _copy_boost(self, event: BattleEvent) -> str:
        pokemon, target = event.arg(0), event.arg(1)
        origin = event.kw("from")
        line1 = self.r.maybe_ability(origin, event.kw("of") or pokemon)
        template = self.r.template("copyBoost", origin)
        return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon), TARGET=self.r.pokemon(target))

    def _clear_boost(self, event: BattleEvent) -> str:
        pokemon, source = event.arg(0), event.arg(1)
        origin = event.kw("from")
        line1 = self.r.maybe_ability(origin, event.kw("of") or pokemon)
        category = "clearBoostFromZEffect" if event.kw("zeffect") else "clearBoost"
        template = self.r.template(category, origin)
        return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon), SOURCE=self.r.pokemon(source))

    def _invert_boost(self, event: BattleEvent) -> str:
        pokemon = event.arg(0)
        origin = event.kw("from")
        line1 = self.r.maybe_ability(origin, event.kw("of") or pokemon)
        template = self.r.template("invertBoost", origin)
        return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon))

    def _clear_all_boost(self, event: BattleEvent) -> str:
        return self.r.template("clearAllBoost", event.kw("from"))

    # ----------------------------------------------------------
    # Move outcomes
    # ----------------------------------------------------------

    def _effectiveness(self, event: BattleEvent) -> str:
        category = {
            CMD_CRIT: "crit",
            CMD_SUPER_EFFECTIVE: "superEffective",
            CMD_RESISTED: "resisted",
        }[event.command]
        if event.kw("spread"):
            category += "Spread"
        return substitute(self.r.template(category), POKEMON=self.r.pokemon(event.arg(0)))

    def _block(self, event: BattleEvent) -> str:
        pokemon, effect, move = event.arg(0), event.arg(1), event.arg(2)
        line1 = self.r.maybe_ability(effect, event.kw("of") or pokemon)
        template = self.r.template("block", effect)
        return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon), MOVE=move)

    def _fail(self, event: BattleEvent) -> str:
        pokemon, effect, stat = event.arg(0), event.arg(1), event.arg(2)
        origin, source = event.kw("from"), event.kw("of")
        effect_key = effect_id(effect)
        blocker = effect_id(origin)
        line1 = self.r.maybe_ability(origin, source or pokemon)

        category = "block"
        if blocker in PRIMAL_WEATHERS and effect_key not in WEATHER_MOVES:
            category = "blockMove"
        elif blocker == "uproar" and event.kw("msg"):
            category = "blockSelf"
        template = self.r.template(category, origin)
        if template:
            return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon))

        if effect_key == "unboost":
            template = self.r.template("failSingular" if stat else "fail", "unboost")
            if blocker == "flowerveil":
                template = self.r.template("block", origin)
                pokemon = source
            # the stat arrives as a display name ("Attack") or an id ("atk")
            if self.r.store.has(stat, "statName"):
                stat = self.r.stat(stat)
            return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon), STAT=stat)

        category = "fail"
        if effect_key in ALREADY_STARTED_FAILURES:
            category = "alreadyStarted"
        if event.kw("heavy"):
            category = "failTooHeavy"
        if event.kw("weak"):
            category = "fail"
        if event.kw("forme"):
            category = "failWrongForme"
        template = self.r.template(category, effect_key)
        return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon))

    def _immune(self, event: BattleEvent) -> str:
        pokemon = event.arg(0)
        origin = event.kw("from")
        line1 = self.r.maybe_ability(origin, event.kw("of") or pokemon)
        template = self.r.template("block", origin)
        if not template:
            category = "immuneOHKO" if event.kw("ohko") else "immune"
            template = self.r.template(category if pokemon else "immuneNoPokemon", origin)
        return line1 + substitute(template, POKEMON=self.r.pokemon(pokemon))

    def _miss(self, event: BattleEvent) -> str:
        source, pokemon = event.arg(0), event.arg(1)
        line1 = self.r.maybe_ability(event.kw("from"), event.kw("of") or pokemon)
        if not pokemon:
            return line1 + substitute(self.r.template("missNoPokemon"), SOURCE=self.r.pokemon(source))
        return line1 + substitute(self.r.template("miss"), POKEMON=self.r.pokemon(pokemon))

    def _plain(self, event: BattleEvent) -> str:
        # -center, -ohko, -combine
        return self.r.template(event.command[len(MINOR_PREFIX):])

    def _no_target(self, event: BattleEvent) -> str:
        return self.r.template("noTarget")

    def _hit_count(self, event: BattleEvent) -> str:
        count = event.arg(1)
        if count == "1":
            return self.r.template("hitCountSingular")
        return substitute(self.r.template("hitCount"), NUMBER=count)

    def _waiting(self, event: BattleEvent) -> str:
        pokemon, target = event.arg(0), event.arg(1)
        return substitute(
            self.r.template("activate", "Water Pledge"),
            POKEMON=self.r.pokemon(pokemon),
            TARGET=self.r.pokemon(target),
        )

    def _anim(self, event: BattleEvent) -> str:
        return ""

    # ----------------------------------------------------------
    # Mega evolution and Z-power
    # ----------------------------------------------------------

    def _mega(self, event: BattleEvent) -> str:
        pokemon, species, item = event.arg(0), event.arg(1), event.arg(2)
        is_mega = event.command == CMD_MEGA
        namespace = ""
        category = event.command[len(MINOR_PREFIX):]
        if species == "Rayquaza":
            namespace = "dragonascent"
            category = "megaNoItem"
        if not namespace and is_mega and self.r.gen < 7:
            category = "megaGen6"
        if not item and is_mega:
            category = "megaNoItem"

        template = self.r.template(category, namespace)
        name = self.r.pokemon(pokemon)
        if is_mega:
            template += substitute(self.r.template("transformMega"), POKEMON=name, SPECIES=species)
        return substitute(
            template,
            POKEMON=name,
            ITEM=item,
            TRAINER=self.r.trainer(pokemon[:2]),
        )

    def _zpower(self, event: BattleEvent) -> str:
        return substitute(self.r.template("zPower"), POKEMON=self.r.pokemon(event.arg(0)))

    def _burst(self, event: BattleEvent) -> str:
        template = self.r.template("activate", "Ultranecrozium Z")
        return substitute(template, POKEMON=self.r.pokemon(event.arg(0)))

    def _zbroken(self, event: BattleEvent) -> str:
        return substitute(self.r.template("zBroken"), POKEMON=self.r.pokemon(event.arg(0)))
