"""
BattleText — battletext/templates.py
Template store and cascading template resolution.
=================================================
Version:     0.1
Stack:       Python 3.14 | dataclasses | enum
Status:      Production-ready.

Architecture notes
------------------
- The store is namespace id -> category -> entry. Namespace "default" holds
  the generic categories; every other namespace is an effect, item,
  ability, move or stat id.
- Raw entries are parsed into tagged values once, when the store is built:
      "text"        -> TemplateText
      ".category"   -> CategoryRedirect   (same namespace, other category)
      "#namespace"  -> NamespaceRedirect  (other namespace, same category)
      ""            -> Suppressed         (stop, never fall back)
- OWN and NODEFAULT are namespace sentinels passed to resolve(), not data.
- The store is read-only for its whole lifetime.

Open Questions
--------------
  [ ] Redirect cycles: chains are followed without a limit. A cyclic store
      never resolves. Treated as a data contract, not guarded here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Mapping, Optional, Union

from battletext.effects import effect_id

DEFAULT_NAMESPACE = "default"


# ============================================================
# TEMPLATE ENTRIES
# ============================================================

@dataclass(frozen=True)
class TemplateText:
    text: str


@dataclass(frozen=True)
class CategoryRedirect:
    category: str


@dataclass(frozen=True)
class NamespaceRedirect:
    namespace: str


@dataclass(frozen=True)
class Suppressed:
    pass


TemplateEntry = Union[TemplateText, CategoryRedirect, NamespaceRedirect, Suppressed]

SUPPRESSED = Suppressed()


def parse_entry(raw: str) -> TemplateEntry:
    if not raw:
        return SUPPRESSED
    if raw.startswith("."):
        return CategoryRedirect(raw[1:])
    if raw.startswith("#"):
        return NamespaceRedirect(raw[1:])
    return TemplateText(raw)


# ============================================================
# NAMESPACE SENTINELS
# ============================================================

class Namespace(Enum):
    OWN = "OWN"              # use the category's "-Own" variant from default
    NODEFAULT = "NODEFAULT"  # stop here, no default fallback


OWN = Namespace.OWN
NODEFAULT = Namespace.NODEFAULT

NamespaceRef = Union[str, Namespace, None]


# ============================================================
# TEMPLATE STORE
# ============================================================

class TemplateStore:
    """Read-only namespace -> category -> TemplateEntry mapping."""

    def __init__(self, namespaces: Mapping[str, Mapping[str, str]]) -> None:
        self._entries: Dict[str, Dict[str, TemplateEntry]] = {
            namespace: {category: parse_entry(raw) for category, raw in categories.items()}
            for namespace, categories in namespaces.items()
        }

    def __contains__(self, namespace: str) -> bool:
        return namespace in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def entry(self, namespace: str, category: str) -> Optional[TemplateEntry]:
        return self._entries.get(namespace, {}).get(category)

    def has(self, namespace: str, category: str) -> bool:
        return category in self._entries.get(namespace, {})

    def text(self, namespace: str, category: str) -> str:
        """Literal text of an entry without following redirects, or ""."""
        entry = self.entry(namespace, category)
        if isinstance(entry, TemplateText):
            return entry.text
        return ""

    def default_text(self, category: str) -> str:
        return self.text(DEFAULT_NAMESPACE, category)


# ============================================================
# RESOLVER
# ============================================================

class TemplateResolver:
    """
    Picks the most specific template for a category.

    Usage:
        resolver = TemplateResolver(store)
        resolver.resolve("damage", "item: Life Orb", NODEFAULT)

    Namespaces are tried in order. The first one holding the category wins,
    even when its entry resolves to nothing. Falls back to "default" only
    when no namespace held the category and no NODEFAULT was reached.
    Resolved templates carry a trailing newline; misses are "".
    """

    def __init__(self, store: TemplateStore) -> None:
        self.store = store

    def resolve(self, category: str, *namespaces: NamespaceRef) -> str:
        for namespace in namespaces:
            if not namespace:
                continue
            if namespace is OWN:
                return self._line(self.store.entry(DEFAULT_NAMESPACE, category + "Own"))
            if namespace is NODEFAULT:
                return ""
            namespace_id = effect_id(namespace)
            if self.store.has(namespace_id, category):
                return self._follow(namespace_id, category)

        if self.store.has(DEFAULT_NAMESPACE, category):
            return self._follow(DEFAULT_NAMESPACE, category)
        return ""

    def _follow(self, namespace_id: str, category: str) -> str:
        entry = self.store.entry(namespace_id, category)
        while isinstance(entry, (CategoryRedirect, NamespaceRedirect)):
            if isinstance(entry, CategoryRedirect):
                category = entry.category
            else:
                namespace_id = entry.namespace
            entry = self.store.entry(namespace_id, category)
        return self._line(entry)

    @staticmethod
    def _line(entry: Optional[TemplateEntry]) -> str:
        if isinstance(entry, TemplateText):
            return entry.text + "\n"
        return ""
