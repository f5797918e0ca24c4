# quest/debug_logger.py

from __future__ import annotations
from typing import Iterable

# ----------------------------------------------------------------------
# Core debug toggles
# ----------------------------------------------------------------------

DEBUG_ENABLED: bool = True

ALL_CATEGORIES: frozenset[str] = frozenset(
    {"scene", "interact", "inventory", "dialogue", "timer"}
)

ENABLED_CATEGORIES: set[str] = {
    "scene",
    "interact",
    "inventory",
    "dialogue",
}

def enable_categories(*cats: str) -> None:
    ENABLED_CATEGORIES.update(cats)

def disable_categories(*cats: str) -> None:
    for c in cats:
        ENABLED_CATEGORIES.discard(c)

def set_categories(cats: Iterable[str]) -> None:
    global ENABLED_CATEGORIES
    ENABLED_CATEGORIES = set(cats)

def is_enabled(category: str) -> bool:
    return DEBUG_ENABLED and category in ENABLED_CATEGORIES

def log(category: str, message: str) -> None:
    if not is_enabled(category):
        return
    print(f"[QUEST {category.upper()}] {message}")
