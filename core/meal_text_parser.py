"""
core/meal_text_parser.py
────────────────────────────────────────────────────────────────────────
Free-text meal plan → ordered list of `MealEntry`.

Two input shapes are understood:

Structured                      Simple
----------                      ------
Meal 1                          Breakfast: Oatmeal with berries
-175g of Jasmine Rice           Lunch: Chicken salad
-150g of Lean ground beef       Grilled salmon and rice
•100g of cooked broccoli

`detect_format()` picks the shape, `parse_meal_entries()` dispatches.
Everything here is pure: no I/O, no shared state, and no exception for any
text a trainer can paste.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Iterable, Sequence

from core.ingredient_line import UnitVocabulary, parse_ingredient_line
from core.meal_category import infer_category
from core.models.meal import MealCategory, MealEntry

_LOG = logging.getLogger(__name__)

_HEADER = re.compile(r"^\s*meal\s*#?\s*\d+\b", re.I)
_BARE_HEADER = re.compile(r"^\s*meal\s*#?\s*\d+\s*[:.)-]?\s*$", re.I)
_BULLET = re.compile(r"^\s*[-•]\s*(?P<body>\S.*)$")
_PREFIX = re.compile(r"^\s*(?P<category>breakfast|lunch|dinner|snack)\s*:\s*(?P<rest>.*)$", re.I)

NAME_INGREDIENTS = 3


class MealTextFormat(str, Enum):
    SIMPLE = "simple"
    STRUCTURED = "structured"


# ─────────────────────────── segmentation ────────────────────────── #
def _split_blocks(lines: Iterable[str]) -> list[list[str]]:
    """Lines under each `Meal N` header; header and preamble are dropped."""
    blocks: list[list[str]] = []
    current: list[str] | None = None
    for line in lines:
        if _HEADER.match(line):
            current = []
            blocks.append(current)
        elif current is not None:
            current.append(line)
    return blocks


def _bullet_bodies(block: Iterable[str]) -> list[str]:
    bodies = []
    for line in block:
        m = _BULLET.match(line)
        if m:
            bodies.append(m.group("body").strip())
    return bodies


def detect_format(text: str) -> MealTextFormat | None:
    """None for blank input, STRUCTURED when some header has a bullet under it."""
    if not text or not text.strip():
        return None
    for block in _split_blocks(text.splitlines()):
        if _bullet_bodies(block):
            return MealTextFormat.STRUCTURED
    return MealTextFormat.SIMPLE


# ────────────────────────────── naming ───────────────────────────── #
def _capitalise(name: str) -> str:
    return name[:1].upper() + name[1:]


def name_from_ingredients(names: Sequence[str]) -> str:
    """
    English list of the first three names:
    "A" · "A and B" · "A, B, and C".
    """
    parts = [_capitalise(n.strip()) for n in names[:NAME_INGREDIENTS]]
    if len(parts) <= 1:
        return "".join(parts)
    if len(parts) == 2:
        return f"{parts[0]} and {parts[1]}"
    return f"{parts[0]}, {parts[1]}, and {parts[2]}"


# ───────────────────────────── parsers ───────────────────────────── #
def parse_structured(text: str, units: UnitVocabulary | None = None) -> list[MealEntry]:
    entries: list[MealEntry] = []
    for number, block in enumerate(_split_blocks(text.splitlines()), start=1):
        ingredients = [parse_ingredient_line(body, units) for body in _bullet_bodies(block)]
        if not ingredients:
            _LOG.debug("Skipping meal block %d: no ingredient lines", number)
            continue

        names = [i.ingredient for i in ingredients]
        entries.append(
            MealEntry(
                meal_name=name_from_ingredients(names),
                category=infer_category("\n".join(names), len(entries) + 1),
                ingredients=ingredients,
            )
        )
    return entries


def _split_prefix(line: str) -> tuple[MealCategory | None, str]:
    m = _PREFIX.match(line)
    if not m:
        return None, line.strip()
    return m.group("category").lower(), m.group("rest").strip()  # type: ignore[return-value]


def parse_simple(text: str) -> list[MealEntry]:
    entries: list[MealEntry] = []
    for line in text.splitlines():
        # a bare "Meal N" header is never a meal of its own
        if not line.strip() or _BARE_HEADER.match(line):
            continue
        category, name = _split_prefix(line)
        if not name:
            _LOG.debug("Skipping %r: category prefix without a meal", line.strip())
            continue
        entries.append(
            MealEntry(
                meal_name=name,
                category=category or infer_category(name, len(entries) + 1),
            )
        )
    return entries


# ──────────────────────────── entrypoint ─────────────────────────── #
def parse_meal_entries(text: str, units: UnitVocabulary | None = None) -> list[MealEntry]:
    fmt = detect_format(text)
    if fmt is None:
        return []

    if fmt is MealTextFormat.STRUCTURED:
        entries = parse_structured(text, units)
    else:
        entries = parse_simple(text)
    _LOG.debug("Parsed %d meal(s) from %s text", len(entries), fmt.value)
    return entries
