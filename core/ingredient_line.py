"""
core/ingredient_line.py
────────────────────────────────────────────────────────────────────────
Turn one bulleted ingredient line into an `IngredientLine` triple.

Matchers are tried in order and a line nothing matches falls back to
"1 serving", so `parse_ingredient_line()` never raises:

1. "175g of Jasmine Rice"          → 175 · g      · Jasmine Rice
2. "2 pieces of sourdough bread"   → 2   · pieces · sourdough bread
3. "1 banana (100g)"               → 1   · unit   · banana (100g)
4. "some rice"                     → 1   · serving · some rice

Amounts are kept as typed: "175.5", ".5", "1/2" and "1 1/2" all count.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Iterable, Optional

from config import settings
from core.models.meal import IngredientLine

_LOG = logging.getLogger(__name__)

# ──────────────── constants ──────────────────
BARE_COUNT_UNIT = "unit"
FALLBACK_AMOUNT = "1"
FALLBACK_UNIT = "serving"

# abbreviations that may be glued to the number ("175g", "250ml")
ADJOINED_UNITS = frozenset({"g", "kg", "mg", "ml", "l", "oz", "lb", "lbs"})

# words (and abbreviations) written after a space ("2 cups", "6 oz")
SPACED_UNITS = frozenset({
    "g", "gram", "grams", "kg", "mg", "ml", "l", "litre", "litres", "liter", "liters",
    "oz", "ounce", "ounces", "lb", "lbs", "pound", "pounds",
    "cup", "cups", "tbsp", "tablespoon", "tablespoons", "tsp", "teaspoon", "teaspoons",
    "piece", "pieces", "slice", "slices", "scoop", "scoops", "serving", "servings",
    "can", "cans", "handful", "handfuls", "clove", "cloves", "pinch",
})

_NUMBER = r"(?P<amount>\d+\s+\d+/\d+|\d+/\d+|\d+(?:\.\d+)?|\.\d+)"
_OF = r"(?:of\s+)?"


@dataclass(frozen=True)
class UnitVocabulary:
    """The unit tokens the grammar recognises. Hashable, so patterns cache."""

    adjoined: frozenset[str] = ADJOINED_UNITS
    spaced: frozenset[str] = SPACED_UNITS

    def extended(self, spaced: Iterable[str] = (), adjoined: Iterable[str] = ()) -> "UnitVocabulary":
        return UnitVocabulary(
            adjoined=self.adjoined | _normalise(adjoined),
            spaced=self.spaced | _normalise(spaced),
        )


def _normalise(units: Iterable[str]) -> frozenset[str]:
    return frozenset(u.strip().lower() for u in units if u and u.strip())


@lru_cache
def default_vocabulary() -> UnitVocabulary:
    """Built-in units plus MEALPLAN_EXTRA_UNITS."""
    return UnitVocabulary().extended(spaced=settings.extra_units)


def _alternation(units: frozenset[str]) -> str:
    # longest first so "lbs" wins over "lb"
    return "|".join(re.escape(u) for u in sorted(units, key=lambda u: (-len(u), u)))


@lru_cache(maxsize=32)
def _patterns(vocab: UnitVocabulary) -> tuple[re.Pattern[str], re.Pattern[str]]:
    adjoined = re.compile(
        rf"^{_NUMBER}(?P<unit>{_alternation(vocab.adjoined)})(?![a-z])\.?\s*{_OF}(?P<name>\S.*)$",
        re.I,
    )
    spaced = re.compile(
        rf"^{_NUMBER}\s+(?P<unit>{_alternation(vocab.spaced)})(?![a-z])\.?\s+{_OF}(?P<name>\S.*)$",
        re.I,
    )
    return adjoined, spaced


_BARE_COUNT = re.compile(rf"^{_NUMBER}\s+(?P<name>\S.*)$")


# ─────────────────── matchers ───────────────────
Matcher = Callable[[str, UnitVocabulary], Optional[IngredientLine]]


def _match_adjoined_unit(line: str, vocab: UnitVocabulary) -> IngredientLine | None:
    m = _patterns(vocab)[0].match(line)
    if not m:
        return None
    return _triple(m.group("amount"), m.group("unit").lower(), m.group("name"))


def _match_spaced_unit(line: str, vocab: UnitVocabulary) -> IngredientLine | None:
    m = _patterns(vocab)[1].match(line)
    if not m:
        return None
    return _triple(m.group("amount"), m.group("unit").lower(), m.group("name"))


def _match_bare_count(line: str, vocab: UnitVocabulary) -> IngredientLine | None:
    m = _BARE_COUNT.match(line)
    if not m:
        return None
    return _triple(m.group("amount"), BARE_COUNT_UNIT, m.group("name"))


# tried top to bottom; the first hit wins
MATCHERS: tuple[Matcher, ...] = (
    _match_adjoined_unit,
    _match_spaced_unit,
    _match_bare_count,
)


def _triple(amount: str, unit: str, name: str) -> IngredientLine:
    return IngredientLine(amount=amount, unit=unit, ingredient=name.strip())


def _fallback(line: str) -> IngredientLine:
    _LOG.debug("No quantity in %r; using 1 serving", line)
    return IngredientLine(amount=FALLBACK_AMOUNT, unit=FALLBACK_UNIT, ingredient=line)


# ─────────────────── public ───────────────────
def parse_ingredient_line(line: str, units: UnitVocabulary | None = None) -> IngredientLine:
    vocab = units or default_vocabulary()
    text = line.strip()
    for matcher in MATCHERS:
        parsed = matcher(text, vocab)
        if parsed is not None:
            return parsed
    return _fallback(text)
