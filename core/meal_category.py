"""
core/meal_category.py
────────────────────────────────────────────────────────────────────────
Best-effort breakfast / lunch / dinner / snack guess for a meal.

`infer_category()` walks `CATEGORY_RULES` top to bottom over the lower-cased
text and returns the category of the first rule that fires.  A keyword hits
anywhere in the text, run-together words included ("scrambledeggs").  Words
listed in `MASKED_WORDS` are blanked out first, so "eggplant" and "veggie"
never count as eggs.

Precedence is breakfast > lunch > dinner > snack, so a block holding both
eggs and rice + chicken is breakfast.

Nothing matching → positional default: meal 1 breakfast, 2 lunch, 3 dinner,
4 breakfast again, …  The cycle never yields snack.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable

from core.models.meal import MealCategory

# ──────────────── keyword groups ──────────────────
BREAKFAST_WORDS = (
    "egg", "omelet", "toast", "oatmeal", "oats", "porridge", "cereal",
    "granola", "muesli", "pancake", "waffle", "bagel",
)
LUNCH_WORDS = (
    "sandwich", "wrap", "burrito", "pita", "panini", "quesadilla", "soup", "sub roll",
)
SALAD_WORDS = ("salad",)
LIGHT_PROTEINS = ("chicken", "turkey", "tuna", "tofu", "shrimp", "ham", "feta")
DINNER_WORDS = (
    "steak", "roast", "lasagna", "casserole", "curry", "stir fry", "stir-fry", "meatball",
)
STARCHES = ("rice", "potato", "pasta", "spaghetti", "noodle", "quinoa", "couscous")
MAIN_PROTEINS = (
    "beef", "chicken", "pork", "lamb", "turkey", "salmon", "cod", "fish",
    "tuna", "shrimp", "prawn", "tofu",
)
SNACK_WORDS = (
    "yogurt", "yoghurt", "almond", "cashew", "walnut", "nuts", "berries",
    "protein bar", "protein shake", "hummus", "trail mix", "apple", "rice cake",
)

# words that contain a keyword without meaning it
MASKED_WORDS = (
    "eggplant", "veggie", "goat", "graham", "pitaya", "licorice", "liquorice",
)
_MASK = re.compile("|".join(re.escape(w) for w in MASKED_WORDS))


@dataclass(frozen=True)
class CategoryRule:
    """Fires when every group has at least one keyword present in the text."""

    category: MealCategory
    groups: tuple[tuple[str, ...], ...]

    def matches(self, text: str) -> bool:
        return all(_group_pattern(group).search(text) for group in self.groups)


@lru_cache(maxsize=None)
def _group_pattern(group: tuple[str, ...]) -> re.Pattern[str]:
    return re.compile("|".join(re.escape(w) for w in group))


CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule("breakfast", (BREAKFAST_WORDS,)),
    CategoryRule("lunch", (LUNCH_WORDS,)),
    CategoryRule("lunch", (SALAD_WORDS, LIGHT_PROTEINS)),
    CategoryRule("dinner", (DINNER_WORDS,)),
    CategoryRule("dinner", (STARCHES, MAIN_PROTEINS)),
    CategoryRule("snack", (SNACK_WORDS,)),
)

_POSITIONAL: tuple[MealCategory, ...] = ("breakfast", "lunch", "dinner")


def positional_category(position: int) -> MealCategory:
    """1-based position → breakfast/lunch/dinner cycle."""
    return _POSITIONAL[(max(position, 1) - 1) % len(_POSITIONAL)]


def keyword_category(text: str, rules: Iterable[CategoryRule] = CATEGORY_RULES) -> MealCategory | None:
    low = _MASK.sub(" ", text.lower())
    for rule in rules:
        if rule.matches(low):
            return rule.category
    return None


def infer_category(text: str, position: int) -> MealCategory:
    return keyword_category(text) or positional_category(position)
