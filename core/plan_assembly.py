"""
core/plan_assembly.py
────────────────────────────────────────────────────────────────────────
Parsed meals + plan name → `ManualMealPlan` ready for the host app to store.

* every meal gets an image reference (kept if the trainer supplied one,
  otherwise the category image under `settings.image_base_url`)
* a manual plan is a single day holding all meals
* optional daily nutrition totals are split evenly across the meals
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Mapping

from config import settings
from core.models.meal import ManualMealPlan, MealEntry, MealNutrition, PlannedMeal

_LOG = logging.getLogger(__name__)

MACROS = ("calories", "protein", "carbs", "fat")


class ManualPlanError(ValueError):
    """The plan cannot be assembled from what the trainer sent."""


def category_image_url(category: str, base_url: str | None = None) -> str:
    base = (base_url if base_url is not None else settings.image_base_url).rstrip("/")
    return f"{base}/{category}.jpg"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def split_daily_nutrition(daily: MealNutrition, meal_count: int) -> MealNutrition:
    """Even per-meal share of each daily macro; unset or zero macros stay unset."""
    if meal_count < 1:
        raise ManualPlanError("cannot split nutrition across zero meals")
    share = {}
    for macro in MACROS:
        total = getattr(daily, macro)
        share[macro] = _round_half_up(total / meal_count) if total else None
    return MealNutrition(**share)


def _as_entry(meal: MealEntry | Mapping) -> MealEntry:
    # payload dicts (camelCase or snake_case) are accepted as well
    if isinstance(meal, MealEntry):
        return meal
    return MealEntry.model_validate(meal)


def _extras(meal: MealEntry | Mapping) -> tuple[str | None, MealNutrition | None]:
    """Image and nutrition the trainer already attached, if any."""
    if isinstance(meal, Mapping):
        image = meal.get("imageUrl") or meal.get("image_url")
        nutrition = meal.get("manualNutrition") or meal.get("manual_nutrition")
        if nutrition is not None and not isinstance(nutrition, MealNutrition):
            nutrition = MealNutrition.model_validate(nutrition)
        return image, nutrition
    return getattr(meal, "image_url", None), getattr(meal, "manual_nutrition", None)


def assemble_manual_plan(
    plan_name: str,
    meals: Iterable[MealEntry | Mapping],
    *,
    fitness_goal: str | None = None,
    daily_nutrition: MealNutrition | None = None,
    image_base_url: str | None = None,
) -> ManualMealPlan:
    name = (plan_name or "").strip()
    if not name:
        _LOG.warning("Rejected manual plan: missing plan name")
        raise ManualPlanError("plan name is required")

    raw = list(meals)
    if not raw:
        _LOG.warning("Rejected manual plan %r: no meals", name)
        raise ManualPlanError("at least one meal is required")
    entries = [_as_entry(m) for m in raw]

    shared = None
    if daily_nutrition is not None:
        shared = split_daily_nutrition(daily_nutrition, len(entries))

    planned: list[PlannedMeal] = []
    for meal, entry in zip(raw, entries):
        image_url, own_nutrition = _extras(meal)
        image_url = image_url or category_image_url(entry.category, image_base_url)
        nutrition = shared if shared is not None else own_nutrition
        planned.append(
            PlannedMeal(
                meal_name=entry.meal_name,
                category=entry.category,
                ingredients=entry.ingredients,
                image_url=image_url,
                manual_nutrition=nutrition,
            )
        )

    plan = ManualMealPlan(
        plan_name=name,
        meals=planned,
        days=1,
        meals_per_day=len(planned),
        fitness_goal=fitness_goal or settings.default_fitness_goal,
    )
    _LOG.info("Assembled manual plan %r with %d meal(s)", name, len(planned))
    return plan
