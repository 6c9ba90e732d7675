# tests/test_plan_assembly.py
from __future__ import annotations

import pytest

from core.meal_text_parser import parse_meal_entries
from core.models import MealEntry, MealNutrition
from core.plan_assembly import (
    ManualPlanError,
    assemble_manual_plan,
    category_image_url,
    split_daily_nutrition,
)

TEXT = """Meal 1
-175g of Jasmine Rice
-150g of Lean ground beef
-100g of cooked broccoli

Meal 2
-4 eggs
-2 pieces of sourdough bread
"""


# ── happy path ───────────────────────────────────────────────────────
def test_parsed_meals_become_a_plan():
    plan = assemble_manual_plan("Complete Flow Test Plan", parse_meal_entries(TEXT), image_base_url="/images")

    assert plan.plan_name == "Complete Flow Test Plan"
    assert plan.days == 1
    assert plan.meals_per_day == 2
    assert [m.image_url for m in plan.meals] == ["/images/dinner.jpg", "/images/breakfast.jpg"]
    assert len(plan.meals[0].ingredients) == 3


def test_payload_shape():
    payload = assemble_manual_plan("Plan", parse_meal_entries("Lunch: Soup"), fitness_goal="weight_loss").to_payload()

    assert set(payload) == {"planName", "meals", "days", "mealsPerDay", "fitnessGoal"}
    assert payload["fitnessGoal"] == "weight_loss"
    meal = payload["meals"][0]
    assert meal["mealName"] == "Soup"
    assert "imageUrl" in meal
    assert "ingredients" not in meal
    assert "manualNutrition" not in meal


def test_plan_name_is_trimmed():
    plan = assemble_manual_plan("  Cut phase  ", [MealEntry(mealName="Oatmeal", category="breakfast")])
    assert plan.plan_name == "Cut phase"


def test_category_counts():
    plan = assemble_manual_plan(
        "Counts",
        parse_meal_entries("Breakfast: Oats\nSnack: Apple\nSnack: Almonds"),
    )
    assert plan.category_counts() == {"breakfast": 1, "lunch": 0, "dinner": 0, "snack": 2}


# ── payload dicts from the client ───────────────────────────────────
def test_accepts_camel_case_dicts_and_keeps_their_image():
    meals = [
        {
            "mealName": "Test Meal",
            "category": "lunch",
            "ingredients": [{"ingredient": "chicken", "amount": "150", "unit": "g"}],
            "imageUrl": "https://cdn.example.com/custom.jpg",
        },
        {"mealName": "Apple", "category": "snack"},
    ]
    plan = assemble_manual_plan("Retrieval Test Plan", meals, image_base_url="/img/")

    assert plan.meals[0].image_url == "https://cdn.example.com/custom.jpg"
    assert plan.meals[0].ingredients[0].amount == "150"
    assert plan.meals[1].image_url == "/img/snack.jpg"


def test_meal_nutrition_from_dict_is_kept():
    meals = [{"mealName": "Shake", "category": "snack", "manualNutrition": {"calories": 250}}]
    plan = assemble_manual_plan("Shakes", meals)
    assert plan.meals[0].manual_nutrition == MealNutrition(calories=250)


def test_bad_category_is_rejected_by_model():
    with pytest.raises(ValueError):
        assemble_manual_plan("Plan", [{"mealName": "Brunch", "category": "brunch"}])


# ── validation ──────────────────────────────────────────────────────
@pytest.mark.parametrize("name", ["", "   ", None])
def test_plan_name_required(name):
    with pytest.raises(ManualPlanError):
        assemble_manual_plan(name, [MealEntry(mealName="Test", category="lunch")])


def test_meals_required():
    with pytest.raises(ManualPlanError, match="at least one meal"):
        assemble_manual_plan("Test Plan", [])


# ── nutrition split ─────────────────────────────────────────────────
def test_daily_nutrition_split_evenly():
    daily = MealNutrition(calories=2000, protein=150, carbs=None, fat=65)
    share = split_daily_nutrition(daily, 4)
    assert share == MealNutrition(calories=500, protein=38, carbs=None, fat=16)


def test_zero_daily_macro_counts_as_unset():
    share = split_daily_nutrition(MealNutrition(calories=1800, protein=0, fat=0), 3)
    assert share == MealNutrition(calories=600, protein=None, carbs=None, fat=None)


def test_daily_nutrition_overrides_per_meal_values():
    meals = [
        {"mealName": "A", "category": "breakfast", "manualNutrition": {"calories": 900}},
        {"mealName": "B", "category": "lunch"},
    ]
    plan = assemble_manual_plan("Split", meals, daily_nutrition=MealNutrition(calories=1801))
    assert [m.manual_nutrition.calories for m in plan.meals] == [901, 901]


def test_split_needs_meals():
    with pytest.raises(ManualPlanError):
        split_daily_nutrition(MealNutrition(calories=100), 0)


# ── images ──────────────────────────────────────────────────────────
def test_category_image_url_strips_trailing_slash():
    assert category_image_url("dinner", "https://cdn.example.com/meals/") == "https://cdn.example.com/meals/dinner.jpg"
