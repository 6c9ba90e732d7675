"""Re-export the meal models for easy imports."""

from .meal import (
    MEAL_CATEGORIES,
    IngredientLine,
    ManualMealPlan,
    MealCategory,
    MealEntry,
    MealNutrition,
    PlannedMeal,
)

__all__ = [
    "MEAL_CATEGORIES",
    "IngredientLine",
    "ManualMealPlan",
    "MealCategory",
    "MealEntry",
    "MealNutrition",
    "PlannedMeal",
]
