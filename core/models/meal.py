from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# the four slots a manual plan can use
MealCategory = Literal["breakfast", "lunch", "dinner", "snack"]

MEAL_CATEGORIES: tuple[MealCategory, ...] = ("breakfast", "lunch", "dinner", "snack")


class IngredientLine(BaseModel):
    amount: str             # number as typed: "175", "175.5", "1/2"
    unit: str               # "g" / "pieces" / "unit" / "serving" ...
    ingredient: str

    model_config = ConfigDict(frozen=True)


class MealEntry(BaseModel):
    """One parsed meal. `ingredients` is None for simple-format lines."""

    meal_name: str = Field(..., alias="mealName")
    category: MealCategory
    ingredients: list[IngredientLine] | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class MealNutrition(BaseModel):
    calories: int | None = None
    protein: int | None = None
    carbs: int | None = None
    fat: int | None = None

    model_config = ConfigDict(frozen=True)


class PlannedMeal(MealEntry):
    image_url: str = Field(..., alias="imageUrl")
    manual_nutrition: MealNutrition | None = Field(None, alias="manualNutrition")


class ManualMealPlan(BaseModel):
    plan_name: str = Field(..., alias="planName")
    meals: list[PlannedMeal]
    days: int = 1
    meals_per_day: int = Field(..., alias="mealsPerDay")
    fitness_goal: str = Field(..., alias="fitnessGoal")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def category_counts(self) -> dict[str, int]:
        counts = {c: 0 for c in MEAL_CATEGORIES}
        for meal in self.meals:
            counts[meal.category] += 1
        return counts

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
