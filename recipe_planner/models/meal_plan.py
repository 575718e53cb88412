# recipe_planner/models/meal_plan.py
"""
Meal plan candidate and planning parameter models.

A MealPlan assigns one recipe to one meal slot at a requested serving
count. It carries its own snapshot of the recipe whose ingredient
quantities are rewritten by adjust_servings() to the requested
servings, in each ingredient's default unit.

Classes:
    MealPlan       - One candidate (and, after search, one planned meal)
    MealPlanParams - Targets, bounds and servings for a planning run
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Dict, Any

from recipe_planner.errors import InvalidServings, EmptyRecipe, UnsupportedUnitClass
from recipe_planner.models.nutrients import NutrientProfile
from recipe_planner.models.recipe import Recipe, MealCategory
from recipe_planner.units import UNIT_CLASSES


def validate_servings(plan_servings: int, recipe_servings: int) -> float:
    """
    Check both serving counts and return the scaling ratio.

    Args:
        plan_servings: Servings requested for the meal
        recipe_servings: Servings the recipe quantities are written for

    Returns:
        plan_servings / recipe_servings

    Raises:
        InvalidServings: Either count is zero or negative
    """
    if plan_servings is None or plan_servings <= 0:
        raise InvalidServings(f"Invalid number of servings in meal plan: {plan_servings}")
    if recipe_servings is None or recipe_servings <= 0:
        raise InvalidServings(f"Invalid recipe servings: {recipe_servings}")
    return plan_servings / recipe_servings


@dataclass
class MealPlan:
    """
    A recipe planned for one meal at a given serving count.

    Attributes:
        recipe: Snapshot of the recipe (adjusted in place)
        servings: Requested servings
        recipe_id: Identity of the source recipe
        recipe_version: Version of the source recipe
        meal_time: When the meal is planned (set on emitted results)
    """
    recipe: Recipe
    servings: int
    recipe_id: Optional[int] = None
    recipe_version: Optional[int] = None
    meal_time: Optional[datetime] = None

    def __post_init__(self):
        if self.recipe_id is None:
            self.recipe_id = self.recipe.recipe_id
        if self.recipe_version is None:
            self.recipe_version = self.recipe.version

    @classmethod
    def from_recipe(cls, recipe: Recipe, servings: int, converter) -> 'MealPlan':
        """
        Build a serving-adjusted meal plan from a catalog recipe.

        The catalog recipe is never modified; the plan works on a
        snapshot.

        Raises:
            InvalidServings, EmptyRecipe, UnsupportedUnitClass,
            UnitConversionError: see adjust_servings()
        """
        plan = cls(recipe=recipe.snapshot(), servings=servings)
        plan.adjust_servings(converter)
        return plan

    def adjust_servings(self, converter) -> None:
        """
        Scale the recipe snapshot to this plan's servings.

        Each ingredient quantity is converted to its unit class's
        default unit and multiplied by servings / recipe.servings.
        Afterwards recipe.servings equals self.servings, so
        re-applying is a no-op.

        Args:
            converter: UnitConverter

        Raises:
            InvalidServings: Zero or negative servings on plan or recipe
            EmptyRecipe: Recipe has no ingredients
            UnsupportedUnitClass: Ingredient unit class is not mass/volume
            UnitConversionError: No rate for an ingredient's unit
        """
        if converter is None:
            raise ValueError("Unit converter is required to adjust servings")

        ratio = validate_servings(self.servings, self.recipe.servings)

        if not self.recipe.ingredients:
            raise EmptyRecipe(
                f"Recipe {self.recipe.recipe_id} ('{self.recipe.title}') has no ingredients"
            )

        # Convert everything first so a failure leaves the snapshot untouched
        adjusted = []
        for recipe_ingredient in self.recipe.ingredients:
            ingredient = recipe_ingredient.ingredient
            if ingredient.unit_class not in UNIT_CLASSES:
                raise UnsupportedUnitClass(ingredient.unit_class, ingredient.name)

            default_unit = converter.default_unit(ingredient.unit_class)
            converted = converter.convert(
                recipe_ingredient.quantity,
                recipe_ingredient.unit,
                default_unit,
                ingredient.unit_class,
            )
            adjusted.append((converted * ratio, default_unit))

        for recipe_ingredient, (quantity, unit) in zip(self.recipe.ingredients, adjusted):
            recipe_ingredient.quantity = quantity
            recipe_ingredient.unit = unit

        self.recipe.servings = self.servings

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recipe_id": self.recipe_id,
            "recipe_version": self.recipe_version,
            "title": self.recipe.title,
            "servings": self.servings,
            "meal_time": self.meal_time.isoformat() if self.meal_time else None,
            "ingredients": self.recipe.to_dict()["ingredients"],
        }

    def __repr__(self) -> str:
        when = f" @ {self.meal_time:%Y-%m-%d %H:%M}" if self.meal_time else ""
        return f"MealPlan({self.recipe.title} x{self.servings}{when})"


@dataclass
class MealPlanParams:
    """
    Targets and bounds for one planning request.

    The budget fields are carried for callers but are not part of the
    fitness calculation.
    """
    servings: int
    target: NutrientProfile = field(default_factory=NutrientProfile)
    minimum: NutrientProfile = field(default_factory=NutrientProfile)
    maximum: NutrientProfile = field(default_factory=NutrientProfile)
    meal_category: Optional[MealCategory] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    target_budget: float = 0.0
    max_budget: float = 0.0

    def __post_init__(self):
        if self.meal_category is not None:
            self.meal_category = MealCategory.parse(self.meal_category)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MealPlanParams':
        """
        Build from the 'params' block of the settings file.

        Expected keys: servings, target, min, max (nutrient dicts),
        target_budget, max_budget, and optionally meal_category.

        Raises:
            ValueError: servings missing or not an integer
        """
        servings = data.get("servings")
        if not isinstance(servings, int) or isinstance(servings, bool):
            raise ValueError(f"params.servings must be an integer, got {servings!r}")

        return cls(
            servings=servings,
            target=NutrientProfile.from_dict(data.get("target", {})),
            minimum=NutrientProfile.from_dict(data.get("min", {})),
            maximum=NutrientProfile.from_dict(data.get("max", {})),
            meal_category=data.get("meal_category"),
            target_budget=float(data.get("target_budget", 0.0)),
            max_budget=float(data.get("max_budget", 0.0)),
        )
