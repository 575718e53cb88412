# recipe_planner/models/recipe.py
"""
Recipe, ingredient and meal category models.

Classes:
    MealCategory     - breakfast / lunch / dinner / snack
    Ingredient       - Priced ingredient with a nutrient declaration
    RecipeIngredient - Recipe-scoped quantity of an ingredient
    Recipe           - Versioned recipe with base servings and category flags
"""
import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any

from recipe_planner.models.nutrients import NutrientProfile


class MealCategory(Enum):
    """Meal category a recipe can be planned for."""
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"

    @classmethod
    def parse(cls, value) -> 'MealCategory':
        """
        Accept a MealCategory or its name/value in any case.

        Raises:
            ValueError: Unknown category
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value == text:
                return member
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown meal category '{value}' (expected one of: {valid})")

    def __str__(self) -> str:
        return self.value


@dataclass
class Ingredient:
    """
    A purchasable ingredient.

    Attributes:
        ingredient_id: Identity
        name: Display name, also the shopping-list aggregation key
        price_per_unit: Price of one price_unit, in the smallest currency unit
        unit_class: "mass" or "volume"
        quantity_unit: Unit the nutrient values are declared in ("" = class default)
        quantity: Reference amount of quantity_unit the nutrients describe
        price_unit: Unit the price refers to ("" = class default)
        nutrients: Nutrient values per `quantity` of `quantity_unit`
    """
    ingredient_id: int
    name: str
    price_per_unit: int = 0
    unit_class: str = "mass"
    quantity_unit: str = ""
    quantity: float = 1.0
    price_unit: str = ""
    nutrients: NutrientProfile = field(default_factory=NutrientProfile)


@dataclass
class RecipeIngredient:
    """An ingredient used by a recipe, in a recipe-specific quantity and unit."""
    ingredient: Ingredient
    quantity: float
    unit: str


@dataclass
class Recipe:
    """
    A versioned recipe.

    Several versions of one recipe_id may coexist; only the highest
    version is current (see recipe_planner.data.current_versions).
    """
    recipe_id: int
    title: str
    servings: int
    ingredients: List[RecipeIngredient] = field(default_factory=list)
    description: str = ""
    is_breakfast: bool = False
    is_lunch: bool = False
    is_dinner: bool = False
    is_snack: bool = False
    version: int = 1
    preparation_time: int = 0

    def matches(self, category) -> bool:
        """True if this recipe is flagged for the given meal category."""
        category = MealCategory.parse(category)
        return bool(getattr(self, f"is_{category.value}"))

    @property
    def categories(self) -> List[MealCategory]:
        return [c for c in MealCategory if getattr(self, f"is_{c.value}")]

    def snapshot(self) -> 'Recipe':
        """
        Deep copy for serving adjustment.

        Adjustment rewrites ingredient quantities in place, so every
        meal plan works on its own copy and the catalog's recipe
        stays untouched.
        """
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recipe_id": self.recipe_id,
            "version": self.version,
            "title": self.title,
            "servings": self.servings,
            "categories": [c.value for c in self.categories],
            "ingredients": [
                {"name": ri.ingredient.name, "quantity": ri.quantity, "unit": ri.unit}
                for ri in self.ingredients
            ],
        }

    def __repr__(self) -> str:
        return f"Recipe({self.recipe_id} v{self.version}: {self.title}, serves {self.servings})"
