# recipe_planner/shopping/shopping_list.py
"""
Shopping list aggregation over planned meals.

Sums every ingredient across a set of meal plans, scaled to each
plan's servings and expressed in the ingredient's default unit. Each
line is priced in the ingredient's price unit, in the smallest currency
unit.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

import pandas as pd

from recipe_planner.errors import UnsupportedUnitClass
from recipe_planner.models import MealPlan
from recipe_planner.models.meal_plan import validate_servings
from recipe_planner.units import UNIT_CLASSES


@dataclass
class ShoppingItem:
    """One aggregated ingredient line."""
    name: str
    quantity: float
    unit: str
    cost: int


@dataclass
class ShoppingList:
    """Aggregated items plus the total cost."""
    items: List[ShoppingItem] = field(default_factory=list)
    total_cost: int = 0

    def to_dataframe(self) -> pd.DataFrame:
        """Items as a DataFrame sorted by name."""
        df = pd.DataFrame(
            [vars(item) for item in self.items],
            columns=["name", "quantity", "unit", "cost"],
        )
        return df.sort_values("name").reset_index(drop=True)


class ShoppingListBuilder:
    """Builds a ShoppingList from planned meals."""

    def __init__(self, converter):
        self.converter = converter

    def build(self, meal_plans: Iterable[MealPlan]) -> ShoppingList:
        """
        Aggregate ingredients across meal plans by ingredient name.

        Each plan is scaled by plan.servings / plan.recipe.servings, so
        both raw and already-adjusted plans are handled.

        Raises:
            InvalidServings: A plan or its recipe has servings <= 0
            UnsupportedUnitClass: Ingredient unit class not mass/volume
            UnitConversionError: Ingredient unit cannot be converted
        """
        items: Dict[str, ShoppingItem] = {}
        total_cost = 0

        for plan in meal_plans:
            ratio = validate_servings(plan.servings, plan.recipe.servings)

            for recipe_ingredient in plan.recipe.ingredients:
                ingredient = recipe_ingredient.ingredient
                if ingredient.unit_class not in UNIT_CLASSES:
                    raise UnsupportedUnitClass(ingredient.unit_class, ingredient.name)

                default_unit = self.converter.default_unit(ingredient.unit_class)
                converted = self.converter.convert(
                    recipe_ingredient.quantity,
                    recipe_ingredient.unit,
                    default_unit,
                    ingredient.unit_class,
                )
                quantity = converted * ratio

                price_unit = ingredient.price_unit or default_unit
                priced = self.converter.convert(
                    quantity, default_unit, price_unit, ingredient.unit_class
                )
                cost = int(priced * ingredient.price_per_unit)
                total_cost += cost

                item = items.get(ingredient.name)
                if item is None:
                    items[ingredient.name] = ShoppingItem(
                        name=ingredient.name,
                        quantity=quantity,
                        unit=default_unit,
                        cost=cost,
                    )
                else:
                    item.quantity += quantity
                    item.cost += cost

        return ShoppingList(items=list(items.values()), total_cost=total_cost)
