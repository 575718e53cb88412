"""
Shared fixtures for recipe planner tests.
"""
import pytest

from recipe_planner.data import InMemoryRecipeCatalog
from recipe_planner.generators import PlannerConfig
from recipe_planner.models import (
    Ingredient, MealPlanParams, NutrientProfile, Recipe, RecipeIngredient,
)
from recipe_planner.units import UnitConverter


def make_ingredient(ingredient_id=1, name="Flour", price=100, unit_class="mass",
                    quantity_unit="", quantity=1.0, price_unit="", **nutrients):
    """Ingredient with nutrients declared per `quantity` of `quantity_unit`."""
    return Ingredient(
        ingredient_id=ingredient_id,
        name=name,
        price_per_unit=price,
        unit_class=unit_class,
        quantity_unit=quantity_unit,
        quantity=quantity,
        price_unit=price_unit,
        nutrients=NutrientProfile(**nutrients),
    )


def make_recipe(recipe_id=1, title="Recipe", servings=2, ingredients=None,
                version=1, **flags):
    """Recipe with (ingredient, quantity, unit) triples."""
    if ingredients is None:
        ingredients = [(make_ingredient(), 1.0, "kg")]
    return Recipe(
        recipe_id=recipe_id,
        title=title,
        servings=servings,
        ingredients=[RecipeIngredient(ingredient=i, quantity=q, unit=u) for i, q, u in ingredients],
        version=version,
        **flags,
    )


@pytest.fixture
def converter():
    return UnitConverter("kg", "l")


@pytest.fixture
def wide_params():
    """Params with a wide band so every penalty is |target - value|."""
    return MealPlanParams(
        servings=2,
        target=NutrientProfile(),
        minimum=NutrientProfile(),
        maximum=NutrientProfile(
            calories=1e9, protein=1e9, fat=1e9, carbs=1e9, fiber=1e9, sugar=1e9
        ),
    )


@pytest.fixture
def breakfast_recipes():
    """Three breakfast recipes with distinct calorie totals per serving."""
    recipes = []
    for recipe_id, calories in [(1, 100.0), (2, 300.0), (3, 500.0)]:
        ingredient = make_ingredient(
            ingredient_id=recipe_id, name=f"Ingredient {recipe_id}", price=0,
            calories=calories,
        )
        recipes.append(
            make_recipe(
                recipe_id=recipe_id, title=f"Breakfast {recipe_id}", servings=1,
                ingredients=[(ingredient, 1.0, "kg")], is_breakfast=True,
            )
        )
    return recipes


@pytest.fixture
def catalog(breakfast_recipes):
    lunch = make_recipe(recipe_id=10, title="Lunch", is_lunch=True)
    return InMemoryRecipeCatalog(breakfast_recipes + [lunch])


@pytest.fixture
def small_config():
    return PlannerConfig(population_size=8, max_generations=20, max_workers=2, seed=42)
