# recipe_planner/data/recipe_catalog.py
"""
Recipe catalog contract and in-memory implementation.

The planner only needs one query from the catalog: the current
recipes for a meal category. An empty result is reported with
RecipeNotFound so it cannot be mistaken for a backend failure.
"""
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List

from recipe_planner.errors import RecipeNotFound
from recipe_planner.models import MealCategory, Recipe


def current_versions(recipes: Iterable[Recipe]) -> List[Recipe]:
    """
    Keep only the highest version of each recipe_id.

    Order follows first appearance of each recipe_id.
    """
    latest: Dict[int, Recipe] = {}
    for recipe in recipes:
        held = latest.get(recipe.recipe_id)
        if held is None or recipe.version > held.version:
            latest[recipe.recipe_id] = recipe
    return list(latest.values())


class RecipeCatalog(ABC):
    """
    Read-only source of candidate recipes.

    Implementations hold no per-call mutable state and may be shared
    between concurrent callers.
    """

    @abstractmethod
    def get_by_category(self, category) -> List[Recipe]:
        """
        Current recipes flagged for a meal category.

        Args:
            category: MealCategory or its string value

        Returns:
            Non-empty list of recipes

        Raises:
            RecipeNotFound: No recipe matches the category
        """
        pass


class InMemoryRecipeCatalog(RecipeCatalog):
    """Catalog over a fixed list of recipes (all versions allowed)."""

    def __init__(self, recipes: Iterable[Recipe]):
        self._recipes = list(recipes)

    def all_recipes(self) -> List[Recipe]:
        """Current version of every recipe."""
        return current_versions(self._recipes)

    def get_by_category(self, category) -> List[Recipe]:
        category = MealCategory.parse(category)
        matches = [r for r in self.all_recipes() if r.matches(category)]
        if not matches:
            raise RecipeNotFound(category.value)
        return matches
