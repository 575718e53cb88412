# recipe_planner/data/recipes_manager.py
"""
CSV-backed recipe catalog.

Loads three CSV files with pandas:

    ingredients.csv         id,name,price_per_unit,unit_class,quantity,
                            quantity_unit,price_unit,calories,protein,fat,
                            carbs,fiber,sugar
    recipes.csv             id,version,title,description,servings,
                            preparation_time,is_breakfast,is_lunch,
                            is_dinner,is_snack
    recipe_ingredients.csv  recipe_id,version,ingredient_id,quantity,unit

Only the highest version of each recipe id is kept. The
recipe_ingredients 'version' column is optional; without it, rows
apply to whichever version of the recipe is current.
"""
import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from recipe_planner.data.recipe_catalog import RecipeCatalog
from recipe_planner.errors import RecipeNotFound
from recipe_planner.models import (
    Ingredient, MealCategory, NutrientProfile, NUTRIENT_FIELDS, Recipe, RecipeIngredient,
)

logger = logging.getLogger(__name__)

INGREDIENT_COLUMNS = ["id", "name", "price_per_unit", "unit_class"]
RECIPE_COLUMNS = ["id", "title", "servings"]
RECIPE_INGREDIENT_COLUMNS = ["recipe_id", "ingredient_id", "quantity", "unit"]

_TRUE_STRINGS = {"1", "true", "yes", "y", "t"}


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    if pd.isna(value):
        return False
    return bool(value)


def _as_str(value, default: str = "") -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return default
    return str(value).strip()


def _as_int(value, default: int = 0) -> int:
    if value is None or pd.isna(value):
        return default
    return int(value)


def _require_columns(df: pd.DataFrame, required: List[str], filepath: Path) -> None:
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"{filepath.name} is missing columns: {', '.join(missing)}")


class CsvRecipeCatalog(RecipeCatalog):
    """
    Recipe catalog read from CSV files.

    Files are loaded lazily on first query and cached; call load()
    again to pick up changes on disk.
    """

    def __init__(self, ingredients_file: Path, recipes_file: Path, recipe_ingredients_file: Path):
        """
        Args:
            ingredients_file: Path to ingredients CSV
            recipes_file: Path to recipes CSV
            recipe_ingredients_file: Path to recipe/ingredient association CSV
        """
        self.ingredients_file = Path(ingredients_file)
        self.recipes_file = Path(recipes_file)
        self.recipe_ingredients_file = Path(recipe_ingredients_file)
        self._recipes: Optional[List[Recipe]] = None

    # =========================================================================
    # Loading
    # =========================================================================

    def load(self) -> List[Recipe]:
        """
        Read all three files and build the current recipes.

        Returns:
            Current version of every recipe

        Raises:
            FileNotFoundError: A file does not exist
            ValueError: A file lacks required columns or references
                        an unknown ingredient
        """
        for filepath in (self.ingredients_file, self.recipes_file, self.recipe_ingredients_file):
            if not filepath.exists():
                raise FileNotFoundError(f"Catalog file not found: {filepath}")

        ingredients = self._load_ingredients()
        recipes_df = pd.read_csv(self.recipes_file)
        links_df = pd.read_csv(self.recipe_ingredients_file)

        _require_columns(recipes_df, RECIPE_COLUMNS, self.recipes_file)
        _require_columns(links_df, RECIPE_INGREDIENT_COLUMNS, self.recipe_ingredients_file)

        if "version" not in recipes_df.columns:
            recipes_df["version"] = 1

        # Highest version per recipe id
        if not recipes_df.empty:
            recipes_df = recipes_df.loc[recipes_df.groupby("id")["version"].idxmax()]

        recipes = []
        for _, row in recipes_df.iterrows():
            recipe_id = int(row["id"])
            version = int(row["version"])

            rows = links_df[links_df["recipe_id"] == recipe_id]
            if "version" in links_df.columns:
                rows = rows[rows["version"] == version]

            recipe_ingredients = []
            for _, link in rows.iterrows():
                ingredient_id = int(link["ingredient_id"])
                ingredient = ingredients.get(ingredient_id)
                if ingredient is None:
                    raise ValueError(
                        f"Recipe {recipe_id} v{version} references unknown ingredient {ingredient_id}"
                    )
                recipe_ingredients.append(
                    RecipeIngredient(
                        ingredient=ingredient,
                        quantity=float(link["quantity"]),
                        unit=_as_str(link["unit"]),
                    )
                )

            recipes.append(
                Recipe(
                    recipe_id=recipe_id,
                    title=_as_str(row["title"]),
                    description=_as_str(row.get("description")),
                    servings=int(row["servings"]),
                    ingredients=recipe_ingredients,
                    is_breakfast=_as_bool(row.get("is_breakfast", False)),
                    is_lunch=_as_bool(row.get("is_lunch", False)),
                    is_dinner=_as_bool(row.get("is_dinner", False)),
                    is_snack=_as_bool(row.get("is_snack", False)),
                    version=version,
                    preparation_time=_as_int(row.get("preparation_time")),
                )
            )

        logger.info(
            "Loaded %d recipes and %d ingredients from %s",
            len(recipes), len(ingredients), self.recipes_file.parent,
        )
        self._recipes = recipes
        return recipes

    def _load_ingredients(self) -> Dict[int, Ingredient]:
        df = pd.read_csv(self.ingredients_file)
        _require_columns(df, INGREDIENT_COLUMNS, self.ingredients_file)

        ingredients = {}
        for _, row in df.iterrows():
            nutrients = NutrientProfile.from_dict(
                {name: row.get(name, 0.0) for name in NUTRIENT_FIELDS if not pd.isna(row.get(name))}
            )
            quantity = row.get("quantity", 1.0)
            ingredient = Ingredient(
                ingredient_id=int(row["id"]),
                name=_as_str(row["name"]),
                price_per_unit=int(row["price_per_unit"]),
                unit_class=_as_str(row["unit_class"]).lower(),
                quantity_unit=_as_str(row.get("quantity_unit")),
                quantity=1.0 if pd.isna(quantity) else float(quantity),
                price_unit=_as_str(row.get("price_unit")),
                nutrients=nutrients,
            )
            ingredients[ingredient.ingredient_id] = ingredient
        return ingredients

    @property
    def recipes(self) -> List[Recipe]:
        """Current recipes (loads if needed)."""
        if self._recipes is None:
            self.load()
        return self._recipes

    # =========================================================================
    # RecipeCatalog
    # =========================================================================

    def get_by_category(self, category) -> List[Recipe]:
        category = MealCategory.parse(category)
        matches = [r for r in self.recipes if r.matches(category)]
        if not matches:
            raise RecipeNotFound(category.value)
        return matches
