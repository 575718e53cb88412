# recipe_planner/errors.py
"""
Exception types raised by the meal-plan optimization engine.

All planner errors derive from PlannerError, which is itself a
ValueError so callers that already guard planning calls with
``except ValueError`` keep working.

Classes:
    PlannerError          - Base class
    EmptyCatalog          - No candidate recipes for a meal category
    RecipeNotFound        - Catalog lookup matched nothing
    UnsupportedUnitClass  - Ingredient unit class is not mass/volume
    UnitConversionError   - No conversion rate for a unit pair
    InvalidServings       - Zero or negative serving counts
    EmptyRecipe           - Recipe with no ingredients used in search
"""


class PlannerError(ValueError):
    """Base class for all meal planner errors."""


class EmptyCatalog(PlannerError):
    """No recipes are available to seed a day's population."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"No recipes available for meal category '{category}'")


class RecipeNotFound(PlannerError):
    """
    Catalog lookup returned no matching recipes.

    Signals an empty result, as opposed to a failure of the
    catalog itself (which propagates as whatever the backend raised).
    """

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"No recipes found for meal category '{category}'")


class UnsupportedUnitClass(PlannerError):
    """Unit class is neither 'mass' nor 'volume'."""

    def __init__(self, unit_class: str, ingredient: str = ""):
        self.unit_class = unit_class
        self.ingredient = ingredient
        where = f" for ingredient '{ingredient}'" if ingredient else ""
        super().__init__(f"Unsupported unit class '{unit_class}'{where}")


class UnitConversionError(PlannerError):
    """The converter has no rate for the requested unit pair."""

    def __init__(self, from_unit: str, to_unit: str, unit_class: str):
        self.from_unit = from_unit
        self.to_unit = to_unit
        self.unit_class = unit_class
        super().__init__(
            f"Unsupported {unit_class} conversion: '{from_unit}' -> '{to_unit}'"
        )


class InvalidServings(PlannerError):
    """Serving count on a meal plan or recipe is zero or negative."""


class EmptyRecipe(PlannerError):
    """A recipe with an empty ingredient list was used in search."""
