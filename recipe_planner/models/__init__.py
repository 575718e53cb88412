"""
Data models for the recipe planner.
"""
from .nutrients import NutrientProfile, NUTRIENT_FIELDS
from .recipe import MealCategory, Ingredient, RecipeIngredient, Recipe
from .meal_plan import MealPlan, MealPlanParams, validate_servings

__all__ = [
    # Nutrients
    'NutrientProfile',
    'NUTRIENT_FIELDS',
    # Recipe models
    'MealCategory',
    'Ingredient',
    'RecipeIngredient',
    'Recipe',
    # Planning models
    'MealPlan',
    'MealPlanParams',
    'validate_servings',
]
