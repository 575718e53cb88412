# recipe_planner/generators/ga_scoring.py
"""
Fitness scoring for the genetic meal planner.

Turns one serving-adjusted meal plan into a scalar fitness where
LOWER is better. For each of the six nutrients:

- below the floor:   penalty = 2 x (floor - total)
- above the ceiling: penalty = 2 x (total - ceiling)
- otherwise:         penalty = |target - total|

The fitness is the sum of the six penalties minus the plan's total
ingredient cost.

Ingredient quantities are normalized through the unit converter:
to the ingredient's nutrient unit (divided by its reference quantity)
for nutrients, and to its price unit for cost.

Classes:
    FitnessResult    - Detailed scoring breakdown
    FitnessEvaluator - Computes fitness for meal plans
"""
from dataclasses import dataclass, field
from typing import Dict, Tuple

import numpy as np

from recipe_planner.errors import UnsupportedUnitClass
from recipe_planner.models import MealPlan, MealPlanParams, NutrientProfile, NUTRIENT_FIELDS
from recipe_planner.models.meal_plan import validate_servings
from recipe_planner.units import UNIT_CLASSES

# Out-of-band penalty multiplier
BOUND_PENALTY_FACTOR = 2.0


def nutrient_penalty(value: float, target: float, minimum: float, maximum: float) -> float:
    """
    Penalty for one nutrient total.

    Continuous at the band edges: at value == minimum the in-band
    branch applies, giving |target - minimum|.

    Args:
        value: Plan total for the nutrient
        target: Desired value
        minimum: Floor
        maximum: Ceiling

    Returns:
        Non-negative penalty
    """
    if value < minimum:
        return BOUND_PENALTY_FACTOR * (minimum - value)
    if value > maximum:
        return BOUND_PENALTY_FACTOR * (value - maximum)
    return abs(target - value)


def nutrient_penalties(totals: np.ndarray, target: np.ndarray,
                       minimum: np.ndarray, maximum: np.ndarray) -> np.ndarray:
    """Vectorised nutrient_penalty over aligned nutrient vectors."""
    return np.where(
        totals < minimum,
        BOUND_PENALTY_FACTOR * (minimum - totals),
        np.where(
            totals > maximum,
            BOUND_PENALTY_FACTOR * (totals - maximum),
            np.abs(target - totals),
        ),
    )


@dataclass
class FitnessResult:
    """
    Detailed scoring breakdown for one meal plan.

    Attributes:
        fitness: Sum of penalties minus cost (lower is better)
        totals: Plan nutrient totals
        cost: Plan ingredient cost, in the smallest currency unit
        nutrient_scores: Per-nutrient breakdown
            {
                "protein": {
                    "value": 42.0,
                    "target": 45.0,
                    "min": 35.0,
                    "max": 55.0,
                    "penalty": 3.0,
                },
                ...
            }
    """
    fitness: float = 0.0
    totals: NutrientProfile = field(default_factory=NutrientProfile)
    cost: float = 0.0
    nutrient_scores: Dict[str, Dict[str, float]] = field(default_factory=dict)

    @property
    def total_penalty(self) -> float:
        return sum(detail["penalty"] for detail in self.nutrient_scores.values())


class FitnessEvaluator:
    """
    Computes fitness for meal plans against one parameter set.

    Pure with respect to its inputs: holds only the (read-only)
    parameters and converter, so one instance is shared by all
    evaluation workers.
    """

    def __init__(self, params: MealPlanParams, converter):
        """
        Args:
            params: Servings, target, floor and ceiling nutrients
            converter: UnitConverter for quantity normalization
        """
        self.params = params
        self.converter = converter

        self._target = params.target.as_array()
        self._minimum = params.minimum.as_array()
        self._maximum = params.maximum.as_array()

    def evaluate(self, plan: MealPlan) -> float:
        """
        Scalar fitness for a plan (lower is better).

        Raises:
            InvalidServings: Requested or recipe servings <= 0
            UnsupportedUnitClass: Ingredient unit class not mass/volume
            UnitConversionError: Ingredient unit cannot be converted
        """
        totals, cost = self._totals_vector(plan)
        penalties = nutrient_penalties(totals, self._target, self._minimum, self._maximum)
        return float(penalties.sum() - cost)

    def score(self, plan: MealPlan) -> FitnessResult:
        """Full breakdown for a plan; fitness equals evaluate(plan)."""
        totals, cost = self._totals_vector(plan)
        penalties = nutrient_penalties(totals, self._target, self._minimum, self._maximum)

        nutrient_scores = {}
        for i, name in enumerate(NUTRIENT_FIELDS):
            nutrient_scores[name] = {
                "value": float(totals[i]),
                "target": float(self._target[i]),
                "min": float(self._minimum[i]),
                "max": float(self._maximum[i]),
                "penalty": float(penalties[i]),
            }

        return FitnessResult(
            fitness=float(penalties.sum() - cost),
            totals=NutrientProfile.from_array(totals),
            cost=cost,
            nutrient_scores=nutrient_scores,
        )

    def calculate_totals(self, plan: MealPlan) -> Tuple[NutrientProfile, float]:
        """
        Nutrient totals and cost for a plan.

        Returns:
            (NutrientProfile, cost)
        """
        totals, cost = self._totals_vector(plan)
        return NutrientProfile.from_array(totals), cost

    def _totals_vector(self, plan: MealPlan) -> Tuple[np.ndarray, float]:
        scaling = validate_servings(self.params.servings, plan.recipe.servings)

        totals = np.zeros(len(NUTRIENT_FIELDS), dtype=float)
        cost = 0.0

        for recipe_ingredient in plan.recipe.ingredients:
            ingredient = recipe_ingredient.ingredient
            unit_class = ingredient.unit_class
            if unit_class not in UNIT_CLASSES:
                raise UnsupportedUnitClass(unit_class, ingredient.name)

            default_unit = self.converter.default_unit(unit_class)
            quantity = recipe_ingredient.quantity * scaling

            nutrient_unit = ingredient.quantity_unit or default_unit
            nutrient_amount = self.converter.convert(
                quantity, recipe_ingredient.unit, nutrient_unit, unit_class
            )
            reference = ingredient.quantity if ingredient.quantity > 0 else 1.0
            totals += ingredient.nutrients.as_array() * (nutrient_amount / reference)

            price_unit = ingredient.price_unit or default_unit
            price_amount = self.converter.convert(
                quantity, recipe_ingredient.unit, price_unit, unit_class
            )
            cost += ingredient.price_per_unit * price_amount

        return totals, cost
