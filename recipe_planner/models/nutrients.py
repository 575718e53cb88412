# recipe_planner/models/nutrients.py
"""
Nutrient profile model.

A NutrientProfile holds the six tracked nutrient values. Profiles are
additive and scale linearly, and convert to a numpy vector in the
fixed NUTRIENT_FIELDS order for vectorised scoring.
"""
from dataclasses import dataclass, fields
from typing import Dict, Any

import numpy as np

# Canonical field order for vector conversion
NUTRIENT_FIELDS = ("calories", "protein", "fat", "carbs", "fiber", "sugar")


@dataclass
class NutrientProfile:
    """
    Six non-negative nutrient values.

    Used both for ingredient nutrient declarations (per reference
    quantity) and for plan-level targets, floors and ceilings.

    Example:
        >>> a = NutrientProfile(calories=200, protein=10)
        >>> (a + a.scaled(0.5)).calories
        300.0
    """
    calories: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0

    def __post_init__(self):
        for f in fields(self):
            value = float(getattr(self, f.name))
            if value < 0:
                raise ValueError(f"Nutrient '{f.name}' must be non-negative, got {value}")
            setattr(self, f.name, value)

    def as_array(self) -> np.ndarray:
        """Vector of values in NUTRIENT_FIELDS order."""
        return np.array([getattr(self, name) for name in NUTRIENT_FIELDS], dtype=float)

    @classmethod
    def from_array(cls, values) -> 'NutrientProfile':
        """Build from a length-6 sequence in NUTRIENT_FIELDS order."""
        values = np.asarray(values, dtype=float)
        if values.shape != (len(NUTRIENT_FIELDS),):
            raise ValueError(
                f"Expected {len(NUTRIENT_FIELDS)} nutrient values, got shape {values.shape}"
            )
        return cls(**{name: float(v) for name, v in zip(NUTRIENT_FIELDS, values)})

    def scaled(self, factor: float) -> 'NutrientProfile':
        """Return a new profile with every field multiplied by factor."""
        return NutrientProfile.from_array(self.as_array() * factor)

    def __add__(self, other: 'NutrientProfile') -> 'NutrientProfile':
        if not isinstance(other, NutrientProfile):
            return NotImplemented
        return NutrientProfile.from_array(self.as_array() + other.as_array())

    def to_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in NUTRIENT_FIELDS}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NutrientProfile':
        """
        Create from dictionary format.

        Missing keys default to 0.0; unknown keys are ignored.

        Args:
            data: Mapping of nutrient name -> value

        Returns:
            NutrientProfile instance
        """
        data = data or {}
        return cls(**{name: float(data.get(name, 0.0) or 0.0) for name in NUTRIENT_FIELDS})
