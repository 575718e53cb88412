# recipe_planner/units/unit_converter.py
"""
Measurement unit conversion for recipe ingredients.

Static rate tables for the two supported unit classes ("mass" and
"volume"), plus the default unit each class is normalized to before
scaling and scoring. Unit names are matched case-insensitively.

The converter holds no per-call state and is safe to share between
worker threads.
"""
from typing import Dict, List

from recipe_planner.errors import UnitConversionError, UnsupportedUnitClass

MASS = "mass"
VOLUME = "volume"
UNIT_CLASSES = (MASS, VOLUME)


MASS_CONVERSION_RATES: Dict[str, Dict[str, float]] = {
    "kg": {"g": 1000, "lb": 2.20462, "oz": 35.274},
    "g": {"kg": 0.001, "lb": 0.00220462, "oz": 0.035274},
    "lb": {"g": 453.592, "kg": 0.453592, "oz": 16},
    "oz": {"g": 28.3495, "kg": 0.0283495, "lb": 0.0625},
}

VOLUME_CONVERSION_RATES: Dict[str, Dict[str, float]] = {
    "l": {
        "ml": 1000, "fl-oz": 33.814, "cups": 4.22675, "pt": 2.11338,
        "qt": 1.05669, "gal": 0.264172, "tsp": 202.884, "tbsp": 67.628,
    },
    "ml": {
        "l": 0.001, "fl-oz": 0.033814, "cups": 0.00422675, "pt": 0.00211338,
        "qt": 0.00105669, "gal": 0.000264172, "tsp": 0.202884, "tbsp": 0.067628,
    },
    "fl-oz": {
        "l": 0.0295735, "ml": 29.5735, "cups": 0.125, "pt": 0.0625,
        "qt": 0.03125, "gal": 0.0078125, "tsp": 6, "tbsp": 2,
    },
    "cups": {
        "l": 0.236588, "ml": 236.588, "fl-oz": 8, "pt": 0.5,
        "qt": 0.25, "gal": 0.0625, "tsp": 48, "tbsp": 16,
    },
    "pt": {
        "l": 0.473176, "ml": 473.176, "fl-oz": 16, "cups": 2,
        "qt": 0.5, "gal": 0.125, "tsp": 96, "tbsp": 32,
    },
    "qt": {
        "l": 0.946353, "ml": 946.353, "fl-oz": 32, "cups": 4,
        "pt": 2, "gal": 0.25, "tsp": 192, "tbsp": 64,
    },
    "gal": {
        "l": 3.78541, "ml": 3785.41, "fl-oz": 128, "cups": 16,
        "pt": 8, "qt": 4, "tsp": 768, "tbsp": 256,
    },
    "tsp": {
        "l": 0.00492892, "ml": 4.92892, "fl-oz": 0.166667, "cups": 0.0208333,
        "pt": 0.0104167, "qt": 0.00520833, "gal": 0.00130208, "tbsp": 0.333333,
    },
    "tbsp": {
        "l": 0.0147868, "ml": 14.7868, "fl-oz": 0.5, "cups": 0.0625,
        "pt": 0.03125, "qt": 0.015625, "gal": 0.00390625, "tsp": 3,
    },
}


def normalize_unit(unit: str) -> str:
    """Lowercase and strip a unit name ("L " -> "l")."""
    return (unit or "").strip().lower()


class UnitConverter:
    """
    Converts ingredient quantities between units of the same class.

    Example:
        >>> converter = UnitConverter("kg", "l")
        >>> converter.convert(1, "kg", "g", "mass")
        1000
        >>> converter.default_unit("volume")
        'l'
    """

    def __init__(self, default_mass_unit: str = "kg", default_volume_unit: str = "l"):
        self.default_mass_unit = normalize_unit(default_mass_unit)
        self.default_volume_unit = normalize_unit(default_volume_unit)
        self._rates = {
            MASS: MASS_CONVERSION_RATES,
            VOLUME: VOLUME_CONVERSION_RATES,
        }

        for unit_class, unit in ((MASS, self.default_mass_unit),
                                 (VOLUME, self.default_volume_unit)):
            if unit not in self._rates[unit_class]:
                raise ValueError(f"Unknown default {unit_class} unit '{unit}'")

    def convert(self, quantity: float, from_unit: str, to_unit: str, unit_class: str) -> float:
        """
        Convert a quantity between two units of one unit class.

        Args:
            quantity: Amount in from_unit
            from_unit: Source unit (e.g., "kg")
            to_unit: Target unit (e.g., "g")
            unit_class: "mass" or "volume"

        Returns:
            Amount expressed in to_unit

        Raises:
            UnsupportedUnitClass: unit_class is not mass/volume
            UnitConversionError: No rate exists for the pair
        """
        rates = self._rates.get(unit_class)
        if rates is None:
            raise UnsupportedUnitClass(unit_class)

        source = normalize_unit(from_unit)
        target = normalize_unit(to_unit)
        if source == target:
            return quantity

        rate = rates.get(source, {}).get(target)
        if rate is None:
            raise UnitConversionError(from_unit, to_unit, unit_class)

        return quantity * rate

    def default_unit(self, unit_class: str) -> str:
        """Default unit for a class, or "" if the class is unrecognized."""
        if unit_class == MASS:
            return self.default_mass_unit
        if unit_class == VOLUME:
            return self.default_volume_unit
        return ""

    def available_units(self, unit_class: str) -> List[str]:
        """All units known for a class (empty list for unknown classes)."""
        return sorted(self._rates.get(unit_class, {}))

    def is_valid_unit(self, unit: str, unit_class: str) -> bool:
        return normalize_unit(unit) in self._rates.get(unit_class, {})
