# recipe_planner/data/settings_manager.py
"""
Settings manager for planner parameters.

Manages settings.json, which holds the search configuration and the
default nutrition targets:

{
    "planner": { ...see PlannerConfig... },
    "params": {
        "servings": 2,
        "target":  {"calories": 600, "protein": 30, ...},
        "min":     {"calories": 400, ...},
        "max":     {"calories": 800, ...},
        "target_budget": 500,
        "max_budget": 800
    }
}
"""
import json
from pathlib import Path
from typing import Optional, Dict, Any, List

from recipe_planner.generators.ga_config import PlannerConfig
from recipe_planner.models import MealPlanParams, NUTRIENT_FIELDS


class SettingsManager:
    """
    Loads and validates the settings file.

    load() never raises for bad content; problems are collected in
    validation_errors and is_valid stays False.
    """

    def __init__(self, filepath: Path):
        """
        Args:
            filepath: Path to settings JSON file
        """
        self.filepath = Path(filepath)
        self._settings: Optional[Dict[str, Any]] = None
        self._planner_config: Optional[PlannerConfig] = None
        self._params: Optional[MealPlanParams] = None
        self._validation_errors: List[str] = []
        self._is_valid = False

    def load(self) -> bool:
        """
        Load and validate settings from disk.

        Returns:
            True if loaded and valid, False otherwise
        """
        self._validation_errors.clear()
        self._is_valid = False
        self._settings = None
        self._planner_config = None
        self._params = None

        if not self.filepath.exists():
            self._validation_errors.append(f"Settings file not found: {self.filepath}")
            return False

        try:
            with open(self.filepath, 'r', encoding='utf-8') as f:
                self._settings = json.load(f)
        except json.JSONDecodeError as e:
            self._validation_errors.append(f"Invalid JSON in settings file: {e}")
            return False
        except OSError as e:
            self._validation_errors.append(f"Error reading settings file: {e}")
            return False

        self._validate_structure()

        if self._validation_errors:
            self._settings = None
            return False

        self._is_valid = True
        return True

    def _validate_structure(self) -> None:
        if not isinstance(self._settings, dict):
            self._validation_errors.append("Settings root must be a JSON object")
            return

        try:
            self._planner_config = PlannerConfig.from_config(self._settings.get("planner", {}))
        except ValueError as e:
            self._validation_errors.append(str(e))

        params = self._settings.get("params")
        if not isinstance(params, dict):
            self._validation_errors.append("Missing 'params' block")
            return

        for key in ("target", "min", "max"):
            block = params.get(key, {})
            if not isinstance(block, dict):
                self._validation_errors.append(f"params.{key} must be an object")
                continue
            unknown = sorted(set(block) - set(NUTRIENT_FIELDS))
            if unknown:
                self._validation_errors.append(
                    f"params.{key} has unknown nutrients: {', '.join(unknown)}"
                )

        try:
            self._params = MealPlanParams.from_dict(params)
        except (ValueError, TypeError) as e:
            self._validation_errors.append(str(e))
            return

        if self._params.servings <= 0:
            self._validation_errors.append(
                f"params.servings must be positive, got {self._params.servings}"
            )

        minimum = self._params.minimum.as_array()
        maximum = self._params.maximum.as_array()
        for name, low, high in zip(NUTRIENT_FIELDS, minimum, maximum):
            if low > high:
                self._validation_errors.append(f"params: min {name} ({low}) > max {name} ({high})")

    @property
    def is_valid(self) -> bool:
        """Check if settings are loaded and valid."""
        return self._is_valid

    @property
    def validation_errors(self) -> List[str]:
        """Get list of validation error messages."""
        return self._validation_errors.copy()

    def get_error_message(self) -> str:
        """Formatted error message for display."""
        if not self._validation_errors:
            return ""
        return "Settings errors:\n" + "\n".join(f"  - {e}" for e in self._validation_errors)

    @property
    def planner_config(self) -> PlannerConfig:
        self._require_valid()
        return self._planner_config

    @property
    def params(self) -> MealPlanParams:
        self._require_valid()
        return self._params

    def _require_valid(self) -> None:
        if not self._is_valid:
            raise ValueError(self.get_error_message() or "Settings not loaded")
